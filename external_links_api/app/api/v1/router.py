"""
Top‑level router for version 1 of the API.

When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import external_links

router = APIRouter()

router.include_router(external_links.router, prefix="/external-links", tags=["external-links"])
