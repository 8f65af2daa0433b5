"""
Top‑level package for the External Links API.

This file makes ``external_links_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``external_links_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
