"""
Version 1 of the API.

Breaking changes to the external links payloads should be introduced
in a new version subpackage (e.g. ``v2``) to preserve backwards
compatibility for dashboard clients.
"""
