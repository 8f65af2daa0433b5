"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage records in ``models`` to
decouple the API representation (camelCase JSON keys) from
persistence.
"""
