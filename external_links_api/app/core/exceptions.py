"""
Error types raised by the service layer.

Every error carries an ``internal_message`` (for logs and operators)
and a ``user_message`` (safe to show to API clients) along with the
HTTP status the API layer should answer with.  The exception handlers
registered in ``main`` turn these into the JSON error payload.
"""

from typing import Optional

from fastapi import status


class ApiError(Exception):
    """Base class for errors surfaced through the API."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        internal_message: str,
        user_message: Optional[str] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(internal_message)
        self.internal_message = internal_message
        self.user_message = user_message or internal_message
        self.code = code or str(self.http_status)


class PersistenceError(ApiError):
    """A store call failed; the surrounding transaction was rolled back."""


class LinkNotFoundError(ApiError, LookupError):
    """The referenced external link does not exist or is no longer active."""

    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, link_id: int) -> None:
        super().__init__(
            f"external link {link_id} does not exist",
            "external link does not exist",
        )
        self.link_id = link_id
