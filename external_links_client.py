"""External Links API client.

This module defines a small client wrapper around the external links
REST API.  Dashboards and provisioning scripts use it to read the links
configured for a cluster and to manage them.  The client uses the
``requests`` library internally.

The client exposes one method per endpoint:

* :meth:`list_tools` – return the available monitoring tools.
* :meth:`list_links` – return the links, optionally for one cluster.
* :meth:`create_links` – create one or more links.
* :meth:`update_link` – update a link and its cluster set.
* :meth:`delete_link` – soft‑delete a link.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code`` and ``message`` keys.

Authentication is optional: initialise the client with
``api_key='<token>'`` to send an ``Authorization: Bearer`` header.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ExternalLinksAPI:
    """Client for interacting with the external links API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        prefix: str = "/api/v1/external-links",
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``https://links.example.com``.
            api_key: Optional bearer token.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            prefix: Path under which the external links routes are mounted.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.prefix = "/" + prefix.strip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str = "", *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the external links prefix (e.g. ``/tools``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{self.prefix}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                message = self._error_message(exc.response)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the user message from the service's error envelope."""
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            errors = body.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                return str(errors[0].get("userMessage") or errors[0].get("internalMessage") or "")
            return str(body.get("detail") or body.get("message") or body)
        return str(body)

    @staticmethod
    def _succeeded(data: Any) -> bool:
        # Proxies in front of the service may answer 2xx with a non-object body.
        return isinstance(data, dict) and bool(data.get("success"))

    # ------------------------------------------------------------------
    # Monitoring tools
    # ------------------------------------------------------------------
    def list_tools(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/tools")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------
    def list_links(self, cluster_id: int = 0) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve active links; ``cluster_id=0`` returns all of them."""
        data, error = self._request("GET", params={"clusterId": cluster_id})
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def create_links(self, links: List[Dict[str, Any]]) -> Tuple[bool, Optional[Error]]:
        """Create links.

        Args:
            links: Items with ``name``, ``url``, ``monitoringToolId`` and
                ``clusterIds`` keys.
        """
        data, error = self._request("POST", json_body=links)
        if error:
            return False, error
        return self._succeeded(data), None

    def update_link(self, link: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        """Update a link; ``link`` must carry its ``id``."""
        data, error = self._request("PUT", json_body=link)
        if error:
            return False, error
        return self._succeeded(data), None

    def delete_link(self, link_id: Any) -> Tuple[bool, Optional[Error]]:
        data, error = self._request("DELETE", f"/{link_id}")
        if error:
            return False, error
        return self._succeeded(data), None
