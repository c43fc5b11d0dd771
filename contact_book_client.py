"""Contact Book API client.

This module defines a small client wrapper around the Contact Book
REST API.  It uses the ``requests`` library internally and exposes
one method per operation:

* :meth:`list_contacts` – return every contact, newest first.
* :meth:`search_contacts` – search contacts by name or email.
* :meth:`create_contact` – add a new contact.
* :meth:`update_contact` – replace an existing contact.
* :meth:`delete_contact` – remove a contact.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with the keys ``status_code`` and ``message``.  The
message is taken from the ``error`` field of the server's response
when present.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ContactBookAPI:
    """Client for interacting with the contact book API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:5000``.
                The ``/api/contacts`` path is appended by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
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
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Contact operations
    # ------------------------------------------------------------------
    def list_contacts(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all contacts, newest first."""
        data, error = self._request("GET", "/api/contacts")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def search_contacts(self, query: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve contacts whose name or email contains ``query``."""
        data, error = self._request("GET", "/api/contacts/search", params={"query": query})
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def create_contact(self, name: str, email: str, phone: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a contact and return the stored record."""
        payload = {"name": name, "email": email, "phone": phone}
        data, error = self._request("POST", "/api/contacts", json_body=payload)
        if error:
            return None, error
        return (data or {}).get("contact"), None

    def update_contact(
        self, contact_id: Any, name: str, email: str, phone: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace a contact and return the updated record."""
        payload = {"name": name, "email": email, "phone": phone}
        data, error = self._request("PUT", f"/api/contacts/{contact_id}", json_body=payload)
        if error:
            return None, error
        return (data or {}).get("contact"), None

    def delete_contact(self, contact_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a contact.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/api/contacts/{contact_id}")
        if error:
            return False, error
        return True, None
