"""Location Share API client.

A thin wrapper around the Location Share HTTP API for bots, scripts and
integration checks.  It uses the ``requests`` library internally and
exposes one method per endpoint:

* :meth:`register_user` – create a user from a name and phone number.
* :meth:`login` – look a user up by phone number.
* :meth:`get_user` – fetch a user by id.
* :meth:`add_friend` – add a friend by their phone number.
* :meth:`list_friends` – fetch the friend summaries of a user.
* :meth:`start_journey` / :meth:`end_journey` – toggle location sharing.
* :meth:`update_current_location` – move the current position.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is ``None`` (or empty) and ``error`` is a
dictionary with keys ``status_code`` and ``message``, where the message
is the ``msg`` field of the API's error body when present.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Coordinates = Dict[str, Optional[float]]
Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class FriendsAPI:
    """Client for the Location Share API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:9090``.
            prefix: Path prefix the API is mounted under.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = f"{base_url.rstrip('/')}/{prefix.strip('/')}".rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``).
            path: Path relative to the API prefix (e.g. ``/users/1``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docs.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(method=method, url=url, json=json_body, timeout=self.timeout)
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    body = exc.response.json()
                    message = body.get("msg", "") if isinstance(body, dict) else str(body)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _unwrap(result: Result, key: str, default: Any = None) -> Result:
        data, error = result
        if error:
            return default, error
        if isinstance(data, dict) and key in data:
            return data[key], None
        return default, {"status_code": None, "message": f"Response has no '{key}' field"}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def register_user(self, name: str, phone_number: str, **extra: Any) -> Result:
        """Register a user; ``data`` is the created user."""
        body = {"name": name, "phoneNumber": phone_number, **extra}
        return self._unwrap(self._request("POST", "/users", json_body=body), "user")

    def login(self, phone_number: str) -> Result:
        return self._unwrap(self._request("GET", f"/login/{phone_number}"), "user")

    def get_user(self, user_id: int) -> Result:
        return self._unwrap(self._request("GET", f"/users/{user_id}"), "user")

    # ------------------------------------------------------------------
    # Friends
    # ------------------------------------------------------------------
    def add_friend(self, user_id: int, friend_phone_number: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Add the user with ``friend_phone_number`` to ``user_id``'s friends.

        Returns:
            A tuple ``(acknowledged, error)``.
        """
        body = {"phoneNumber": friend_phone_number}
        result = self._request("PATCH", f"/users/{user_id}/friends", json_body=body)
        return self._unwrap(result, "acknowledged", False)

    def list_friends(self, user_id: int) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._unwrap(self._request("GET", f"/users/{user_id}/friends"), "friendList", [])

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------
    def start_journey(self, user_id: int, start: Coordinates, end: Coordinates) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Begin sharing a journey from ``start`` to ``end``."""
        body = {"status": True, "start": start, "end": end}
        return self._unwrap(self._request("PATCH", f"/users/{user_id}/location", json_body=body), "acknowledged", False)

    def end_journey(self, user_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        body = {"status": False}
        return self._unwrap(self._request("PATCH", f"/users/{user_id}/location", json_body=body), "acknowledged", False)

    def update_current_location(self, user_id: int, current: Coordinates) -> Tuple[bool, Optional[Dict[str, Any]]]:
        body = {"current": current}
        return self._unwrap(self._request("PATCH", f"/users/{user_id}/location", json_body=body), "acknowledged", False)

    def health(self) -> Result:
        return self._request("GET", "/health")
