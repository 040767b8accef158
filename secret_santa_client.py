"""Secret Santa API client.

A thin wrapper around the HTTP API served by ``secret_santa_api`` for
scripts, integrations and end-to-end checks.  It uses the ``requests``
library and mirrors the server routes one method per operation:

* users: :meth:`user_exists`, :meth:`get_user`, :meth:`create_user`,
  :meth:`delete_user`
* gift exchanges: :meth:`add_gift_exchange`, :meth:`rename_gift_exchange`,
  :meth:`delete_gift_exchange`
* drawings: :meth:`add_drawing`, :meth:`delete_drawing`
* participants: :meth:`add_participant`, :meth:`update_participant`,
  :meth:`delete_participant`
* restrictions: :meth:`add_restriction`, :meth:`delete_restriction`

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is ``None`` and ``error`` is a dictionary
with ``status_code``, ``message`` and the decoded response ``body`` (for
example the ``modifiedObj`` counts of an update that changed nothing).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class SecretSantaAPI:
    """Client for the Secret Santa backend."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including any mount prefix,
                e.g. ``https://santa.example.com``.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/user``).
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
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            response = exc.response
            status = response.status_code if response is not None else None
            body: Any = None
            message = ""
            if response is not None:
                try:
                    body = response.json()
                except ValueError:
                    message = response.text
                else:
                    if isinstance(body, dict):
                        message = body.get("Error") or body.get("detail") or ""
                    message = message or str(body)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message, "body": body}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "body": None}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def user_exists(self, email: str) -> Result:
        return self._request("GET", f"/user/exists/{quote(email, safe='@')}")

    def get_user(self, email: str) -> Result:
        return self._request("GET", f"/user/{quote(email, safe='@')}")

    def create_user(self, email: str) -> Result:
        return self._request("POST", "/user", json_body={"email": email})

    def delete_user(self, user_id: str) -> Result:
        """Delete a user.  Success carries no data."""
        return self._request("DELETE", "/user", json_body={"_id": user_id})

    # ------------------------------------------------------------------
    # Gift exchanges
    # ------------------------------------------------------------------
    def add_gift_exchange(self, user_id: str, name: str) -> Result:
        return self._request("POST", "/giftExchange", json_body={"userId": user_id, "name": name})

    def rename_gift_exchange(self, user_id: str, gift_exchange_id: str, new_name: str) -> Result:
        return self._request(
            "PATCH",
            "/giftExchange",
            json_body={"userId": user_id, "giftExchangeId": gift_exchange_id, "newName": new_name},
        )

    def delete_gift_exchange(self, user_id: str, gift_exchange_id: str) -> Result:
        return self._request(
            "DELETE",
            "/giftExchange",
            json_body={"userId": user_id, "giftExchangeId": gift_exchange_id},
        )

    # ------------------------------------------------------------------
    # Drawings
    # ------------------------------------------------------------------
    def add_drawing(self, user_id: str, gift_exchange_id: str, year: int) -> Result:
        return self._request(
            "POST",
            "/drawing",
            json_body={"userId": user_id, "giftExchangeId": gift_exchange_id, "drawingYear": year},
        )

    def delete_drawing(self, user_id: str, gift_exchange_id: str, drawing_id: str) -> Result:
        return self._request(
            "DELETE",
            "/drawing",
            json_body={"userId": user_id, "giftExchangeId": gift_exchange_id, "drawingId": drawing_id},
        )

    # ------------------------------------------------------------------
    # Participants and restrictions
    # ------------------------------------------------------------------
    @staticmethod
    def _participant_target(
        user_id: str, gift_exchange_id: str, drawing_id: str, participant_id: Optional[str] = None
    ) -> Dict[str, Any]:
        target = {"userId": user_id, "giftExchangeId": gift_exchange_id, "drawingId": drawing_id}
        if participant_id is not None:
            target["participantId"] = participant_id
        return target

    def add_participant(
        self,
        user_id: str,
        gift_exchange_id: str,
        drawing_id: str,
        name: str,
        email: Optional[str] = None,
    ) -> Result:
        participant: Dict[str, Any] = {"name": name}
        if email is not None:
            participant["email"] = email
        body = self._participant_target(user_id, gift_exchange_id, drawing_id)
        body["newParticipant"] = participant
        return self._request("POST", "/participant", json_body=body)

    def update_participant(
        self,
        user_id: str,
        gift_exchange_id: str,
        drawing_id: str,
        participant_id: str,
        updates: Dict[str, Any],
    ) -> Result:
        """Send ``updates`` (any of ``name``, ``email``, ``secretDraw``) as given.

        Keys are forwarded even when their value is empty, so
        ``{"secretDraw": ""}`` clears an assignment.
        """
        body = self._participant_target(user_id, gift_exchange_id, drawing_id, participant_id)
        body["updates"] = dict(updates)
        return self._request("PATCH", "/participant", json_body=body)

    def delete_participant(
        self, user_id: str, gift_exchange_id: str, drawing_id: str, participant_id: str
    ) -> Result:
        body = self._participant_target(user_id, gift_exchange_id, drawing_id, participant_id)
        return self._request("DELETE", "/participant", json_body=body)

    def add_restriction(
        self,
        user_id: str,
        gift_exchange_id: str,
        drawing_id: str,
        participant_id: str,
        restriction_name: str,
    ) -> Result:
        body = self._participant_target(user_id, gift_exchange_id, drawing_id, participant_id)
        body["restrictionName"] = restriction_name
        return self._request("POST", "/restriction", json_body=body)

    def delete_restriction(
        self,
        user_id: str,
        gift_exchange_id: str,
        drawing_id: str,
        participant_id: str,
        restriction_name: str,
    ) -> Result:
        body = self._participant_target(user_id, gift_exchange_id, drawing_id, participant_id)
        body["restrictionName"] = restriction_name
        return self._request("DELETE", "/restriction", json_body=body)
