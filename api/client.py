"""Main client for the BaseLine Academy REST API."""

import logging
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from models import (
    Announcement,
    Player,
    Registration,
    Tournament,
    attendance_from_api,
    attendance_to_api,
)
from .exceptions import AcademyAPIError, AcademyAuthError, AcademyConnectionError, RequestCancelled

logger = logging.getLogger(__name__)


class CancelToken:
    """Abort signal handed to the fetch boundary.

    The client checks it before sending a request and again before handing
    the response back, so a superseded caller never sees stale data.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled("Request was cancelled")


class AcademyAPIClient:
    """Client for the academy backend (players, attendance, tournaments, registrations)."""

    def __init__(self, base_url: str, timeout: float = 10,
                 session: Optional[requests.Session] = None):
        """Initialise the client.

        Args:
            base_url: Root URL of the backend, e.g. http://localhost:8000
            timeout: Per-request timeout in seconds
            session: Optional requests session. If None, a new one is created.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self.access_token: Optional[str] = None

    def set_access_token(self, token: Optional[str]) -> None:
        self.access_token = token

    def _request(self, method: str, path: str, cancel: Optional[CancelToken] = None,
                 **kwargs) -> Any:
        if cancel:
            cancel.raise_if_cancelled()

        url = f"{self.base_url}{path}"
        headers = kwargs.pop("headers", {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, headers=headers,
                                             timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("Request %s %s failed: %s", method, url, e)
            raise AcademyConnectionError(f"Could not reach the academy API: {e}") from e

        if cancel:
            cancel.raise_if_cancelled()

        if response.status_code in (401, 403):
            raise AcademyAuthError("Not authorised", status_code=response.status_code,
                                   detail=self._detail(response))
        if response.status_code >= 400:
            detail = self._detail(response)
            logger.error("%s %s returned %s: %s", method, url, response.status_code, detail)
            raise AcademyAPIError(f"API request failed with status {response.status_code}",
                                  status_code=response.status_code, detail=detail)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise AcademyAPIError(f"Invalid JSON from {path}",
                                  status_code=response.status_code) from e

    @staticmethod
    def _detail(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and "detail" in body:
            return str(body["detail"])
        return str(body)

    # ================== PLAYERS ==================

    def get_players(self, cancel: Optional[CancelToken] = None) -> List[Player]:
        data = self._request("GET", "/players/", cancel=cancel) or []
        return [Player.from_api(item) for item in data]

    def add_player(self, name: str, program: str, age: Optional[int] = None) -> Player:
        payload: Dict[str, Any] = {"name": name, "program": program}
        if age is not None:
            payload["age"] = age
        return Player.from_api(self._request("POST", "/players/", json=payload))

    def remove_player(self, player_id: int) -> None:
        self._request("DELETE", f"/players/{player_id}")

    # ================== ATTENDANCE ==================

    def get_attendance(self, day: str, cancel: Optional[CancelToken] = None) -> Dict[int, bool]:
        return attendance_from_api(self._request("GET", f"/attendance/{day}", cancel=cancel))

    def update_attendance(self, day: str, attendance: Dict[int, bool]) -> Dict[str, Any]:
        """Overwrite the whole map for `day`. Returns the server's status summary."""
        payload = {"attendance": attendance_to_api(attendance)}
        return self._request("PUT", f"/attendance/{day}", json=payload) or {}

    # ================== TOURNAMENTS ==================

    def get_tournaments(self, cancel: Optional[CancelToken] = None) -> List[Tournament]:
        data = self._request("GET", "/tournaments/", cancel=cancel) or []
        return [Tournament.from_api(item) for item in data]

    def get_tournament(self, tournament_id: int) -> Tournament:
        return Tournament.from_api(self._request("GET", f"/tournaments/{tournament_id}"))

    def create_tournament(self, payload: Dict[str, Any]) -> Tournament:
        return Tournament.from_api(self._request("POST", "/tournaments/", json=payload))

    def cancel_tournament(self, tournament_id: int) -> Optional[Tournament]:
        """Move a tournament to the cancelled status. Nothing is deleted."""
        data = self._request("PUT", f"/tournaments/{tournament_id}/cancel")
        if isinstance(data, dict) and "id" in data and "date" in data:
            return Tournament.from_api(data)
        return None

    # ================== REGISTRATIONS ==================

    def register_team(self, tournament_id: int, registration: Registration) -> Registration:
        data = self._request("POST", f"/registrations/{tournament_id}", json=registration.to_api())
        if isinstance(data, dict) and "tournament_id" in data:
            return Registration.from_api(data)
        return registration

    def get_registrations(self, tournament_id: int,
                         cancel: Optional[CancelToken] = None) -> List[Registration]:
        data = self._request("GET", f"/registrations/{tournament_id}", cancel=cancel) or []
        registrations = []
        for item in data:
            try:
                registrations.append(Registration.from_api(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed registration for tournament %s: %s",
                               tournament_id, e)
        return registrations

    # ================== ANNOUNCEMENTS ==================

    def get_announcements(self) -> List[Announcement]:
        data = self._request("GET", "/announcements/") or []
        return [Announcement.from_dict(item) for item in data]

    def create_announcement(self, message: str,
                            expires_at: Optional[datetime] = None) -> Announcement:
        payload: Dict[str, Any] = {"message": message}
        if expires_at is not None:
            payload["expires_at"] = expires_at.isoformat()
        return Announcement.from_dict(self._request("POST", "/announcements/", json=payload))

    def delete_announcement(self, announcement_id: int) -> None:
        self._request("DELETE", f"/announcements/{announcement_id}")

    # ================== AUTH ==================

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """OAuth2 password grant; the backend expects form fields, not JSON."""
        form = {"username": email, "password": password, "grant_type": "password"}
        return self._request("POST", "/auth/login", data=form) or {}

    def logout(self) -> None:
        self._request("POST", "/auth/logout")

    def refresh_token(self) -> Dict[str, Any]:
        return self._request("POST", "/auth/refresh") or {}
