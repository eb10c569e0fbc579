"""
BaseLine Academy - Attendance Board
Per-date present/absent maps edited by the coach and saved as a whole
"""

import logging
import threading
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Set

from api.client import AcademyAPIClient, CancelToken
from api.exceptions import RequestCancelled
from models import Player

logger = logging.getLogger(__name__)

MAX_DAYS_AHEAD = 3


class AttendanceBoard:
    """In-memory attendance keyed by date, plus the dates with unsaved edits"""

    def __init__(self, client: AcademyAPIClient, max_days_ahead: int = MAX_DAYS_AHEAD,
                 clock: Optional[Callable[[], date]] = None):
        self.client = client
        self.max_days_ahead = max_days_ahead
        self._today = clock or date.today
        self.attendance: Dict[str, Dict[int, bool]] = {}
        self.players: List[Player] = []
        self.selected_date: str = self._today().isoformat()
        self._unsaved: Set[str] = set()
        self._load_token: Optional[CancelToken] = None
        # Last save issued per date; older responses are ignored
        self._save_seq: Dict[str, int] = {}
        self._lock = threading.Lock()

    # ================== DATES ==================

    def is_disabled(self, day: str) -> bool:
        """Dates more than max_days_ahead after today cannot be edited"""
        limit = self._today() + timedelta(days=self.max_days_ahead)
        return date.fromisoformat(day) > limit

    def select(self, day: str) -> None:
        self.selected_date = day

    @property
    def unsaved_dates(self) -> List[str]:
        with self._lock:
            return sorted(self._unsaved)

    def has_unsaved(self, day: Optional[str] = None) -> bool:
        with self._lock:
            return (day or self.selected_date) in self._unsaved

    def current(self, day: Optional[str] = None) -> Dict[int, bool]:
        return dict(self.attendance.get(day or self.selected_date, {}))

    # ================== LOAD ==================

    def load_players(self, cancel: Optional[CancelToken] = None) -> List[Player]:
        self.players = self.client.get_players(cancel=cancel)
        return self.players

    def load(self, day: Optional[str] = None) -> Dict[int, bool]:
        """Fetch the server map for day, discarding any local edits for it"""
        day = day or self.selected_date
        if self._load_token is not None:
            self._load_token.cancel()
        token = CancelToken()
        self._load_token = token

        try:
            fetched = self.client.get_attendance(day, cancel=token)
        except RequestCancelled:
            logger.debug("Attendance load for %s superseded", day)
            return self.current(day)

        with self._lock:
            self.attendance[day] = fetched
            self._unsaved.discard(day)
        self.selected_date = day
        logger.info("Loaded attendance for %s (%d entries)", day, len(fetched))
        return dict(fetched)

    # ================== EDIT ==================

    def toggle(self, player_id: int, day: Optional[str] = None) -> bool:
        """Flip one player's flag. Returns False when the date is not editable."""
        day = day or self.selected_date
        if self.is_disabled(day):
            return False
        with self._lock:
            marks = self.attendance.setdefault(day, {})
            marks[player_id] = not marks.get(player_id, False)
            self._unsaved.add(day)
        return True

    def mark_all(self, present: bool, day: Optional[str] = None) -> bool:
        day = day or self.selected_date
        if self.is_disabled(day):
            return False
        with self._lock:
            self.attendance[day] = {player.id: present for player in self.players}
            self._unsaved.add(day)
        return True

    # ================== SAVE ==================

    def save(self, day: Optional[str] = None) -> Dict[str, Any]:
        """PUT the full map for day, then refresh players and clear the unsaved flag.

        Errors propagate and leave the flag set.
        """
        day = day or self.selected_date
        with self._lock:
            seq = self._save_seq.get(day, 0) + 1
            self._save_seq[day] = seq
            snapshot = dict(self.attendance.get(day, {}))

        result = self.client.update_attendance(day, snapshot)
        players = self.client.get_players()

        with self._lock:
            if self._save_seq.get(day) != seq:
                logger.info("Ignoring stale save response for %s", day)
                return dict(result or {})
            if self.attendance.get(day, {}) == snapshot:
                self._unsaved.discard(day)
        self.players = players

        logger.info("Saved attendance for %s: %d present", day,
                    sum(1 for present in snapshot.values() if present))
        return dict(result or {})

    def summary(self, day: Optional[str] = None) -> Dict[str, int]:
        marks = self.current(day)
        present = sum(1 for player in self.players if marks.get(player.id))
        return {
            "present": present,
            "absent": len(self.players) - present,
            "total": len(self.players),
        }
