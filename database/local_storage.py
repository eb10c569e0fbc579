"""
BaseLine Academy - Local Storage
JSON key/value store shared by every visitor of this site instance
"""

import json
import logging
from typing import Any
from datetime import datetime

from .schema import DatabaseManager

logger = logging.getLogger(__name__)

# Keys kept in the local store
ANNOUNCEMENT_KEY = "announcement"
CURRENT_ANNOUNCEMENT_KEY = "currentAnnouncement"
LEGACY_REGISTRATIONS_KEY = "tournamentRegistrations"


def player_stats_key(player_id: int) -> str:
    return f"player_stats_{player_id}"


def player_performance_key(player_id: int) -> str:
    return f"player_performance_{player_id}"


class LocalStorage:
    """getItem/setItem/removeItem over the local_storage table"""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for key, or default when absent or unreadable"""
        conn = self.db_manager.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM local_storage WHERE key = ?", (key,))
            row = cursor.fetchone()
        finally:
            conn.close()

        if row is None:
            return default
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable value stored under '%s'", key)
            return default

    def set(self, key: str, value: Any) -> None:
        conn = self.db_manager.get_connection()
        try:
            conn.execute("""
                INSERT OR REPLACE INTO local_storage (key, value, updated_at)
                VALUES (?, ?, ?)
            """, (key, json.dumps(value), datetime.now().isoformat()))
            conn.commit()
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self.db_manager.get_connection()
        try:
            conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
