"""
BaseLine Academy - Roster Service
Players by program and their locally kept profile stats
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from api.client import AcademyAPIClient
from database.local_storage import LocalStorage, player_performance_key, player_stats_key
from database.schema import DatabaseManager
from models import PROGRAMS, Player
from .errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_STATS = {
    "gamesPlayed": 0,
    "pointsPerGame": 0.0,
    "reboundsPerGame": 0.0,
    "assistsPerGame": 0.0,
}

DEFAULT_PERFORMANCE = {
    "shooting": 0,
    "defense": 0,
    "passing": 0,
    "dribbling": 0,
    "fitness": 0,
}


class RosterService:
    def __init__(self, client: AcademyAPIClient, storage: Optional[LocalStorage] = None,
                 db_manager: Optional[DatabaseManager] = None):
        self.client = client
        self.storage = storage
        self.db_manager = db_manager

    def list(self) -> List[Player]:
        return self.client.get_players()

    def by_program(self, players: Optional[List[Player]] = None) -> Dict[str, List[Player]]:
        players = self.list() if players is None else players
        grouped: Dict[str, List[Player]] = {program: [] for program in PROGRAMS}
        for player in players:
            grouped.setdefault(player.program, []).append(player)
        return grouped

    def add(self, name: str, program: str, age: Optional[int] = None) -> Player:
        errors = []
        if not name or not name.strip():
            errors.append("Player name is required.")
        if program not in PROGRAMS:
            errors.append(f"Program must be one of: {', '.join(PROGRAMS)}")
        if age is not None and age <= 0:
            errors.append("Age must be a positive number.")
        if errors:
            raise ValidationError(errors)

        player = self.client.add_player(name.strip(), program, age)
        self._audit(player.id, "add", f"{player.name} ({program})")
        logger.info("Added player %s to %s", player.name, program)
        return player

    def remove(self, player_id: int) -> None:
        self.client.remove_player(player_id)
        self._audit(player_id, "remove")
        logger.info("Removed player %s", player_id)

    # ================== PROFILE STATS ==================

    def stats(self, player_id: int) -> Dict[str, Any]:
        stored = self.storage.get(player_stats_key(player_id), default={}) if self.storage else {}
        return {**DEFAULT_STATS, **(stored or {})}

    def performance(self, player_id: int) -> Dict[str, Any]:
        stored = self.storage.get(player_performance_key(player_id), default={}) if self.storage else {}
        return {**DEFAULT_PERFORMANCE, **(stored or {})}

    def record_stats(self, player_id: int, stats: Optional[Dict[str, Any]] = None,
                     performance: Optional[Dict[str, Any]] = None) -> None:
        if self.storage is None:
            return
        if stats:
            unknown = set(stats) - set(DEFAULT_STATS)
            if unknown:
                raise ValidationError([f"Unknown stat: {key}" for key in sorted(unknown)])
            self.storage.set(player_stats_key(player_id), {**self.stats(player_id), **stats})
        if performance:
            bad = [key for key, value in performance.items()
                   if key not in DEFAULT_PERFORMANCE or not 0 <= value <= 100]
            if bad:
                raise ValidationError([f"Invalid performance rating: {key}" for key in bad])
            self.storage.set(player_performance_key(player_id),
                             {**self.performance(player_id), **performance})
        self._audit(player_id, "update_stats")

    def as_dataframe(self, players: List[Player]) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "ID": p.id,
                    "Name": p.name,
                    "Program": p.program,
                    "Age": p.age,
                    "Classes Attended": p.attended_classes,
                }
                for p in players
            ],
            columns=["ID", "Name", "Program", "Age", "Classes Attended"],
        )

    def _audit(self, record_id: Any, action: str, details: str = "") -> None:
        if self.db_manager is not None:
            self.db_manager.record_action("player", record_id, action, details)
