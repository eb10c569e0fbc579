"""
BaseLine Academy - Tournament Service
Creation with validation, confirmed cancellation and the derived completed status
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, List, Optional

from api.client import AcademyAPIClient
from database.schema import DatabaseManager
from models import AGE_GROUPS, MATCH_TYPES, Tournament, TournamentStatus
from .errors import InvalidTransition, ValidationError
from .messages import CANCEL_NEEDS_CONFIRMATION

logger = logging.getLogger(__name__)


@dataclass
class TournamentForm:
    """Values from the coach's create-tournament form"""
    title: str = ""
    tournament_date: Optional[date] = None
    location: str = ""
    description: str = ""
    match_type: str = MATCH_TYPES[0]
    age_groups: List[str] = field(default_factory=list)
    registration_open: Optional[date] = None
    registration_close: Optional[date] = None

    def to_api(self) -> Dict[str, Any]:
        return {
            "title": self.title.strip(),
            "date": self.tournament_date.isoformat(),
            "location": self.location.strip(),
            "description": self.description.strip(),
            "match_type": self.match_type,
            "age_groups": list(self.age_groups),
            "registration_open": self.registration_open.isoformat(),
            "registration_close": self.registration_close.isoformat(),
        }


def validate_tournament(form: TournamentForm, today: Optional[date] = None) -> List[str]:
    today = today or date.today()
    errors = []

    if not form.title.strip():
        errors.append("Title is required.")
    if form.tournament_date is None:
        errors.append("Tournament date is required.")
    if not form.location.strip():
        errors.append("Location is required.")
    if form.registration_open is None:
        errors.append("Registration open date is required.")
    if form.registration_close is None:
        errors.append("Registration close date is required.")
    if not form.age_groups:
        errors.append("Select at least one age group.")
    elif any(group not in AGE_GROUPS for group in form.age_groups):
        errors.append("Unknown age group selected.")
    if form.match_type not in MATCH_TYPES:
        errors.append("Match type must be 3v3 or 5v5.")

    if form.registration_open and form.registration_close \
            and form.registration_close <= form.registration_open:
        errors.append("Registration close date must be after the open date.")
    if form.tournament_date and form.tournament_date <= today:
        errors.append("Tournament date must be in the future.")

    return errors


class TournamentService:
    """Tournament list and the upcoming -> cancelled transition"""

    def __init__(self, client: AcademyAPIClient, db_manager: Optional[DatabaseManager] = None):
        self.client = client
        self.db_manager = db_manager
        self._tournaments: Optional[List[Tournament]] = None

    def list(self, refresh: bool = False) -> List[Tournament]:
        if self._tournaments is None or refresh:
            self._tournaments = self.client.get_tournaments()
            logger.info("Fetched %d tournaments", len(self._tournaments))
        return list(self._tournaments)

    def get(self, tournament_id: int) -> Tournament:
        for tournament in self._tournaments or []:
            if tournament.id == tournament_id:
                return tournament
        return self.client.get_tournament(tournament_id)

    def upcoming(self, today: Optional[date] = None) -> List[Tournament]:
        today = today or date.today()
        found = [t for t in self.list() if t.effective_status(today) is TournamentStatus.UPCOMING]
        return sorted(found, key=lambda t: t.date)

    def past(self, today: Optional[date] = None) -> List[Tournament]:
        today = today or date.today()
        found = [t for t in self.list() if t.effective_status(today) is TournamentStatus.COMPLETED]
        return sorted(found, key=lambda t: t.date, reverse=True)

    def invalidate(self) -> None:
        self._tournaments = None

    def validate(self, form: TournamentForm, today: Optional[date] = None) -> List[str]:
        return validate_tournament(form, today)

    def create(self, form: TournamentForm, today: Optional[date] = None) -> Tournament:
        errors = validate_tournament(form, today)
        if errors:
            raise ValidationError(errors)

        tournament = self.client.create_tournament(form.to_api())
        self.invalidate()
        self._audit(tournament.id, "create", tournament.title)
        logger.info("Created tournament %s '%s'", tournament.id, tournament.title)
        return tournament

    def cancel(self, tournament: Tournament, confirmed: bool,
               today: Optional[date] = None) -> Tournament:
        """Mark an upcoming tournament cancelled. Registrations are kept."""
        today = today or date.today()
        if not confirmed:
            raise InvalidTransition(CANCEL_NEEDS_CONFIRMATION)
        status = tournament.effective_status(today)
        if status is not TournamentStatus.UPCOMING:
            raise InvalidTransition(f"Cannot cancel a {status.value} tournament.")

        updated = self.client.cancel_tournament(tournament.id)
        if updated is None:
            updated = replace(tournament, status=TournamentStatus.CANCELLED)
        self.invalidate()
        self._audit(tournament.id, "cancel", tournament.title)
        logger.info("Cancelled tournament %s", tournament.id)
        return updated

    def _audit(self, record_id: Any, action: str, details: str) -> None:
        if self.db_manager is not None:
            self.db_manager.record_action("tournament", record_id, action, details)
