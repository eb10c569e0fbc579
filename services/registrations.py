"""
BaseLine Academy - Registration Service
Cached registration lists per tournament, team sign-up and CSV export
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from api.client import AcademyAPIClient
from database.local_storage import LocalStorage, LEGACY_REGISTRATIONS_KEY
from models import Registration, Tournament
from .coalescing_cache import CoalescingCache
from .errors import NothingToExport, ValidationError
from .messages import NOTHING_TO_EXPORT

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Team Name", "Captain Name", "Phone", "Email", "Players", "Registered At"]
PLAYER_SEPARATOR = " | "

_SANITIZE = re.compile(r"[^A-Za-z0-9._-]+")
_MULTI_UNDERS = re.compile(r"_+")


@dataclass
class RegistrationForm:
    """Raw values from the public registration form"""
    team_name: str = ""
    captain_first_name: str = ""
    captain_last_name: str = ""
    email: str = ""
    phone: str = ""
    other_players: List[str] = field(default_factory=list)
    questions: str = ""

    @property
    def captain_name(self) -> str:
        return f"{self.captain_first_name.strip()} {self.captain_last_name.strip()}".strip()

    @property
    def player_names(self) -> List[str]:
        """Captain first, then every non-blank player/substitute name"""
        names = [self.captain_name] if self.captain_name else []
        names.extend(name.strip() for name in self.other_players if name and name.strip())
        return names


def team_size_for(match_type: str) -> Tuple[int, int, str]:
    """(min, max, description) of a roster for the match format"""
    if "3v3" in match_type or "3vs3" in match_type:
        return 4, 4, "3 players + 1 substitute"
    if "5v5" in match_type or "5vs5" in match_type:
        return 6, 7, "5 players + 1-2 substitutes"
    return 1, 10, "Variable team size"


def validate_registration(form: RegistrationForm, tournament: Tournament,
                          today: Optional[date] = None) -> List[str]:
    """Return the list of problems with the form; empty means it can be submitted"""
    today = today or date.today()
    errors = []

    required = {
        "Team Name": form.team_name,
        "Captain First Name": form.captain_first_name,
        "Captain Last Name": form.captain_last_name,
        "Email": form.email,
        "Phone Number": form.phone,
    }
    missing = [label for label, value in required.items() if not value or not value.strip()]
    if missing:
        errors.append(f"Please fill in all required fields: {', '.join(missing)}")

    min_size, max_size, _ = team_size_for(tournament.match_type)
    size = len(form.player_names)
    if size < min_size or size > max_size:
        span = f"{min_size}" if min_size == max_size else f"{min_size}-{max_size}"
        errors.append(f"Team must have {span} players.")

    if not tournament.registration_is_open(today):
        errors.append("Registration for this tournament is closed.")

    return errors


def format_timestamp(value: Optional[datetime]) -> str:
    """Local wall-clock rendering used in the export"""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%d/%m/%Y, %I:%M:%S %p")


def export_filename(title: str, today: date) -> str:
    base = f"{title}_registrations_{today.isoformat()}".replace(" ", "_")
    base = _SANITIZE.sub("_", base)
    base = _MULTI_UNDERS.sub("_", base).strip("_")
    return f"{base}.csv"


def registrations_to_csv(registrations: Iterable[Registration]) -> bytes:
    """Header plus one row per registration, minimal quoting, UTF-8 with BOM"""
    rows = [
        [
            reg.team_name,
            reg.captain_name,
            reg.phone,
            reg.email,
            PLAYER_SEPARATOR.join(reg.player_names),
            format_timestamp(reg.created_at),
        ]
        for reg in registrations
    ]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    text = df.to_csv(index=False, lineterminator="\n")
    # BOM so spreadsheet tools detect UTF-8
    return text.encode("utf-8-sig")


class RegistrationService:
    """Registrations keyed by tournament id, fetched once and shared"""

    def __init__(self, client: AcademyAPIClient, storage: Optional[LocalStorage] = None,
                 mock_mode: bool = False, max_workers: int = 4):
        self.client = client
        self.storage = storage
        self.mock_mode = mock_mode
        self.max_workers = max_workers
        self.cache = CoalescingCache(self._load, fallback=list, name="registrations")

    def _load(self, tournament_id: int) -> List[Registration]:
        if self.mock_mode:
            return [r for r in self._legacy_registrations() if r.tournament_id == tournament_id]
        registrations = self.client.get_registrations(tournament_id)
        logger.info("Fetched %d registrations for tournament %s", len(registrations), tournament_id)
        return registrations

    def _legacy_registrations(self) -> List[Registration]:
        if self.storage is None:
            return []
        blob = self.storage.get(LEGACY_REGISTRATIONS_KEY, default=[]) or []
        registrations = []
        for item in blob:
            try:
                registrations.append(Registration.from_legacy(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed legacy registration: %s", e)
        return registrations

    def get(self, tournament_id: int) -> List[Registration]:
        """Cached list, the in-flight fetch's result, or a fresh fetch"""
        return self.cache.get(tournament_id)

    def refresh(self, tournament_id: int) -> List[Registration]:
        self.cache.invalidate(tournament_id)
        return self.cache.get(tournament_id)

    def invalidate(self, tournament_id: int) -> None:
        self.cache.invalidate(tournament_id)

    def prefetch(self, tournament_ids: Iterable[int]) -> Dict[int, List[Registration]]:
        """Warm the cache for several tournaments concurrently"""
        ids = list(dict.fromkeys(tournament_ids))
        results: Dict[int, List[Registration]] = {}
        if not ids:
            return results
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(ids))) as pool:
            futures = {pool.submit(self.get, tid): tid for tid in ids}
            for future in as_completed(futures):
                tid = futures[future]
                try:
                    results[tid] = future.result()
                except Exception as e:
                    # Left uncached; the next get retries the load
                    logger.error("Prefetch of registrations for tournament %s failed: %s", tid, e)
        return results

    def submit(self, tournament: Tournament, form: RegistrationForm,
               today: Optional[date] = None) -> Registration:
        """Validate and send a team's registration, then drop the stale cache entry"""
        errors = validate_registration(form, tournament, today)
        if errors:
            raise ValidationError(errors)

        registration = Registration(
            id=None,
            tournament_id=tournament.id,
            team_name=form.team_name.strip(),
            captain_name=form.captain_name,
            phone=form.phone.strip(),
            email=form.email.strip(),
            player_names=form.player_names,
            created_at=datetime.now(),
        )

        if self.mock_mode:
            saved = self._append_legacy(registration)
        else:
            saved = self.client.register_team(tournament.id, registration)

        self.invalidate(tournament.id)
        logger.info("Registered team '%s' for tournament %s", saved.team_name, tournament.id)
        return saved

    def _append_legacy(self, registration: Registration) -> Registration:
        if self.storage is None:
            raise ValidationError(["Local storage is not available in mock mode."])
        blob = self.storage.get(LEGACY_REGISTRATIONS_KEY, default=[]) or []
        registration.id = len(blob) + 1
        blob.append(registration.to_legacy())
        self.storage.set(LEGACY_REGISTRATIONS_KEY, blob)
        return registration

    def export_csv(self, tournament: Tournament,
                   today: Optional[date] = None) -> Tuple[str, bytes]:
        """(filename, bytes) ready for a download button"""
        registrations = self.get(tournament.id)
        if not registrations:
            raise NothingToExport(NOTHING_TO_EXPORT)
        today = today or date.today()
        return export_filename(tournament.title, today), registrations_to_csv(registrations)

    def as_dataframe(self, tournament_id: int) -> pd.DataFrame:
        """Cached registrations shaped for st.dataframe"""
        registrations = self.get(tournament_id)
        return pd.DataFrame(
            [
                {
                    "Team Name": r.team_name,
                    "Captain": r.captain_name,
                    "Phone": r.phone,
                    "Email": r.email,
                    "Players": len(r.player_names),
                    "Registered At": format_timestamp(r.created_at),
                }
                for r in registrations
            ],
            columns=["Team Name", "Captain", "Phone", "Email", "Players", "Registered At"],
        )
