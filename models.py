"""
Domain models for the BaseLine Academy site.

Every payload coming from the REST API or from the legacy local-storage blobs
is converted here, so the rest of the code only sees these dataclasses.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

PROGRAMS = ("3-Day", "5-Day")
AGE_GROUPS = ("U15", "U16", "U17", "U18", "U19")
MATCH_TYPES = ("3v3", "5v5")


class Role(str, Enum):
    """Roles a browser session can act as."""
    COACH = "coach"
    PARENT = "parent"
    ADMIN = "admin"
    PLAYER = "player"


class TournamentStatus(str, Enum):
    UPCOMING = "upcoming"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ExpiryPolicy(str, Enum):
    """How long a published announcement stays on the home page."""
    HOURS_24 = "24h"
    HOURS_48 = "48h"
    MANUAL = "manual"

    @property
    def lifetime(self) -> Optional[timedelta]:
        if self is ExpiryPolicy.HOURS_24:
            return timedelta(hours=24)
        if self is ExpiryPolicy.HOURS_48:
            return timedelta(hours=48)
        return None


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date (or datetime) string into a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp; a trailing 'Z' is read as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _first(payload: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


@dataclass
class Player:
    """A player enrolled in one of the training programs."""
    id: int
    name: str
    program: str
    attended_classes: int = 0
    phone: str = ""
    avatar: Optional[str] = None
    age: Optional[int] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Player":
        age = _first(payload, "age")
        return cls(
            id=int(payload["id"]),
            name=str(_first(payload, "name", "full_name", default="")),
            program=str(_first(payload, "program", default=PROGRAMS[0])),
            attended_classes=int(_first(payload, "attended_classes", "attendedClasses", default=0)),
            phone=str(_first(payload, "phone", default="")),
            avatar=_first(payload, "avatar", "profile_image_url"),
            age=int(age) if age is not None else None,
        )

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.name.split() if part).upper()


@dataclass
class Tournament:
    id: int
    title: str
    date: date
    location: str
    description: str = ""
    match_type: str = "3v3"
    age_groups: List[str] = field(default_factory=list)
    registration_open: Optional[date] = None
    registration_close: Optional[date] = None
    status: TournamentStatus = TournamentStatus.UPCOMING
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Tournament":
        return cls(
            id=int(payload["id"]),
            title=str(_first(payload, "title", "name", default="")),
            date=parse_date(payload["date"]),
            location=str(_first(payload, "location", default="")),
            description=str(_first(payload, "description", default="")),
            match_type=str(_first(payload, "match_type", "matchType", default="3v3")),
            age_groups=list(_first(payload, "age_groups", "ageGroups", default=[])),
            registration_open=parse_date(_first(payload, "registration_open", "registrationOpen")),
            registration_close=parse_date(_first(payload, "registration_close", "registrationClose")),
            status=TournamentStatus(_first(payload, "status", default="upcoming")),
            created_at=parse_datetime(_first(payload, "created_at", "createdAt")),
        )

    def effective_status(self, today: date) -> TournamentStatus:
        """Upcoming tournaments whose date has passed read as completed."""
        if self.status is TournamentStatus.UPCOMING and self.date < today:
            return TournamentStatus.COMPLETED
        return self.status

    def registration_is_open(self, today: date) -> bool:
        if self.effective_status(today) is not TournamentStatus.UPCOMING:
            return False
        if self.registration_open and today < self.registration_open:
            return False
        if self.registration_close and today > self.registration_close:
            return False
        return True


@dataclass
class Registration:
    """A team's entry for a tournament."""
    id: Optional[int]
    tournament_id: int
    team_name: str
    captain_name: str
    phone: str
    email: str
    player_names: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Registration":
        reg_id = payload.get("id")
        return cls(
            id=int(reg_id) if reg_id is not None else None,
            tournament_id=int(payload["tournament_id"]),
            team_name=str(payload.get("team_name", "")),
            captain_name=str(payload.get("captain_name", "")),
            phone=str(payload.get("phone", "")),
            email=str(payload.get("email", "")),
            player_names=[str(name) for name in payload.get("player_names") or []],
            created_at=parse_datetime(payload.get("created_at")),
        )

    @classmethod
    def from_legacy(cls, payload: Dict[str, Any]) -> "Registration":
        """Read the camelCase shape kept in the `tournamentRegistrations` blob."""
        players = payload.get("players") or []
        names = [p.get("name", "") if isinstance(p, dict) else str(p) for p in players]
        return cls(
            id=payload.get("id"),
            tournament_id=int(payload["tournamentId"]),
            team_name=str(payload.get("teamName", "")),
            captain_name=str(payload.get("contactName", "")),
            phone=str(payload.get("contactPhone", "")),
            email=str(payload.get("contactEmail", "")),
            player_names=[n for n in names if n],
            created_at=parse_datetime(payload.get("registrationDate")),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "team_name": self.team_name,
            "captain_name": self.captain_name,
            "phone": self.phone,
            "email": self.email,
            "player_names": list(self.player_names),
        }

    def to_legacy(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "tournamentId": self.tournament_id,
            "teamName": self.team_name,
            "contactName": self.captain_name,
            "contactEmail": self.email,
            "contactPhone": self.phone,
            "players": [{"name": name} for name in self.player_names],
            "registrationDate": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class Announcement:
    message: str
    expiry: ExpiryPolicy
    created_at: datetime
    expires_at: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def publish(cls, message: str, expiry: ExpiryPolicy, now: datetime) -> "Announcement":
        lifetime = expiry.lifetime
        return cls(
            id=int(now.timestamp() * 1000),
            message=message,
            expiry=expiry,
            created_at=now,
            expires_at=now + lifetime if lifetime else None,
        )

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Announcement":
        created_at = parse_datetime(payload.get("created_at")) or datetime.now()
        expires_at = parse_datetime(payload.get("expires_at"))
        expiry = payload.get("expiry")
        if expiry is None:
            # Remote records carry only expires_at
            expiry = ExpiryPolicy.MANUAL if expires_at is None \
                else _policy_for(as_aware(expires_at) - as_aware(created_at))
        return cls(
            id=payload.get("id"),
            message=str(payload.get("message", "")),
            expiry=ExpiryPolicy(expiry),
            created_at=created_at,
            expires_at=expires_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "expiry": self.expiry.value,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    def is_expired(self, now: datetime) -> bool:
        if self.expires_at is None:
            return False
        # Server timestamps are UTC-aware, local ones naive local time
        return as_aware(now) >= as_aware(self.expires_at)


def as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.astimezone()


def _policy_for(lifetime: timedelta) -> ExpiryPolicy:
    return ExpiryPolicy.HOURS_24 if lifetime <= timedelta(hours=24) else ExpiryPolicy.HOURS_48


def attendance_from_api(payload: Dict[str, Any]) -> Dict[int, bool]:
    """Server keys are string-encoded player ids."""
    return {int(key): bool(value) for key, value in (payload or {}).items()}


def attendance_to_api(attendance: Dict[int, bool]) -> Dict[str, bool]:
    return {str(key): bool(value) for key, value in attendance.items()}
