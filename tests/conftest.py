# Ensures `import services` works when running `pytest` from repo root or a parent folder.
import sys
from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# project root = parent of this tests/ directory
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from api.client import AcademyAPIClient  # noqa: E402
from database import DatabaseManager, LocalStorage  # noqa: E402
from models import Player, Registration, Tournament  # noqa: E402

TODAY = date(2026, 5, 10)


@pytest.fixture
def db_manager(tmp_path):
    manager = DatabaseManager(str(tmp_path / "academy_test.db"))
    manager.initialize_database()
    return manager


@pytest.fixture
def storage(db_manager):
    return LocalStorage(db_manager)


@pytest.fixture
def client():
    fake = MagicMock(spec=AcademyAPIClient)
    fake.get_players.return_value = []
    fake.get_registrations.return_value = []
    fake.get_tournaments.return_value = []
    return fake


def make_tournament(**overrides):
    values = dict(
        id=1,
        title="Summer Championship",
        date=date(2026, 6, 20),
        location="BaseLine Academy Court",
        match_type="3v3",
        age_groups=["U15", "U17"],
        registration_open=date(2026, 5, 1),
        registration_close=date(2026, 6, 10),
    )
    values.update(overrides)
    return Tournament(**values)


def make_registration(**overrides):
    values = dict(
        id=1,
        tournament_id=1,
        team_name="Phoenix",
        captain_name="Asha Rao",
        phone="9876543210",
        email="asha@example.com",
        player_names=["Asha Rao", "Dev K", "Ravi S", "Kiran P"],
        created_at=datetime(2026, 5, 2, 14, 5, 9),
    )
    values.update(overrides)
    return Registration(**values)


def make_players():
    return [
        Player(id=1, name="Michael Jordan", program="5-Day", attended_classes=12),
        Player(id=2, name="Lisa Leslie", program="3-Day", attended_classes=7),
        Player(id=3, name="Kobe Bryant", program="5-Day", attended_classes=9),
    ]
