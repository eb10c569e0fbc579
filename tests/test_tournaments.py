from datetime import date, timedelta

import pytest

from models import Tournament, TournamentStatus
from services.errors import InvalidTransition, ValidationError
from services.messages import CANCEL_NEEDS_CONFIRMATION
from services.registrations import RegistrationService
from services.tournaments import TournamentForm, TournamentService, validate_tournament

from conftest import TODAY, make_registration, make_tournament


def _form(**overrides):
    values = dict(
        title="Monsoon Cup",
        tournament_date=TODAY + timedelta(days=30),
        location="City Sports Arena",
        match_type="5v5",
        age_groups=["U17"],
        registration_open=TODAY,
        registration_close=TODAY + timedelta(days=10),
    )
    values.update(overrides)
    return TournamentForm(**values)


# ================== VALIDATION ==================

def test_valid_form_has_no_errors():
    assert validate_tournament(_form(), TODAY) == []


def test_close_equal_to_open_is_rejected():
    errors = validate_tournament(_form(registration_close=TODAY), TODAY)
    assert errors == ["Registration close date must be after the open date."]


def test_close_one_day_after_open_is_accepted():
    assert validate_tournament(_form(registration_close=TODAY + timedelta(days=1)), TODAY) == []


def test_date_must_be_after_today():
    assert validate_tournament(_form(tournament_date=TODAY), TODAY) == [
        "Tournament date must be in the future."
    ]
    assert validate_tournament(_form(tournament_date=TODAY + timedelta(days=1)), TODAY) == []


def test_at_least_one_age_group_required():
    assert "Select at least one age group." in validate_tournament(_form(age_groups=[]), TODAY)


def test_missing_required_fields():
    errors = validate_tournament(
        TournamentForm(title=" ", location="", age_groups=["U15"]), TODAY
    )
    assert errors == [
        "Title is required.",
        "Tournament date is required.",
        "Location is required.",
        "Registration open date is required.",
        "Registration close date is required.",
    ]


def test_create_posts_snake_case_payload(client, db_manager):
    client.create_tournament.return_value = make_tournament(id=9, title="Monsoon Cup")
    service = TournamentService(client, db_manager)

    created = service.create(_form(), today=TODAY)

    payload = client.create_tournament.call_args[0][0]
    assert payload["registration_open"] == TODAY.isoformat()
    assert payload["match_type"] == "5v5"
    assert payload["age_groups"] == ["U17"]
    assert created.id == 9
    assert db_manager.get_audit_log()[0]["action"] == "create"


def test_create_rejects_invalid_form(client):
    service = TournamentService(client)
    with pytest.raises(ValidationError):
        service.create(_form(age_groups=[]), today=TODAY)
    client.create_tournament.assert_not_called()


# ================== LIFECYCLE ==================

def test_cancel_requires_confirmation(client):
    service = TournamentService(client)
    with pytest.raises(InvalidTransition) as exc:
        service.cancel(make_tournament(), confirmed=False, today=TODAY)
    assert str(exc.value) == CANCEL_NEEDS_CONFIRMATION
    client.cancel_tournament.assert_not_called()


def test_cancel_only_from_upcoming(client):
    service = TournamentService(client)
    with pytest.raises(InvalidTransition):
        service.cancel(make_tournament(status=TournamentStatus.CANCELLED), True, today=TODAY)
    with pytest.raises(InvalidTransition):
        service.cancel(make_tournament(date=TODAY - timedelta(days=1)), True, today=TODAY)


def test_cancel_changes_only_status_and_keeps_registrations(client, db_manager):
    tournament = make_tournament()
    client.cancel_tournament.return_value = None
    client.get_registrations.return_value = [make_registration()]
    registrations = RegistrationService(client)
    registrations.get(tournament.id)

    cancelled = TournamentService(client, db_manager).cancel(tournament, True, today=TODAY)

    assert cancelled.status is TournamentStatus.CANCELLED
    assert (cancelled.id, cancelled.title, cancelled.date, cancelled.location) == (
        tournament.id, tournament.title, tournament.date, tournament.location
    )
    assert tournament.status is TournamentStatus.UPCOMING
    client.cancel_tournament.assert_called_once_with(tournament.id)
    assert registrations.refresh(tournament.id)[0].team_name == "Phoenix"
    filename, data = registrations.export_csv(cancelled, today=TODAY)
    assert b"Phoenix" in data
    assert db_manager.get_audit_log()[0]["action"] == "cancel"


def test_passed_tournament_reads_as_completed():
    tournament = make_tournament(date=TODAY - timedelta(days=1))
    assert tournament.effective_status(TODAY) is TournamentStatus.COMPLETED
    assert tournament.status is TournamentStatus.UPCOMING
    assert not tournament.registration_is_open(TODAY)


def test_upcoming_and_past_lists(client):
    client.get_tournaments.return_value = [
        make_tournament(id=1, date=TODAY + timedelta(days=20)),
        make_tournament(id=2, date=TODAY + timedelta(days=5)),
        make_tournament(id=3, date=TODAY - timedelta(days=40)),
        make_tournament(id=4, date=TODAY - timedelta(days=2)),
        make_tournament(id=5, date=TODAY + timedelta(days=9), status=TournamentStatus.CANCELLED),
    ]
    service = TournamentService(client)

    assert [t.id for t in service.upcoming(TODAY)] == [2, 1]
    assert [t.id for t in service.past(TODAY)] == [4, 3]
    assert client.get_tournaments.call_count == 1


def test_from_api_accepts_camel_case():
    tournament = Tournament.from_api({
        "id": "7",
        "title": "Winter Showdown",
        "date": "2026-12-10",
        "location": "Court 1",
        "matchType": "5v5",
        "ageGroups": ["U19"],
        "registrationOpen": "2026-11-01",
        "registrationClose": "2026-11-30",
    })
    assert tournament.id == 7
    assert tournament.match_type == "5v5"
    assert tournament.registration_close == date(2026, 11, 30)
    assert tournament.status is TournamentStatus.UPCOMING
