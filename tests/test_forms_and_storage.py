from datetime import datetime

import pytest

import site_content
from models import Announcement, ExpiryPolicy, Registration
from services.errors import ValidationError
from services.forms import (
    BOOKING_THANKS,
    BookingForm,
    ContactForm,
    submit_booking,
    submit_contact,
    validate_booking,
    validate_contact,
)


# ================== PUBLIC FORMS ==================

def test_contact_requires_every_field():
    errors = validate_contact(ContactForm(name="Ravi", email="", subject="", message="Hi"))
    assert errors == ["Please fill in all required fields: Email, Subject"]


def test_contact_rejects_bad_email():
    with pytest.raises(ValidationError):
        submit_contact(ContactForm("Ravi", "ravi-at-example", "Trial", "Hello"))


def test_booking_happy_path():
    slot = site_content.time_slots("3day")[0]
    form = BookingForm(batch="3day", time_slot=slot, name="Ravi", email="ravi@example.com",
                       phone="98765", age="12")
    assert submit_booking(form) == BOOKING_THANKS


def test_booking_checks_slot_and_age():
    form = BookingForm(batch="5day", time_slot="Sunday-9:00 AM", name="Ravi",
                       email="ravi@example.com", phone="98765", age="6")
    errors = validate_booking(form)
    assert "Please select a time slot." in errors
    assert "Programs are open to players aged 8 and up." in errors


def test_time_slots():
    assert site_content.time_slots("5day")[0] == "Monday-4:00 PM - 6:00 PM"
    assert len(site_content.time_slots("5day")) == 10
    assert site_content.time_slots("missing") == []


# ================== LOCAL STORE ==================

def test_storage_round_trip(storage):
    storage.set("player_stats_1", {"gamesPlayed": 3})
    storage.set("player_stats_2", {"gamesPlayed": 1})

    assert storage.get("player_stats_1") == {"gamesPlayed": 3}
    assert storage.get("player_stats_2") == {"gamesPlayed": 1}

    storage.remove("player_stats_1")
    assert storage.get("player_stats_1", default="gone") == "gone"


def test_unreadable_value_returns_default(storage, db_manager):
    conn = db_manager.get_connection()
    conn.execute("INSERT INTO local_storage (key, value) VALUES (?, ?)", ("broken", "{not json"))
    conn.commit()
    conn.close()

    assert storage.get("broken", default=[]) == []


def test_integrity_report_counts(storage, db_manager):
    storage.set("announcement", "hi")
    db_manager.record_action("player", 1, "add")

    report = db_manager.validate_data_integrity()

    assert report["valid"]
    assert report["stats"] == {"Stored Keys": 1, "Audit Entries": 1}
    assert db_manager.get_schema_version() == 1


# ================== MODELS ==================

def test_legacy_registration_round_trip():
    legacy = {
        "id": 3, "tournamentId": 2, "teamName": "Hoopers", "contactName": "Meera",
        "contactEmail": "m@example.com", "contactPhone": "123",
        "players": [{"name": "Meera"}, {"name": ""}, "Tara"],
        "registrationDate": "2026-05-01T10:00:00Z",
    }
    registration = Registration.from_legacy(legacy)

    assert registration.player_names == ["Meera", "Tara"]
    assert registration.created_at.tzinfo is not None
    assert registration.to_legacy()["teamName"] == "Hoopers"


def test_announcement_dict_round_trip():
    now = datetime(2026, 5, 10, 9, 0)
    announcement = Announcement.publish("Hi", ExpiryPolicy.HOURS_48, now)
    assert Announcement.from_dict(announcement.to_dict()) == announcement


def test_remote_announcement_policy_is_inferred():
    announcement = Announcement.from_dict({
        "id": 1, "message": "m",
        "created_at": "2026-05-09T08:00:00Z", "expires_at": "2026-05-10T08:00:00Z",
    })
    assert announcement.expiry is ExpiryPolicy.HOURS_24
