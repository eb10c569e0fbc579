from datetime import datetime, timedelta, timezone

import pytest

from database.local_storage import ANNOUNCEMENT_KEY, CURRENT_ANNOUNCEMENT_KEY
from models import Announcement, ExpiryPolicy
from services.announcements import AnnouncementService
from services.errors import ValidationError

NOW = datetime(2026, 5, 10, 9, 0, 0)


@pytest.fixture
def local(storage):
    return AnnouncementService("local", storage=storage)


def test_publish_computes_expiry(local):
    announcement = local.publish("Court closed Friday", ExpiryPolicy.HOURS_24, now=NOW)
    assert announcement.expires_at == NOW + timedelta(hours=24)
    assert announcement.id == int(NOW.timestamp() * 1000)


def test_manual_announcement_never_expires(local):
    local.publish("Welcome back", ExpiryPolicy.MANUAL, now=NOW)
    assert local.current(NOW + timedelta(days=365)).message == "Welcome back"


def test_publish_replaces_previous(local):
    local.publish("First", ExpiryPolicy.HOURS_48, now=NOW)
    local.publish("Second", ExpiryPolicy.MANUAL, now=NOW + timedelta(minutes=5))

    current = local.current(NOW + timedelta(minutes=6))
    assert current.message == "Second"
    assert current.expires_at is None


def test_expired_announcement_is_cleared(local, storage):
    local.publish("Trials tomorrow", ExpiryPolicy.HOURS_24, now=NOW)

    assert local.current(NOW + timedelta(hours=23)) is not None
    assert local.current(NOW + timedelta(hours=24)) is None
    assert storage.get(CURRENT_ANNOUNCEMENT_KEY) is None
    assert storage.get(ANNOUNCEMENT_KEY) is None


def test_clear(local):
    local.publish("Bye", ExpiryPolicy.MANUAL, now=NOW)
    local.clear()
    assert local.current(NOW) is None


def test_message_only_value_is_read(local, storage):
    storage.set(ANNOUNCEMENT_KEY, "Old style note")
    assert local.current(NOW).message == "Old style note"


def test_empty_message_rejected(local):
    with pytest.raises(ValidationError):
        local.publish("   ", ExpiryPolicy.MANUAL, now=NOW)


def test_backend_must_be_known(storage):
    with pytest.raises(ValueError):
        AnnouncementService("carrier-pigeon", storage=storage)


def test_remote_backend_replaces_existing(client):
    created = datetime(2026, 5, 9, tzinfo=timezone.utc)
    client.get_announcements.return_value = [
        Announcement(id=4, message="old", expiry=ExpiryPolicy.MANUAL, created_at=created),
    ]
    client.create_announcement.side_effect = lambda message, expires_at: Announcement(
        id=5, message=message, expiry=ExpiryPolicy.HOURS_48, created_at=NOW, expires_at=expires_at)
    service = AnnouncementService("remote", client=client)

    published = service.publish("Finals moved", ExpiryPolicy.HOURS_48, now=NOW)

    client.delete_announcement.assert_called_once_with(4)
    client.create_announcement.assert_called_once_with("Finals moved", NOW + timedelta(hours=48))
    assert published.id == 5


def test_remote_expiry_compares_aware_timestamps(client):
    created = datetime(2026, 5, 9, 8, 0, tzinfo=timezone.utc)
    client.get_announcements.return_value = [
        Announcement.from_dict({"id": 1, "message": "m", "created_at": "2026-05-09T08:00:00Z",
                                "expires_at": "2026-05-10T08:00:00Z"}),
    ]
    service = AnnouncementService("remote", client=client)

    assert service.current(created + timedelta(hours=1)).message == "m"
    assert service.current(created + timedelta(hours=25)) is None
    client.delete_announcement.assert_called_once_with(1)


def test_remote_record_without_created_at_is_compared_safely(client):
    client.get_announcements.return_value = [
        Announcement.from_dict({"id": 1, "message": "Older", "created_at": "2026-05-01T10:00:00Z"}),
        Announcement.from_dict({"id": 2, "message": "Undated"}),
    ]
    service = AnnouncementService("remote", client=client)

    current = service.current(datetime(2026, 5, 10, 9, 0, tzinfo=timezone.utc))

    assert current.message == "Undated"
    client.delete_announcement.assert_not_called()


def test_undated_remote_record_with_aware_expiry_is_read():
    announcement = Announcement.from_dict({
        "id": 3, "message": "m", "expires_at": "2099-01-01T00:00:00Z",
    })
    assert announcement.expiry is ExpiryPolicy.HOURS_48
