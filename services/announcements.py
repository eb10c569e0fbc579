"""
BaseLine Academy - Announcements
The single home-page announcement slot, kept locally or on the API
"""

import logging
from datetime import datetime
from typing import Optional

from api.client import AcademyAPIClient
from database.local_storage import ANNOUNCEMENT_KEY, CURRENT_ANNOUNCEMENT_KEY, LocalStorage
from models import Announcement, ExpiryPolicy, as_aware
from .errors import ValidationError

logger = logging.getLogger(__name__)

BACKENDS = ("local", "remote")


class AnnouncementService:
    """Publishing replaces whatever was there; expired announcements are cleared on read"""

    def __init__(self, backend: str = "local", storage: Optional[LocalStorage] = None,
                 client: Optional[AcademyAPIClient] = None):
        if backend not in BACKENDS:
            raise ValueError(f"Unknown announcement backend: {backend}")
        if backend == "local" and storage is None:
            raise ValueError("The local announcement backend needs a LocalStorage")
        if backend == "remote" and client is None:
            raise ValueError("The remote announcement backend needs an API client")
        self.backend = backend
        self.storage = storage
        self.client = client

    def publish(self, message: str, expiry: ExpiryPolicy,
                now: Optional[datetime] = None) -> Announcement:
        if not message or not message.strip():
            raise ValidationError(["Announcement message cannot be empty."])
        now = now or datetime.now()
        announcement = Announcement.publish(message.strip(), ExpiryPolicy(expiry), now)

        if self.backend == "remote":
            self._clear_remote()
            announcement = self.client.create_announcement(announcement.message,
                                                           announcement.expires_at)
        else:
            self.storage.set(CURRENT_ANNOUNCEMENT_KEY, announcement.to_dict())
            self.storage.set(ANNOUNCEMENT_KEY, announcement.message)

        logger.info("Published announcement (%s)", announcement.expiry.value)
        return announcement

    def current(self, now: Optional[datetime] = None) -> Optional[Announcement]:
        now = now or datetime.now()
        announcement = self._read()
        if announcement is None:
            return None
        if announcement.is_expired(now):
            logger.info("Announcement expired at %s, clearing", announcement.expires_at)
            self.clear()
            return None
        return announcement

    def clear(self) -> None:
        if self.backend == "remote":
            self._clear_remote()
        else:
            self.storage.remove(CURRENT_ANNOUNCEMENT_KEY)
            self.storage.remove(ANNOUNCEMENT_KEY)

    def _read(self) -> Optional[Announcement]:
        if self.backend == "remote":
            announcements = self.client.get_announcements()
            if not announcements:
                return None
            return max(announcements, key=lambda a: as_aware(a.created_at))

        data = self.storage.get(CURRENT_ANNOUNCEMENT_KEY)
        if isinstance(data, dict):
            try:
                return Announcement.from_dict(data)
            except (TypeError, ValueError) as e:
                logger.warning("Stored announcement unreadable: %s", e)
                return None
        # Older pages stored only the message text
        message = self.storage.get(ANNOUNCEMENT_KEY)
        if message:
            return Announcement(message=str(message), expiry=ExpiryPolicy.MANUAL,
                                created_at=datetime.now())
        return None

    def _clear_remote(self) -> None:
        for announcement in self.client.get_announcements():
            if announcement.id is not None:
                self.client.delete_announcement(announcement.id)
