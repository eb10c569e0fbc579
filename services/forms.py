"""
BaseLine Academy - Public Forms
Contact and schedule-booking submissions
"""

import logging
import re
from dataclasses import dataclass
from typing import List

from site_content import EXPERIENCE_LEVELS, batch_by_id, time_slots
from .errors import ValidationError

logger = logging.getLogger(__name__)

CONTACT_THANKS = "Thanks for reaching out! We'll get back to you shortly."
BOOKING_THANKS = "We've received your booking request. We'll contact you shortly to confirm."

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _missing(fields) -> List[str]:
    return [label for label, value in fields if not str(value or "").strip()]


@dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""


@dataclass
class BookingForm:
    batch: str = ""
    time_slot: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    age: str = ""
    experience: str = "beginner"


def validate_contact(form: ContactForm) -> List[str]:
    errors = []
    missing = _missing([("Name", form.name), ("Email", form.email),
                        ("Subject", form.subject), ("Message", form.message)])
    if missing:
        errors.append(f"Please fill in all required fields: {', '.join(missing)}")
    if form.email.strip() and not _EMAIL.match(form.email.strip()):
        errors.append("Please enter a valid email address.")
    return errors


def validate_booking(form: BookingForm) -> List[str]:
    errors = []
    if batch_by_id(form.batch) is None:
        errors.append("Please select a training program.")
    elif form.time_slot not in time_slots(form.batch):
        errors.append("Please select a time slot.")

    missing = _missing([("Name", form.name), ("Email", form.email),
                        ("Phone", form.phone), ("Age", form.age)])
    if missing:
        errors.append(f"Please fill in all required fields: {', '.join(missing)}")
    if form.email.strip() and not _EMAIL.match(form.email.strip()):
        errors.append("Please enter a valid email address.")
    if str(form.age).strip():
        try:
            if int(form.age) < 8:
                errors.append("Programs are open to players aged 8 and up.")
        except ValueError:
            errors.append("Age must be a number.")
    if form.experience not in EXPERIENCE_LEVELS:
        errors.append("Please choose an experience level.")
    return errors


def submit_contact(form: ContactForm) -> str:
    errors = validate_contact(form)
    if errors:
        raise ValidationError(errors)
    logger.info("Contact message from %s <%s>: %s", form.name, form.email, form.subject)
    return CONTACT_THANKS


def submit_booking(form: BookingForm) -> str:
    errors = validate_booking(form)
    if errors:
        raise ValidationError(errors)
    logger.info("Booking request from %s for %s at %s", form.name, form.batch, form.time_slot)
    return BOOKING_THANKS
