# User-facing wording shared by the pages and services.
TRY_AGAIN = "Something went wrong. Please try again."
NOTHING_TO_EXPORT = "No registrations to export for this tournament yet."
AUTH_REQUIRED = "Authentication required. Please log in to continue."
ACCESS_DENIED = "Access denied. Your account cannot open that page."
ATTENDANCE_SAVED = "Attendance saved."
ATTENDANCE_SAVE_FAILED = "Could not save attendance. Please try again."
ATTENDANCE_DATE_DISABLED = "Attendance can only be marked up to {days} days ahead."
REGISTRATION_FAILED = "There was a problem saving your registration. Please try again."
REGISTRATION_SUCCESS = "Your team has been registered for the tournament."
CANCEL_NEEDS_CONFIRMATION = "Please confirm the cancellation first."
__all__ = [
    "TRY_AGAIN", "NOTHING_TO_EXPORT", "AUTH_REQUIRED", "ACCESS_DENIED",
    "ATTENDANCE_SAVED", "ATTENDANCE_SAVE_FAILED", "ATTENDANCE_DATE_DISABLED",
    "REGISTRATION_FAILED", "REGISTRATION_SUCCESS", "CANCEL_NEEDS_CONFIRMATION",
]
