"""
BaseLine Academy Services Package
Attendance, registrations, tournaments, roster, announcements and sign-in
"""

from .announcements import AnnouncementService
from .attendance import AttendanceBoard
from .auth import AuthService, GuardDecision, Session, guard
from .coalescing_cache import CoalescingCache
from .errors import InvalidTransition, NothingToExport, ValidationError
from .registrations import RegistrationForm, RegistrationService
from .roster import RosterService
from .tournaments import TournamentForm, TournamentService

__all__ = [
    'AnnouncementService',
    'AttendanceBoard',
    'AuthService',
    'GuardDecision',
    'Session',
    'guard',
    'CoalescingCache',
    'InvalidTransition',
    'NothingToExport',
    'ValidationError',
    'RegistrationForm',
    'RegistrationService',
    'RosterService',
    'TournamentForm',
    'TournamentService',
]
