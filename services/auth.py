"""
BaseLine Academy - Authentication
Per-tab session, login/logout against the API and the route guard
"""

import logging
from dataclasses import dataclass
from typing import Optional

from api.client import AcademyAPIClient
from api.exceptions import AcademyAuthError
from models import Role
from .errors import ValidationError
from .messages import ACCESS_DENIED, AUTH_REQUIRED

logger = logging.getLogger(__name__)

LOGIN_PAGE = "login"


@dataclass
class Session:
    """What one browser tab knows about its user"""
    email: Optional[str] = None
    role: Optional[Role] = None
    access_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.role is not None


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    redirect_to: Optional[str] = None
    message: Optional[str] = None


def guard(session: Optional[Session], required_role: Role) -> GuardDecision:
    """Decide whether a protected page may render for this session"""
    if session is None or session.role is None:
        return GuardDecision(False, LOGIN_PAGE, AUTH_REQUIRED)
    if session.role != required_role:
        return GuardDecision(False, LOGIN_PAGE, ACCESS_DENIED)
    return GuardDecision(True)


def _role_from(value) -> Role:
    """Map the server's role string; a missing or unknown role is refused"""
    if not value:
        raise AcademyAuthError("Sign-in response did not include a role")
    try:
        return Role(str(value).lower())
    except ValueError:
        raise AcademyAuthError(f"Unrecognised role '{value}'") from None


class AuthService:
    def __init__(self, client: AcademyAPIClient, mock_mode: bool = False):
        self.client = client
        self.mock_mode = mock_mode

    def login(self, email: str, password: str, role: Optional[Role] = None) -> Session:
        """Sign in against the API; in mock mode the chosen role is trusted"""
        if not email.strip() or not password:
            raise ValidationError(["Email and password are required."])

        if self.mock_mode:
            role = Role(role or Role.PARENT)
            logger.info("Mock sign-in for %s as %s", email.strip(), role.value)
            return Session(email=email.strip(), role=role)

        data = self.client.login(email.strip(), password)
        token = data.get("access_token")
        user = data.get("user") or {}
        role = _role_from(data.get("role") or user.get("role"))

        self.client.set_access_token(token)
        logger.info("Signed in %s as %s", email.strip(), role.value)
        return Session(email=user.get("email", email.strip()), role=role, access_token=token)

    def logout(self, session: Session) -> Session:
        """Tell the server, then forget the token locally whatever it answered"""
        try:
            if session.access_token:
                self.client.logout()
        finally:
            self.client.set_access_token(None)
            logger.info("Signed out %s", session.email)
        return Session()

    def refresh(self, session: Session) -> Session:
        data = self.client.refresh_token()
        token = data.get("access_token", session.access_token)
        self.client.set_access_token(token)
        return Session(email=session.email, role=session.role, access_token=token)

    def restore(self, session: Session) -> None:
        """Re-attach a tab's token to the shared client before a render"""
        self.client.set_access_token(session.access_token)
