import pytest

from api.exceptions import AcademyAuthError, AcademyConnectionError
from models import Role
from services.auth import AuthService, Session, guard
from services.errors import ValidationError
from services.messages import ACCESS_DENIED, AUTH_REQUIRED


def test_guard_without_session_redirects_to_login():
    decision = guard(None, Role.COACH)
    assert not decision.allowed
    assert decision.redirect_to == "login"
    assert decision.message == AUTH_REQUIRED


def test_guard_without_role_redirects_to_login():
    assert guard(Session(email="a@b.c"), Role.PARENT).message == AUTH_REQUIRED


def test_guard_parent_on_coach_page_is_denied():
    decision = guard(Session(email="p@x.com", role=Role.PARENT), Role.COACH)
    assert not decision.allowed
    assert decision.redirect_to == "login"
    assert decision.message == ACCESS_DENIED


def test_guard_matching_role_is_allowed():
    decision = guard(Session(email="c@x.com", role=Role.COACH), Role.COACH)
    assert decision.allowed
    assert decision.redirect_to is None


def test_admin_is_not_a_coach():
    assert not guard(Session(role=Role.ADMIN), Role.COACH).allowed


def test_login_builds_session_from_response(client):
    client.login.return_value = {
        "access_token": "tok-123",
        "token_type": "bearer",
        "user": {"email": "coach@baseline.in", "role": "coach"},
    }
    session = AuthService(client).login(" coach@baseline.in ", "secret")

    client.login.assert_called_once_with("coach@baseline.in", "secret")
    client.set_access_token.assert_called_once_with("tok-123")
    assert session == Session(email="coach@baseline.in", role=Role.COACH, access_token="tok-123")


def test_login_requires_credentials(client):
    with pytest.raises(ValidationError):
        AuthService(client).login("", "secret")
    client.login.assert_not_called()


def test_mock_login_trusts_selected_role(client):
    session = AuthService(client, mock_mode=True).login("mum@example.com", "x", Role.PARENT)
    assert session.role is Role.PARENT
    assert session.access_token is None
    client.login.assert_not_called()


def test_logout_clears_token_even_when_server_fails(client):
    client.logout.side_effect = AcademyConnectionError("offline")
    service = AuthService(client)

    with pytest.raises(AcademyConnectionError):
        service.logout(Session(email="c@x.com", role=Role.COACH, access_token="tok"))

    client.set_access_token.assert_called_with(None)


def test_refresh_replaces_token(client):
    client.refresh_token.return_value = {"access_token": "new"}
    session = AuthService(client).refresh(Session(email="c@x.com", role=Role.COACH, access_token="old"))
    assert session.access_token == "new"
    assert session.role is Role.COACH


def test_login_rejects_unknown_role(client):
    client.login.return_value = {"access_token": "t", "role": "teacher"}

    with pytest.raises(AcademyAuthError):
        AuthService(client).login("t@x.com", "secret")

    client.set_access_token.assert_not_called()


def test_login_rejects_missing_role(client):
    client.login.return_value = {"access_token": "t"}

    with pytest.raises(AcademyAuthError):
        AuthService(client).login("t@x.com", "secret")

    client.set_access_token.assert_not_called()


def test_login_accepts_top_level_role(client):
    client.login.return_value = {"access_token": "t", "role": "Parent"}
    session = AuthService(client).login("p@x.com", "secret")
    assert session.role is Role.PARENT
    assert guard(session, Role.PARENT).allowed
