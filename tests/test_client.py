import json
from unittest.mock import MagicMock

import pytest
import requests

from api.client import AcademyAPIClient, CancelToken
from api.exceptions import AcademyAPIError, AcademyAuthError, AcademyConnectionError, RequestCancelled
from models import TournamentStatus


def _response(status=200, body=None):
    response = MagicMock()
    response.status_code = status
    response.content = json.dumps(body).encode() if body is not None else b""
    response.text = response.content.decode()
    response.json.return_value = body
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(http):
    return AcademyAPIClient("http://api.test/", timeout=5, session=http)


def test_get_players_parses_payload(api, http):
    http.request.return_value = _response(body=[
        {"id": 1, "name": "Michael Jordan", "program": "5-Day", "attended_classes": 12},
    ])

    players = api.get_players()

    http.request.assert_called_once_with("GET", "http://api.test/players/", headers={}, timeout=5)
    assert players[0].name == "Michael Jordan"
    assert players[0].initials == "MJ"


def test_bearer_token_is_sent(api, http):
    http.request.return_value = _response(body=[])
    api.set_access_token("tok")

    api.get_tournaments()

    assert http.request.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}


def test_unauthorised_raises_auth_error(api, http):
    http.request.return_value = _response(401, {"detail": "Not authenticated"})
    with pytest.raises(AcademyAuthError) as exc:
        api.get_players()
    assert exc.value.status_code == 401
    assert exc.value.detail == "Not authenticated"


def test_server_error_raises_api_error(api, http):
    http.request.return_value = _response(500, {"detail": "db down"})
    with pytest.raises(AcademyAPIError) as exc:
        api.get_tournament(3)
    assert exc.value.status_code == 500


def test_network_failure_raises_connection_error(api, http):
    http.request.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(AcademyConnectionError):
        api.get_players()


def test_cancelled_token_skips_request(api, http):
    token = CancelToken()
    token.cancel()
    with pytest.raises(RequestCancelled):
        api.get_attendance("2026-05-10", cancel=token)
    http.request.assert_not_called()


def test_token_cancelled_in_flight_discards_response(api, http):
    token = CancelToken()

    def cancel_during(*args, **kwargs):
        token.cancel()
        return _response(body={"1": True})

    http.request.side_effect = cancel_during
    with pytest.raises(RequestCancelled):
        api.get_attendance("2026-05-10", cancel=token)


def test_attendance_keys_are_converted(api, http):
    http.request.return_value = _response(body={"1": True, "2": False})
    assert api.get_attendance("2026-05-10") == {1: True, 2: False}

    http.request.return_value = _response(body={"status": "ok"})
    api.update_attendance("2026-05-10", {1: True})
    assert http.request.call_args.kwargs["json"] == {"attendance": {"1": True}}
    assert http.request.call_args.args == ("PUT", "http://api.test/attendance/2026-05-10")


def test_login_sends_form_fields(api, http):
    http.request.return_value = _response(body={"access_token": "t"})
    api.login("coach@baseline.in", "pw")
    assert http.request.call_args.kwargs["data"] == {
        "username": "coach@baseline.in", "password": "pw", "grant_type": "password",
    }


def test_empty_body_returns_none(api, http):
    http.request.return_value = _response(204)
    assert api.remove_player(4) is None


def test_cancel_tournament_with_status_only_response(api, http):
    http.request.return_value = _response(body={"status": "cancelled"})
    assert api.cancel_tournament(2) is None

    http.request.return_value = _response(body={"id": 2, "title": "T", "date": "2026-06-01",
                                                "location": "X", "status": "cancelled"})
    assert api.cancel_tournament(2).status is TournamentStatus.CANCELLED


def test_register_team_posts_snake_case(api, http):
    from conftest import make_registration

    http.request.return_value = _response(body={"message": "ok"})
    registration = make_registration()

    assert api.register_team(1, registration) is registration
    sent = http.request.call_args.kwargs["json"]
    assert sent["team_name"] == "Phoenix"
    assert sent["player_names"] == registration.player_names


def test_malformed_registration_is_skipped(api, http):
    http.request.return_value = _response(body=[
        {"id": 1, "tournament_id": 7, "team_name": "Phoenix", "player_names": ["Asha"]},
        {"id": 2, "team_name": "No tournament"},
    ])

    registrations = api.get_registrations(7)

    assert [r.team_name for r in registrations] == ["Phoenix"]
