# =============================================================================
# tests/test_friends_api_client.py - API Client Tests
# =============================================================================
# The HTTP session is replaced with a mock returning canned responses, so
# these tests check URLs, bodies and (data, error) unwrapping only.
# =============================================================================

import json
from unittest.mock import MagicMock

import pytest
import requests

from friends_api_client import FriendsAPI


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://testserver"
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return FriendsAPI(base_url="http://localhost:9090/", session=session)


class TestRequests:

    def test_get_user(self, api, session):
        session.request.return_value = make_response(200, {"user": {"user_id": 1, "name": "Gemma"}})

        user, error = api.get_user(1)

        assert error is None
        assert user == {"user_id": 1, "name": "Gemma"}
        session.request.assert_called_once_with(
            method="GET", url="http://localhost:9090/api/users/1", json=None, timeout=15
        )

    def test_register_user_sends_body(self, api, session):
        session.request.return_value = make_response(201, {"user": {"user_id": 7}})

        user, error = api.register_user("Johny English", "07900000007")

        assert (user, error) == ({"user_id": 7}, None)
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == "http://localhost:9090/api/users"
        assert kwargs["json"] == {"name": "Johny English", "phoneNumber": "07900000007"}

    def test_add_friend(self, api, session):
        session.request.return_value = make_response(201, {"acknowledged": True})

        acknowledged, error = api.add_friend(6, "07900000001")

        assert (acknowledged, error) == (True, None)
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PATCH"
        assert kwargs["url"].endswith("/api/users/6/friends")
        assert kwargs["json"] == {"phoneNumber": "07900000001"}

    def test_list_friends(self, api, session):
        session.request.return_value = make_response(200, {"friendList": [{"user_id": 2}]})
        assert api.list_friends(6) == ([{"user_id": 2}], None)

    @pytest.mark.parametrize(
        "call,body",
        [
            (lambda api: api.start_journey(6, {"lat": 1, "long": 1}, {"lat": 2, "long": 2}),
             {"status": True, "start": {"lat": 1, "long": 1}, "end": {"lat": 2, "long": 2}}),
            (lambda api: api.end_journey(6), {"status": False}),
            (lambda api: api.update_current_location(6, {"lat": 1, "long": 1}), {"current": {"lat": 1, "long": 1}}),
        ],
    )
    def test_location_calls(self, api, session, call, body):
        session.request.return_value = make_response(201, {"acknowledged": True})

        assert call(api) == (True, None)
        kwargs = session.request.call_args.kwargs
        assert kwargs["url"].endswith("/api/users/6/location")
        assert kwargs["json"] == body

    def test_custom_prefix(self, session):
        api = FriendsAPI(base_url="http://localhost:9090", prefix="", session=session)
        session.request.return_value = make_response(200, {"status": "ok"})
        api.health()
        assert session.request.call_args.kwargs["url"] == "http://localhost:9090/health"


class TestErrors:

    def test_api_error_message_is_returned(self, api, session):
        session.request.return_value = make_response(404, {"msg": "Invalid phone number"})

        user, error = api.login("07900000099")

        assert user is None
        assert error == {"status_code": 404, "message": "Invalid phone number"}

    def test_failed_mutation_reports_false(self, api, session):
        session.request.return_value = make_response(400, {"msg": "Bad request"})

        acknowledged, error = api.start_journey(6, None, {"lat": 2, "long": 2})

        assert acknowledged is False
        assert error["status_code"] == 400

    def test_connection_error(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")

        friends, error = api.list_friends(6)

        assert friends == []
        assert error == {"status_code": None, "message": "refused"}

    def test_unexpected_body(self, api, session):
        session.request.return_value = make_response(200, {"something": "else"})

        user, error = api.get_user(1)

        assert user is None
        assert "user" in error["message"]
