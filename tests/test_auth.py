"""Tests for the session context: login, OTP, logout."""

import json

import pytest

from crm_dashboard.auth import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    ROLE_KEY,
    USER_KEY,
    Navigator,
    TokenStore,
    User,
)
from crm_dashboard.exceptions import ApiError, MalformedResponseError

from conftest import make_response

LOGIN_OK = {
    "access": "acc-1",
    "refresh": "ref-1",
    "user_id": "EMP001",
    "user_type": "employee",
    "profile": {"full_name": "Ravi Kumar"},
    "dashboard_url": "/dashboard/employee",
    "last_logged_in": "2026-10-18T09:00:00Z",
}


class TestTokenStore:
    def test_get_set_remove(self) -> None:
        store = TokenStore({})
        store.set(ACCESS_TOKEN_KEY, "t")

        assert store.access_token == "t"
        store.remove_access_token()
        assert store.access_token is None

    def test_remove_missing_key_is_noop(self) -> None:
        TokenStore({}).remove(ACCESS_TOKEN_KEY)

    def test_empty_value_reads_as_absent(self) -> None:
        assert TokenStore({ACCESS_TOKEN_KEY: ""}).access_token is None


class TestNavigator:
    def test_to_login(self) -> None:
        state: dict = {}
        nav = Navigator(state, "/login")

        nav.to_login()

        assert nav.route == "/login"
        assert nav.at_login


class TestSessionState:
    def test_authenticated_needs_token_user_and_role(self, auth, signed_in) -> None:
        assert auth.is_authenticated
        assert auth.user == User(id="EMP001", type="employee", profile={"full_name": "Ravi Kumar"})
        assert auth.user.display_name == "Ravi Kumar"

        del signed_in[ROLE_KEY]
        assert not auth.is_authenticated

    def test_unreadable_user_is_discarded(self, auth, storage) -> None:
        storage[USER_KEY] = "{not json"

        assert auth.user is None
        assert USER_KEY not in storage


class TestLogin:
    def test_success_persists_session(self, auth, client, http, storage) -> None:
        http.add("POST", "/login/employee/", make_response(200, LOGIN_OK))

        result = auth.login(client, "ravi@example.com", "pw", "Employee")

        assert result.success
        assert http.calls[0].json == {"identifier": "ravi@example.com", "password": "pw"}
        assert storage[ACCESS_TOKEN_KEY] == "acc-1"
        assert storage[REFRESH_TOKEN_KEY] == "ref-1"
        assert storage[ROLE_KEY] == "Employee"
        assert json.loads(storage[USER_KEY])["id"] == "EMP001"
        assert auth.is_authenticated

    def test_otp_challenge(self, auth, client, http, storage) -> None:
        http.add(
            "POST",
            "/login/admin/",
            make_response(200, {"otp_id": "otp-9", "expires_at": "2026-10-19T10:05:00Z"}),
        )

        result = auth.login(client, "admin1", "pw", "admin")

        assert result.requires_otp
        assert result.otp_id == "otp-9"
        assert ACCESS_TOKEN_KEY not in storage

    def test_otp_second_step(self, auth, client, http) -> None:
        http.add("POST", "/login/admin/", make_response(200, LOGIN_OK))

        result = auth.login(client, "admin1", "pw", "admin", otp="123456")

        assert result.success
        assert http.calls[0].json["otp"] == "123456"

    def test_unexpected_response(self, auth, client, http) -> None:
        http.add("POST", "/login/employee/", make_response(200, {"hello": "world"}))

        with pytest.raises(MalformedResponseError, match="Unexpected login response"):
            auth.login(client, "x", "y", "employee")

    @pytest.mark.parametrize("user_id", [None, "", "  "])
    def test_missing_user_id_is_rejected(self, auth, client, http, storage, user_id) -> None:
        payload = {k: v for k, v in LOGIN_OK.items() if k != "user_id"}
        if user_id is not None:
            payload["user_id"] = user_id
        http.add("POST", "/login/employee/", make_response(200, payload))

        with pytest.raises(MalformedResponseError, match="user_id"):
            auth.login(client, "ravi@example.com", "pw", "employee")

        assert ACCESS_TOKEN_KEY not in storage
        assert USER_KEY not in storage
        assert not auth.is_authenticated

    def test_bad_credentials_propagate(self, auth, client, http) -> None:
        http.add("POST", "/login/employee/", make_response(400, {"detail": "Invalid credentials."}))

        with pytest.raises(ApiError) as exc_info:
            auth.login(client, "x", "y", "employee")

        assert exc_info.value.detail == "Invalid credentials."


class TestLogout:
    def test_logout_notifies_backend_and_clears(self, auth, client, http, signed_in) -> None:
        signed_in[REFRESH_TOKEN_KEY] = "ref-1"
        http.add("POST", "/logout/", make_response(205))

        auth.logout(client)

        assert http.calls[0].json == {"refresh": "ref-1"}
        assert http.calls[0].headers["Authorization"] == "Bearer tok-123"
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY, ROLE_KEY):
            assert key not in signed_in
        assert signed_in["route"] == "/login"

    def test_logout_clears_even_when_backend_fails(self, auth, client, http, signed_in) -> None:
        http.add("POST", "/logout/", make_response(500))

        auth.logout(client)

        assert not auth.is_authenticated
        assert signed_in["route"] == "/login"

    def test_clear_is_local_only(self, auth, http, signed_in) -> None:
        auth.clear()

        assert http.calls == []
        assert not auth.is_authenticated
        assert signed_in["route"] == "/dashboard"
