"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import pytest
import requests

from crm_dashboard.auth import ACCESS_TOKEN_KEY, ROLE_KEY, USER_KEY, AuthSession, Navigator, TokenStore
from crm_dashboard.config import AppConfig
from crm_dashboard.data.client import ApiClient

BASE_URL = "https://crm.test/api"


def make_response(status_code: int = 200, data: Any = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    if data is not None:
        resp._content = json.dumps(data).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


@dataclass
class Call:
    method: str
    url: str
    json: Any
    headers: dict
    timeout: Optional[float]


@dataclass
class FakeHttp:
    """Stands in for requests.Session; answers from a per-(method, path) queue."""

    routes: dict = field(default_factory=dict)
    calls: list = field(default_factory=list)
    on_request: Optional[Callable[[Call], None]] = None

    def add(self, method: str, path: str, *responses: Any) -> None:
        self.routes.setdefault((method.upper(), BASE_URL + path), []).extend(responses)

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        call = Call(method=method, url=url, json=json, headers=dict(headers or {}), timeout=timeout)
        self.calls.append(call)
        if self.on_request is not None:
            self.on_request(call)
        queue = self.routes.get((method, url))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url}")
        answer = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def calls_to(self, method: str, path: str) -> list:
        return [c for c in self.calls if c.method == method and c.url == BASE_URL + path]


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        api_base_url=BASE_URL,
        media_base_url="https://crm.test/media",
        login_path="/login",
        request_timeout=None,
        default_avatar_url="/assets/images/default-avatar.png",
        log_level="INFO",
        log_format="standard",
    )


@pytest.fixture
def storage() -> dict:
    return {}


@pytest.fixture
def auth(storage: dict, cfg: AppConfig) -> AuthSession:
    return AuthSession(TokenStore(storage), Navigator(storage, cfg.login_path))


@pytest.fixture
def signed_in(storage: dict) -> dict:
    """Session of employee EMP001 with a valid-looking credential."""
    storage[ACCESS_TOKEN_KEY] = "tok-123"
    storage[USER_KEY] = json.dumps({"id": "EMP001", "type": "employee", "profile": {"full_name": "Ravi Kumar"}})
    storage[ROLE_KEY] = "employee"
    storage["route"] = "/dashboard"
    return storage


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def client(cfg: AppConfig, auth: AuthSession, http: FakeHttp) -> ApiClient:
    return ApiClient(cfg, auth, http=http)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def customers_payload() -> list[dict]:
    return [
        {
            "user_id": "CUST100",
            "full_name": "Anitha Reddy",
            "gender": "female",
            "account_status": True,
            "profile_verified": False,
            "profile_photos": "/photos/cust100.jpg",
        },
        {
            "user_id": "CUST101",
            "full_name": "Suresh Babu",
            "gender": "male",
            "account_status": False,
            "profile_verified": True,
            "profile_photos": None,
        },
    ]
