"""
Session / credential context.

The credential and the current route live in one mutable mapping that is
handed in from outside: `st.session_state` in the app, a plain dict in tests.
Nothing here touches Streamlit directly.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, MutableMapping, Optional

from crm_dashboard.exceptions import ApiError, MalformedResponseError
from crm_dashboard.logging_config import get_logger

if TYPE_CHECKING:
    from crm_dashboard.data.client import ApiClient

logger = get_logger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"
ROLE_KEY = "role"
ROUTE_KEY = "route"

ROLES = ("employee", "admin", "superadmin")


class TokenStore:
    """Key-value persistence for the credential and the signed-in user."""

    def __init__(self, storage: MutableMapping[str, Any]):
        self._storage = storage

    def get(self, key: str) -> Optional[str]:
        value = self._storage.get(key)
        return value if value else None

    def set(self, key: str, value: str) -> None:
        self._storage[key] = value

    def remove(self, key: str) -> None:
        if key in self._storage:
            del self._storage[key]

    @property
    def access_token(self) -> Optional[str]:
        return self.get(ACCESS_TOKEN_KEY)

    def remove_access_token(self) -> None:
        self.remove(ACCESS_TOKEN_KEY)


class Navigator:
    """Records the route the app should render next."""

    def __init__(self, storage: MutableMapping[str, Any], login_path: str):
        self._storage = storage
        self.login_path = login_path

    @property
    def route(self) -> Optional[str]:
        return self._storage.get(ROUTE_KEY)

    def go(self, route: str) -> None:
        self._storage[ROUTE_KEY] = route

    def to_login(self) -> None:
        self.go(self.login_path)

    @property
    def at_login(self) -> bool:
        return self.route == self.login_path


@dataclass(frozen=True)
class User:
    id: str
    type: Optional[str] = None
    profile: Optional[dict] = None
    dashboard_url: Optional[str] = None
    last_logged_in: Optional[str] = None

    @classmethod
    def from_login_payload(cls, data: dict) -> "User":
        user_id = data.get("user_id")
        if user_id is None or str(user_id).strip() == "":
            raise MalformedResponseError("Login response is missing user_id")
        return cls(
            id=str(user_id),
            type=data.get("user_type"),
            profile=data.get("profile"),
            dashboard_url=data.get("dashboard_url"),
            last_logged_in=data.get("last_logged_in"),
        )

    @property
    def display_name(self) -> str:
        if isinstance(self.profile, dict):
            name = self.profile.get("full_name") or self.profile.get("name")
            if name:
                return str(name)
        return self.id


@dataclass(frozen=True)
class LoginResult:
    success: bool = False
    requires_otp: bool = False
    otp_id: Optional[str] = None
    expires_at: Optional[str] = None


class AuthSession:
    """Process-wide authentication state, made explicit and injectable."""

    def __init__(self, tokens: TokenStore, navigator: Navigator):
        self.tokens = tokens
        self.navigator = navigator

    @property
    def access_token(self) -> Optional[str]:
        return self.tokens.access_token

    @property
    def role(self) -> Optional[str]:
        return self.tokens.get(ROLE_KEY)

    @property
    def user(self) -> Optional[User]:
        raw = self.tokens.get(USER_KEY)
        if not raw:
            return None
        try:
            return User(**json.loads(raw))
        except (TypeError, ValueError):
            logger.warning("Discarding unreadable stored user record")
            self.tokens.remove(USER_KEY)
            return None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.user and self.role)

    def login(
        self,
        client: "ApiClient",
        identifier: str,
        password: str,
        role: str,
        otp: Optional[str] = None,
    ) -> LoginResult:
        """
        Two-step login:
        - first call without `otp` may answer with an OTP challenge
        - a response carrying `access` establishes the session
        """
        payload: dict[str, Any] = {"identifier": identifier, "password": password}
        if otp:
            payload["otp"] = otp

        data = client.post(f"/login/{role.lower()}/", json=payload).data
        if not isinstance(data, dict):
            raise MalformedResponseError("Unexpected login response")

        if not otp and data.get("otp_id") and data.get("expires_at"):
            logger.info("Login for %s requires OTP", identifier)
            return LoginResult(requires_otp=True, otp_id=data["otp_id"], expires_at=data["expires_at"])

        if data.get("access"):
            user = User.from_login_payload(data)
            self.tokens.set(ACCESS_TOKEN_KEY, data["access"])
            if data.get("refresh"):
                self.tokens.set(REFRESH_TOKEN_KEY, data["refresh"])
            self.tokens.set(USER_KEY, json.dumps(asdict(user)))
            self.tokens.set(ROLE_KEY, role)
            logger.info("Signed in user %s as %s", user.id, role)
            return LoginResult(success=True)

        raise MalformedResponseError("Unexpected login response")

    def clear(self) -> None:
        """Forget the credential and identity locally; no backend call."""
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY, ROLE_KEY):
            self.tokens.remove(key)

    def logout(self, client: Optional["ApiClient"] = None) -> None:
        """Tell the backend (best effort), then always purge and go to login."""
        try:
            if client is not None:
                client.post("/logout/", json={"refresh": self.tokens.get(REFRESH_TOKEN_KEY)})
                logger.info("Backend logout succeeded")
        except ApiError as e:
            logger.warning("Backend logout failed (%s); clearing client-side session anyway", e)
        finally:
            self.clear()
            if not self.navigator.at_login:
                self.navigator.to_login()
