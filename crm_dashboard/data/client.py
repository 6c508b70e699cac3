"""
Authenticated REST client.

Single choke point for every backend call:
- attaches `Authorization: Bearer <token>` when a credential is stored
- on 401, purges the credential and sends the navigator to login, then raises
- every other failure is passed through unchanged (no retries, no backoff)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from crm_dashboard.auth import AuthSession
from crm_dashboard.config import AppConfig
from crm_dashboard.exceptions import ApiError, AuthenticationError
from crm_dashboard.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    data: Any = None


def _decode(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


class ApiClient:
    def __init__(self, cfg: AppConfig, auth: AuthSession, http: Optional[requests.Session] = None):
        self.cfg = cfg
        self.auth = auth
        self._http = http if http is not None else requests.Session()
        self._headers = {"Content-Type": "application/json"}

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.cfg.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> ApiResponse:
        url = self.url(path)
        merged = {**self._headers, **(headers or {})}
        token = self.auth.access_token
        if token:
            merged["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s (authenticated=%s)", method.upper(), url, bool(token))
        try:
            resp = self._http.request(
                method.upper(),
                url,
                json=json,
                params=params,
                headers=merged,
                timeout=self.cfg.request_timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed before a response arrived: %s", method.upper(), url, e)
            raise ApiError("Network Error") from e

        if resp.status_code == 401:
            logger.warning("401 from %s; clearing credential and redirecting to login", url)
            self.auth.tokens.remove_access_token()
            self.auth.navigator.to_login()
            raise AuthenticationError(
                "Request failed with status code 401",
                status_code=401,
                payload=_decode(resp),
            )

        if resp.status_code >= 400:
            logger.warning("%s %s returned %s", method.upper(), url, resp.status_code)
            raise ApiError(
                f"Request failed with status code {resp.status_code}",
                status_code=resp.status_code,
                payload=_decode(resp),
            )

        return ApiResponse(status_code=resp.status_code, data=_decode(resp))

    def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return self.request("PUT", path, json=json, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return self.request("DELETE", path, **kwargs)


def get_api_client(cfg: AppConfig, auth: AuthSession) -> ApiClient:
    """Factory function to get an API client instance."""
    return ApiClient(cfg, auth)
