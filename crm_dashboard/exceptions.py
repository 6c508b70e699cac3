"""Exception hierarchy for the CRM dashboard access layer."""

from __future__ import annotations

from typing import Any, Optional


class DashboardError(Exception):
    """Base exception for all dashboard errors."""


class ConfigurationError(DashboardError):
    """Raised when configuration is invalid."""


class ApiError(DashboardError):
    """Raised for transport failures and non-401 error responses.

    ``status_code`` is None when no response was received at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def detail(self) -> Optional[str]:
        """Structured ``detail`` message from the error payload, if any."""
        if isinstance(self.payload, dict):
            detail = self.payload.get("detail")
            if isinstance(detail, str) and detail.strip():
                return detail
        return None


class AuthenticationError(ApiError):
    """Raised for 401 responses, after the credential has been purged."""


class MalformedResponseError(DashboardError):
    """Raised when a payload does not have the expected shape."""


class PreconditionError(DashboardError):
    """Raised when an action starts without a credential or identity."""


def user_message(exc: BaseException, fallback: str) -> str:
    """Pick the text shown to the user for ``exc``.

    Server ``detail`` wins over the generic transport message, which wins
    over ``fallback``.
    """
    if isinstance(exc, ApiError) and exc.detail:
        return exc.detail
    text = str(exc).strip()
    return text or fallback
