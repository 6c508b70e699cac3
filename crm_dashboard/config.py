from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from crm_dashboard.exceptions import ConfigurationError


#
# Shared theme tokens
# - Centralized here; components/styles.py turns them into CSS variables.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F8FAFC",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",        # card surface
    # Accents
    "accent_primary": "#2563EB",    # blue 600
    "accent_secondary": "#1D4ED8",  # blue 700 (hover)
    "navy_900": "#0F172A",
    "navy_800": "#1E293B",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.65)",
    "border_color": "#E5E7EB",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 12,
    # Status colors
    "success": "#22C55E",
    "warning": "#F59E0B",
    "danger": "#EF4444",
    # Gender series
    "male": "#3B82F6",
    "female": "#EC4899",
}


@dataclass(frozen=True)
class AppConfig:
    # Backend REST root, e.g. https://crm.example.com/api
    api_base_url: str
    # Prefix for server-provided relative photo paths
    media_base_url: str

    # Route the navigator falls back to whenever the credential is invalidated
    login_path: str

    # Transport timeout in seconds; None leaves requests without a timeout
    request_timeout: Optional[float]

    default_avatar_url: str

    log_level: str
    log_format: str


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got {raw!r}")
    return value


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Blank values count as unset
    """
    load_dotenv(override=False)

    return AppConfig(
        api_base_url=(_getenv("API_BASE_URL", "http://localhost:8000/api") or "").rstrip("/"),
        media_base_url=_getenv("MEDIA_BASE_URL", "http://localhost:8000") or "",
        login_path=_getenv("LOGIN_PATH", "/login") or "/login",
        request_timeout=_parse_timeout(_getenv("REQUEST_TIMEOUT")),
        default_avatar_url=_getenv("DEFAULT_AVATAR_URL", "/assets/images/default-avatar.png") or "",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_format=(_getenv("LOG_FORMAT", "standard") or "standard").lower(),
    )
