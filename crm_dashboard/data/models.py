"""Payload records returned by the backend."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Literal, Optional

from crm_dashboard.exceptions import MalformedResponseError


def _count(name: str, raw: Any) -> int:
    """Integer counter; missing reads as 0, bools, fractions and text are malformed."""
    if raw is None:
        return 0
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw.strip())
    raise MalformedResponseError(f"Statistics field {name} is not a count: {raw!r}")


@dataclass(frozen=True)
class StatisticsSnapshot:
    total_customers: int = 0
    total_male_customers: int = 0
    total_female_customers: int = 0
    total_disabled_customers: int = 0
    male_live_customers: int = 0
    male_offline_customers: int = 0
    female_live_customers: int = 0
    female_offline_customers: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "StatisticsSnapshot":
        if not isinstance(payload, dict):
            raise MalformedResponseError("Invalid statistics data structure received.")
        return cls(**{f.name: _count(f.name, payload.get(f.name)) for f in fields(cls)})


@dataclass(frozen=True)
class CustomerSummary:
    user_id: str
    full_name: Optional[str] = None
    gender: Optional[str] = None
    account_status: bool = False
    profile_verified: bool = False
    profile_photos: Optional[str] = None

    @classmethod
    def from_payload(cls, item: Any) -> "CustomerSummary":
        if not isinstance(item, dict) or item.get("user_id") in (None, ""):
            raise MalformedResponseError("Unexpected data format for customers.")
        return cls(
            user_id=str(item["user_id"]),
            full_name=item.get("full_name") or None,
            gender=item.get("gender") or None,
            account_status=bool(item.get("account_status")),
            profile_verified=bool(item.get("profile_verified")),
            profile_photos=item.get("profile_photos") or None,
        )


@dataclass(frozen=True)
class CustomerList:
    """A list payload after normalization; `shape` records how it arrived."""

    shape: Literal["array", "envelope"]
    customers: list[CustomerSummary]


def normalize_customer_list(payload: Any) -> CustomerList:
    """
    Accepts either a bare JSON array or an object with a `results` array.
    Anything else raises MalformedResponseError.
    """
    if isinstance(payload, list):
        shape: Literal["array", "envelope"] = "array"
        items = payload
    elif isinstance(payload, dict) and isinstance(payload.get("results"), list):
        shape = "envelope"
        items = payload["results"]
    else:
        raise MalformedResponseError("Unexpected data format for customers.")
    return CustomerList(shape=shape, customers=[CustomerSummary.from_payload(i) for i in items])
