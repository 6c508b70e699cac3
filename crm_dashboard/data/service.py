from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from crm_dashboard.data.client import ApiClient
from crm_dashboard.data.models import CustomerSummary, StatisticsSnapshot, normalize_customer_list
from crm_dashboard.exceptions import DashboardError, MalformedResponseError, user_message
from crm_dashboard.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

STATISTICS_PATH = "customers/statistics/"
UNASSIGNED_PATH = "/customers/unassigned/"
ASSIGN_PATH = "/customers/assign/"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    data: Optional[T] = None
    error: Optional[DashboardError] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _capture(fn: Callable[[], T], fallback_message: str) -> FetchResult[T]:
    try:
        return FetchResult(data=fn())
    except MalformedResponseError as e:
        logger.error("Malformed response: %s", e)
        return FetchResult(error=e, message=user_message(e, fallback_message))
    except DashboardError as e:
        return FetchResult(error=e, message=user_message(e, fallback_message))


def get_statistics(client: ApiClient) -> FetchResult[StatisticsSnapshot]:
    return _capture(
        lambda: StatisticsSnapshot.from_payload(client.get(STATISTICS_PATH).data),
        fallback_message="Failed to load bureau statistics.",
    )


def get_unassigned_customers(client: ApiClient) -> FetchResult[list[CustomerSummary]]:
    def _fetch() -> list[CustomerSummary]:
        page = normalize_customer_list(client.get(UNASSIGNED_PATH).data)
        logger.debug("Unassigned customers: %d (%s payload)", len(page.customers), page.shape)
        return page.customers

    return _capture(_fetch, fallback_message="Failed to load unassigned customers. Please try again.")


def assign_customer(
    client: ApiClient,
    customer_user_id: str,
    employee_user_id: str,
    token: str,
) -> FetchResult[Any]:
    payload = {"customer_user_id": customer_user_id, "employee_user_id": employee_user_id}
    return _capture(
        lambda: client.post(
            client.url(ASSIGN_PATH),
            json=payload,
            headers={"Content-Type": "application/json", "Authorization": f"Bearer {token}"},
        ).data,
        fallback_message="Failed to assign customer.",
    )
