"""
Bureau statistics controller.

Owns the snapshot shown on the overview page and derives the chart series
and KPI cards from it. A failed fetch keeps the last good snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from crm_dashboard.config import THEME
from crm_dashboard.data import service
from crm_dashboard.data.client import ApiClient
from crm_dashboard.data.models import StatisticsSnapshot
from crm_dashboard.logging_config import get_logger

if TYPE_CHECKING:
    from crm_dashboard.components.feedback import Notifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartSlice:
    name: str
    value: int
    color: str


@dataclass(frozen=True)
class StatCard:
    title: str
    value: str


def _series(*slices: ChartSlice) -> Optional[list[ChartSlice]]:
    # All-zero series render as an empty state instead of a chart
    if not any(s.value > 0 for s in slices):
        return None
    return list(slices)


def gender_distribution(snapshot: Optional[StatisticsSnapshot]) -> Optional[list[ChartSlice]]:
    if snapshot is None:
        return None
    return _series(
        ChartSlice("Male", snapshot.total_male_customers, THEME["male"]),
        ChartSlice("Female", snapshot.total_female_customers, THEME["female"]),
    )


def male_status(snapshot: Optional[StatisticsSnapshot]) -> Optional[list[ChartSlice]]:
    if snapshot is None:
        return None
    return _series(
        ChartSlice("Male Live", snapshot.male_live_customers, THEME["success"]),
        ChartSlice("Male Offline", snapshot.male_offline_customers, THEME["danger"]),
    )


def female_status(snapshot: Optional[StatisticsSnapshot]) -> Optional[list[ChartSlice]]:
    if snapshot is None:
        return None
    return _series(
        ChartSlice("Female Live", snapshot.female_live_customers, THEME["success"]),
        ChartSlice("Female Offline", snapshot.female_offline_customers, THEME["danger"]),
    )


CARD_FIELDS = [
    ("Total Customers", "total_customers"),
    ("Male Customers", "total_male_customers"),
    ("Female Customers", "total_female_customers"),
    ("Disabled Customers", "total_disabled_customers"),
    ("Male Live Customers", "male_live_customers"),
    ("Male Offline Customers", "male_offline_customers"),
    ("Female Live Customers", "female_live_customers"),
    ("Female Offline Customers", "female_offline_customers"),
]


class StatisticsController:
    def __init__(self, client: ApiClient, notifier: "Notifier"):
        self.client = client
        self.notifier = notifier
        self.snapshot: Optional[StatisticsSnapshot] = None
        self.loading = False
        self.error: Optional[str] = None
        self.mounted = False

    def mount(self) -> None:
        """First render only; later reruns reuse the stored snapshot."""
        if self.mounted:
            return
        self.mounted = True
        self.load()

    def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            result = service.get_statistics(self.client)
            if result.ok:
                self.snapshot = result.data
            else:
                logger.warning("Statistics fetch failed: %s", result.message)
                self.error = result.message
                self.notifier.error(result.message or "Failed to load bureau statistics.")
        finally:
            self.loading = False

    def cards(self) -> list[StatCard]:
        cards = []
        for title, field_name in CARD_FIELDS:
            if self.loading:
                value = "..."
            else:
                count = getattr(self.snapshot, field_name, 0) if self.snapshot else 0
                value = f"{count or 0:,}"
            cards.append(StatCard(title, value))
        return cards

    def gender_distribution(self) -> Optional[list[ChartSlice]]:
        return gender_distribution(self.snapshot)

    def male_status(self) -> Optional[list[ChartSlice]]:
        return male_status(self.snapshot)

    def female_status(self) -> Optional[list[ChartSlice]]:
        return female_status(self.snapshot)
