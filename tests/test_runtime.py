"""Tests for view switching: opening a page mounts it again."""

import pytest

from crm_dashboard.controllers.statistics import StatisticsController
from crm_dashboard.controllers.unassigned import UnassignedCustomersController
from crm_dashboard.runtime import CURRENT_VIEW_KEY, VIEW_CONTROLLERS, enter_view

from conftest import make_response

STATS_PATH = "/customers/statistics/"
UNASSIGNED_PATH = "/customers/unassigned/"


@pytest.fixture
def open_page(client, auth, notifier, signed_in):
    """Mimics one script run of the app for the selected view."""

    def _open(view: str) -> None:
        enter_view(view, signed_in)
        key = VIEW_CONTROLLERS[view]
        ctl = signed_in.get(key)
        if ctl is None:
            if view == "statistics":
                ctl = StatisticsController(client, notifier)
            else:
                ctl = UnassignedCustomersController(client, auth, notifier)
            signed_in[key] = ctl
        ctl.mount()

    return _open


class TestEnterView:
    def test_switching_back_refetches(self, open_page, http) -> None:
        http.add("GET", STATS_PATH, make_response(200, {"total_customers": 1}))
        http.add("GET", UNASSIGNED_PATH, make_response(200, []))

        for view in ("statistics", "unassigned", "statistics", "unassigned"):
            open_page(view)

        assert len(http.calls_to("GET", STATS_PATH)) == 2
        assert len(http.calls_to("GET", UNASSIGNED_PATH)) == 2

    def test_rerun_on_same_view_does_not_refetch(self, open_page, http) -> None:
        http.add("GET", UNASSIGNED_PATH, make_response(200, []))

        open_page("unassigned")
        open_page("unassigned")

        assert len(http.calls_to("GET", UNASSIGNED_PATH)) == 1

    def test_switch_drops_only_the_opened_view(self) -> None:
        state = {CURRENT_VIEW_KEY: "statistics", "statistics_controller": "stats", "unassigned_controller": "old"}

        assert enter_view("unassigned", state) is True

        assert "unassigned_controller" not in state
        assert state["statistics_controller"] == "stats"
        assert state[CURRENT_VIEW_KEY] == "unassigned"

    def test_same_view_is_not_a_switch(self) -> None:
        state = {CURRENT_VIEW_KEY: "unassigned", "unassigned_controller": "kept"}

        assert enter_view("unassigned", state) is False
        assert state["unassigned_controller"] == "kept"
