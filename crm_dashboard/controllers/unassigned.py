from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Literal, Optional

from crm_dashboard.auth import AuthSession
from crm_dashboard.data import service
from crm_dashboard.data.client import ApiClient
from crm_dashboard.data.models import CustomerSummary
from crm_dashboard.exceptions import AuthenticationError, DashboardError, PreconditionError, user_message
from crm_dashboard.logging_config import get_logger

if TYPE_CHECKING:
    from crm_dashboard.components.feedback import Notifier

logger = get_logger(__name__)

Status = Literal["idle", "loading", "success", "error"]

ASSIGN_PROMPT = "Are you sure you want to assign this customer to yourself?"
LOGIN_REQUIRED = "Please log in to access this page."


class UnassignedCustomersController:
    """
    State for the unassigned-customers page.

    `pending` holds the ids whose assign call is in flight; an id is added
    before the call and always removed afterwards.
    """

    def __init__(self, client: ApiClient, auth: AuthSession, notifier: "Notifier"):
        self.client = client
        self.auth = auth
        self.notifier = notifier
        self.customers: list[CustomerSummary] = []
        self.status: Status = "idle"
        self.error: Optional[str] = None
        self.pending: set[str] = set()

    @property
    def loading(self) -> bool:
        return self.status == "loading"

    def mount(self) -> None:
        if self.status == "idle":
            self.fetch()

    def fetch(self) -> None:
        if not self.auth.is_authenticated or self.auth.user is None:
            logger.info("No signed-in user; redirecting to login without fetching")
            self.notifier.error(LOGIN_REQUIRED)
            self.auth.clear()
            self.auth.navigator.to_login()
            return

        self.status = "loading"
        self.error = None
        result = service.get_unassigned_customers(self.client)
        if result.ok:
            self.customers = result.data or []
            self.status = "success"
            return

        self.customers = []
        self.error = result.message
        self.status = "error"
        if isinstance(result.error, AuthenticationError):
            self.notifier.error(LOGIN_REQUIRED)
            self.auth.clear()
            self.auth.navigator.to_login()
        else:
            self.notifier.error(result.message or "Failed to load unassigned customers. Please try again.")

    def assign(self, customer_user_id: str, confirm: Callable[[str], bool]) -> bool:
        """Assign one customer to the signed-in employee. Returns True on success."""
        if not confirm(ASSIGN_PROMPT):
            return False

        self.pending.add(customer_user_id)
        try:
            # Also enforced by the client's own bearer handling; kept as an explicit precondition
            token = self.auth.access_token
            user = self.auth.user
            if not token or not self.auth.is_authenticated or user is None:
                raise PreconditionError("No authentication token found. Please log in.")

            result = service.assign_customer(self.client, customer_user_id, user.id, token)
            if not result.ok:
                raise result.error  # type: ignore[misc]

            logger.info("Assigned customer %s to employee %s", customer_user_id, user.id)
            self.notifier.success(f"Customer {customer_user_id} assigned successfully!")
            self.fetch()
            return True
        except DashboardError as e:
            logger.warning("Failed to assign customer %s: %s", customer_user_id, e)
            self.notifier.error(user_message(e, "Failed to assign customer."))
            return False
        finally:
            self.pending.discard(customer_user_id)

    def is_pending(self, customer_user_id: str) -> bool:
        return customer_user_id in self.pending

    def filtered(self, search_term: str = "") -> list[CustomerSummary]:
        term = search_term.strip().lower()
        if not term:
            return list(self.customers)
        return [
            c
            for c in self.customers
            if term in (c.full_name or "").lower()
            or term in c.user_id.lower()
            or term in (c.gender or "").lower()
        ]
