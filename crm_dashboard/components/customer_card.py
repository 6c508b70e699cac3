from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from crm_dashboard.data.models import CustomerSummary


GENDER_GRADIENTS = {
    "male": ("#3B82F6", "#4F46E5"),    # blue -> indigo
    "female": ("#EC4899", "#9333EA"),  # pink -> purple
}
DEFAULT_GRADIENT = ("#6B7280", "#374151")


@dataclass(frozen=True)
class Badge:
    label: str
    css_class: str


def avatar_initial(full_name: Optional[str]) -> str:
    return full_name[0].upper() if full_name else "U"


def avatar_gradient(gender: Optional[str]) -> tuple[str, str]:
    return GENDER_GRADIENTS.get((gender or "").lower(), DEFAULT_GRADIENT)


def status_badges(customer: CustomerSummary) -> list[Badge]:
    return [
        Badge("Active", "badge-active") if customer.account_status else Badge("Inactive", "badge-inactive"),
        Badge("Verified", "badge-verified") if customer.profile_verified else Badge("Not Verified", "badge-unverified"),
    ]


def photo_url(customer: CustomerSummary, media_base_url: str) -> Optional[str]:
    if not customer.profile_photos:
        return None
    return f"{media_base_url}{customer.profile_photos}"


def _avatar_html(customer: CustomerSummary, media_base_url: str, default_avatar_url: str) -> str:
    url = photo_url(customer, media_base_url)
    name = html.escape(customer.full_name or "Customer")
    if url:
        return (
            f'<img class="avatar" src="{html.escape(url)}" alt="{name}\'s profile" '
            f"onerror=\"this.onerror=null;this.src='{html.escape(default_avatar_url)}';\" />"
        )
    start, end = avatar_gradient(customer.gender)
    return (
        f'<div class="avatar avatar-letter" style="background: linear-gradient(135deg, {start}, {end});">'
        f"{html.escape(avatar_initial(customer.full_name))}</div>"
    )


def render_customer_card(customer: CustomerSummary, media_base_url: str, default_avatar_url: str) -> None:
    badges = "".join(f'<span class="badge {b.css_class}">{b.label}</span>' for b in status_badges(customer))
    st.markdown(
        f"""
<div class="customer-card">
  <div class="customer-head">
    {_avatar_html(customer, media_base_url, default_avatar_url)}
    <div>
      <div class="customer-name">{html.escape(customer.full_name or "Unknown")}</div>
      <div class="customer-id">{html.escape(customer.user_id)}</div>
    </div>
  </div>
  <div class="customer-meta"><b>Gender:</b> <span class="capitalize">{html.escape(customer.gender or "N/A")}</span></div>
  <div class="badges">{badges}</div>
</div>
        """,
        unsafe_allow_html=True,
    )
