from __future__ import annotations

import streamlit as st

from crm_dashboard.config import THEME


APP_TITLE = "Customer Relationship Dashboard"


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="🗂️",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    # Centralized theme tokens (config.py) -> CSS variables
    radius = int(THEME["radius_px"])
    css = """
<style>
:root{
  --accent: __ACCENT__;
  --accent-hover: __ACCENT_HOVER__;
  --navy-900: __NAVY_900__;
  --navy-800: __NAVY_800__;

  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;

  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --shadow: __SHADOW__;
  --radius: __RADIUS_PX__px;
}

#MainMenu { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  color: var(--text-primary) !important;
}
[data-testid="stSidebar"]{
  background: var(--bg-secondary) !important;
  border-right: 1px solid var(--card-border) !important;
}

/* Header */
.app-header{
  display:flex;
  align-items:center;
  justify-content:space-between;
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 10px 14px;
  margin: 0 0 14px 0;
}
.app-title{ font-size: 20px; font-weight: 700; color: var(--navy-900); }
.app-subtitle{ font-size: 14px; color: var(--text-secondary); }
.pill{
  display:inline-flex;
  align-items:center;
  gap:6px;
  border: 1px solid var(--card-border);
  border-radius: 999px;
  padding: 6px 10px;
  font-size: 13px;
  font-weight: 600;
  color: var(--navy-800);
}
.pill .dot{ width:8px; height:8px; border-radius:999px; background: var(--accent); display:inline-block; }

/* Metric cards */
.metric-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 14px 16px;
  margin-bottom: 12px;
}
.metric-label{ font-size: 14px; font-weight: 500; color: var(--text-secondary); margin-bottom: 6px; }
.metric-value{ font-size: 24px; font-weight: 700; color: var(--text-primary); }

/* Customer cards */
.customer-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 14px;
  margin-bottom: 8px;
}
.customer-head{ display:flex; align-items:center; gap: 10px; margin-bottom: 10px; }
.avatar{ width: 40px; height: 40px; border-radius: 999px; object-fit: cover; }
.avatar-letter{ display:flex; align-items:center; justify-content:center; color: white; font-weight: 700; font-size: 18px; }
.customer-name{ font-size: 15px; font-weight: 600; color: var(--text-primary); }
.customer-id{ font-size: 12px; color: var(--text-secondary); }
.customer-meta{ font-size: 12px; color: var(--text-secondary); }
.capitalize{ text-transform: capitalize; }
.badges{ display:flex; gap: 6px; margin-top: 6px; }
.badge{ border-radius: 999px; padding: 2px 8px; font-size: 12px; font-weight: 500; }
.badge-active{ background: #DCFCE7; color: #166534; }
.badge-inactive{ background: #FEE2E2; color: #991B1B; }
.badge-verified{ background: #DBEAFE; color: #1E40AF; }
.badge-unverified{ background: #FEF9C3; color: #854D0E; }

/* Buttons */
div.stButton > button{
  border-radius: 10px !important;
  font-weight: 600 !important;
}

/* Charts on card surface */
div[data-testid="stPlotlyChart"]{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 8px 10px;
}

.callout{
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
  margin: 10px 0;
  background: #FFFFFF;
}
.callout-title{ font-size: 14px; font-weight: 700; color: var(--navy-900); margin-bottom: 6px; }
.callout-body{ font-size: 14px; color: var(--text-secondary); line-height: 1.5; }
.callout-error{ border-left: 4px solid __DANGER__; }
.callout-error .callout-body{ color: __DANGER__; font-weight: 600; }
</style>
"""

    tokens = {
        "__ACCENT__": str(THEME["accent_primary"]),
        "__ACCENT_HOVER__": str(THEME["accent_secondary"]),
        "__NAVY_900__": str(THEME["navy_900"]),
        "__NAVY_800__": str(THEME["navy_800"]),
        "__BG_PRIMARY__": str(THEME["bg_primary"]),
        "__BG_SECONDARY__": str(THEME["bg_secondary"]),
        "__CARD_BG__": str(THEME["bg_card"]),
        "__CARD_BORDER__": str(THEME["border_color"]),
        "__TEXT_PRIMARY__": str(THEME["text_primary"]),
        "__TEXT_SECONDARY__": str(THEME["text_secondary"]),
        "__SHADOW__": str(THEME["shadow"]),
        "__RADIUS_PX__": str(radius),
        "__DANGER__": str(THEME["danger"]),
    }
    for k, v in tokens.items():
        css = css.replace(k, v)

    st.markdown(css, unsafe_allow_html=True)
