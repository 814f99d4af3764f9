import html
import os

import streamlit as st
from streamlit.errors import StreamlitAPIException

THEME_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'assets', 'custom_theme.css')


def set_theme(
    page_title: str = "Task Dashboard",
    page_icon: str = "📋",
    layout: str = "wide",
    initial_sidebar_state: str = "expanded",
):
    """Configure the Streamlit page & inject the dashboard CSS.

    Safe to call once at the top of each page. Later calls are ignored by
    Streamlit for page_config but the CSS is still (re)injected.
    """
    try:
        st.set_page_config(
            page_title=page_title,
            page_icon=page_icon,
            layout=layout,
            initial_sidebar_state=initial_sidebar_state,
        )
    except StreamlitAPIException:
        # set_page_config can only be called once per run.
        pass

    try:
        with open(THEME_FILE, 'r', encoding='utf-8') as f:
            st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        st.error(f"Theme file not found at {THEME_FILE}.")


def kpi_html(label, value, tone=""):
    tone_cls = f" tb-kpi-{tone}" if tone else ""
    return (
        f"<div class='tb-kpi-box'><div class='tb-kpi-label'>{html.escape(str(label))}</div>"
        f"<div class='tb-kpi-value{tone_cls}'>{html.escape(str(value))}</div></div>"
    )


def kpi_row(items):
    """items: iterable of (label, value) or (label, value, tone)."""
    cells = "".join(kpi_html(*item) for item in items)
    return f"<div class='tb-kpi-row'>{cells}</div>"


def priority_badge(priority):
    p = html.escape(str(priority))
    return f"<span class='tb-priority-badge tb-priority-{p}'>{p}</span>"
