"""Streamlit session wiring shared by the dashboard pages."""
from __future__ import annotations

import streamlit as st

from taskboard.config import get_config
from taskboard.dashboard import TaskDashboard
from taskboard.logging_setup import setup_logging

_NOTICE_ICONS = {"success": "✅", "error": "❌", "info": "ℹ️"}


def get_dashboard() -> TaskDashboard:
    """The session's dashboard, created and loaded on first use."""
    if "tb_dashboard" not in st.session_state:
        config = get_config()
        setup_logging(config.log_level, config.log_dir)
        dash = TaskDashboard.from_config(config)
        dash.load(config.dataset_source, timeout=config.fetch_timeout_seconds)
        st.session_state.tb_dashboard = dash
    return st.session_state.tb_dashboard


def reload_dashboard() -> TaskDashboard:
    """Drop the session's dashboard and the widget values tied to its view.

    Must run before the search box and status selects are drawn.
    """
    for key in list(st.session_state.keys()):
        if key in ("tb_dashboard", "tb_search") or str(key).startswith("tb-status-"):
            del st.session_state[key]
    return get_dashboard()


def show_notices(dash: TaskDashboard) -> None:
    for notice in dash.pop_notices():
        st.toast(notice.message, icon=_NOTICE_ICONS.get(notice.level, "ℹ️"))
