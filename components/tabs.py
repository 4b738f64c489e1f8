"""
Tab navigation for the approval tracker dashboard.

Tabs are a horizontal radio styled as a tab bar (see app.py CSS), so the
active tab survives filter changes. Each tab declares whether the sidebar
filter panel is shown while it is active.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence

import streamlit as st


@dataclass(frozen=True)
class TabSpec:
    tab_id: str
    label: str
    show_filters: bool = False


TABS = [
    TabSpec("trends", "📈 Approval Trends", show_filters=True),
    TabSpec("data", "📋 Data Table", show_filters=True),
    TabSpec("about", "ℹ️ About"),
]


def activate_tab(tabs: Sequence[TabSpec], tab_id: str) -> Dict[str, bool]:
    """
    Visibility of every tab once `tab_id` is activated.

    Exactly one entry is True.

    Raises:
        KeyError: If no tab has that id
    """
    ids = [tab.tab_id for tab in tabs]
    if tab_id not in ids:
        raise KeyError(f"Unknown tab: {tab_id}")
    return {tid: tid == tab_id for tid in ids}


def get_tab(tabs: Sequence[TabSpec], tab_id: str) -> TabSpec:
    for tab in tabs:
        if tab.tab_id == tab_id:
            return tab
    raise KeyError(f"Unknown tab: {tab_id}")


def render_tab_selector(tabs: List[TabSpec] = TABS) -> TabSpec:
    """
    Render the tab bar and return the active tab.

    The first tab is active on first load.
    """
    ids = [tab.tab_id for tab in tabs]

    # Initialize session state for active tab
    if 'active_tab' not in st.session_state or st.session_state.active_tab not in ids:
        st.session_state.active_tab = ids[0]

    active_id = st.radio(
        "Navigation",
        options=ids,
        index=ids.index(st.session_state.active_tab),
        format_func=lambda tab_id: get_tab(tabs, tab_id).label,
        horizontal=True,
        label_visibility="collapsed",
        key="tab_selector"
    )

    # Update session state when tab changes
    st.session_state.active_tab = active_id

    return get_tab(tabs, active_id)
