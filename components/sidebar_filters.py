"""
Sidebar filter components for the approval tracker dashboard.
Provides one checkbox per institution and a summary banner of the
current selection.

The panel never caches the selection: it is read from widget state on
demand. Checkbox changes publish a SelectionChanged event to subscribers
(the chart grid's layout controller).
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, MutableMapping, Optional, Tuple

import streamlit as st

logger = logging.getLogger(__name__)

WIDGET_KEY_PREFIX = "filter_inst"
CLEAR_REQUEST_KEY = "_clear_filters_requested"


@dataclass(frozen=True)
class SelectionChanged:
    """Published whenever an institution checkbox is toggled or cleared."""
    selection: Tuple[str, ...]


class FilterPanel:
    """
    Institution checkboxes in the sidebar.

    Args:
        state: Widget state mapping (defaults to st.session_state)
    """

    def __init__(self, state: Optional[MutableMapping] = None):
        self.state = state if state is not None else st.session_state
        self.institutions: List[str] = []
        self._subscribers: List[Callable[[SelectionChanged], None]] = []

    @staticmethod
    def widget_key(institution: str) -> str:
        return f"{WIDGET_KEY_PREFIX}_{institution}"

    def subscribe(self, callback: Callable[[SelectionChanged], None]) -> None:
        self._subscribers.append(callback)

    def current_selection(self) -> List[str]:
        """Checked institutions, in institution-list order."""
        return [
            inst for inst in self.institutions
            if self.state.get(self.widget_key(inst), False)
        ]

    def publish(self) -> None:
        event = SelectionChanged(selection=tuple(self.current_selection()))
        logger.debug(f"Publishing selection of {len(event.selection)} institution(s)")
        for callback in self._subscribers:
            callback(event)

    def clear(self) -> None:
        """Uncheck every institution. Only valid before the widgets render."""
        for institution in self.institutions:
            self.state[self.widget_key(institution)] = False
        self.state[CLEAR_REQUEST_KEY] = False
        self.publish()

    def hold(self, institutions: List[str]) -> List[str]:
        """
        Keep the selection alive on tabs that hide the panel.

        Streamlit drops state for widgets that are not rendered in a run, so
        each checkbox value is re-assigned as plain session state.
        """
        self.institutions = list(institutions)
        for institution in self.institutions:
            key = self.widget_key(institution)
            if key in self.state:
                self.state[key] = self.state[key]
        return self.current_selection()

    def build(self, institutions: List[str]) -> List[str]:
        """
        Render the checkbox list, replacing any previous controls.

        Returns:
            Current selection after rendering
        """
        self.institutions = list(institutions)

        # Handle clear request from PREVIOUS run (must happen BEFORE widgets render)
        if self.state.get(CLEAR_REQUEST_KEY, False):
            self.clear()

        # Header row: Title on left, Clear on right
        header_col1, header_col2 = st.sidebar.columns([3, 1])
        with header_col1:
            st.markdown("### 🔍 Institutions")
        with header_col2:
            clear_clicked = st.button("✕", key="filter_clear", help="Clear selection")

        st.sidebar.caption("No selection shows every institution.")

        for institution in self.institutions:
            st.sidebar.checkbox(
                institution,
                key=self.widget_key(institution),
                on_change=self.publish,
            )

        if clear_clicked:
            # Set flag to clear checkboxes on NEXT run (before widgets render)
            self.state[CLEAR_REQUEST_KEY] = True
            st.rerun()

        return self.current_selection()


def render_filter_summary(selection: List[str], total_count: int, filtered_count: int):
    """
    Display a banner listing the selected institutions and observation count.

    Only renders when a selection is active.
    """
    if not selection:
        return

    shown = ', '.join(selection[:3])
    if len(selection) > 3:
        shown += f" +{len(selection) - 3}"

    pct = (filtered_count / total_count * 100) if total_count > 0 else 0

    st.markdown(
        f"""<div class="filter-banner">
            <span class="filter-text">🔍 {shown}</span>
            <span class="filter-count">{filtered_count:,} ({pct:.0f}%)</span>
        </div>""",
        unsafe_allow_html=True
    )
