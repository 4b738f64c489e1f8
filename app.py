"""
Approval Tracker Dashboard

An interactive visualization tool for approval ratings showing:
- Approve / Disapprove trend lines per politician or institution
- Confidence bands around each estimate
- Crosshair + tooltip readout of the nearest reading per answer
- Checkbox filtering with a two-column chart grid

Built with Streamlit + Plotly.
"""
import logging
import streamlit as st
import pandas as pd
from pathlib import Path
import sys

# Add project root to path for imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from utils.data_loader import (
    load_approval_data,
    filter_observations,
    DataLoadError,
    DEFAULT_DATASET_PATH,
)
from utils.app_state import AppState, build_app_state
from components.sidebar_filters import FilterPanel, render_filter_summary
from components.chart_grid import LayoutController
from components.tabs import TABS, activate_tab, render_tab_selector

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# Page configuration
st.set_page_config(
    page_title="Approval Tracker",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS for tab bar and filter banner
st.markdown("""
<style>
    .block-container {
        padding-top: 1rem !important;
        padding-bottom: 0.5rem !important;
        max-width: 100% !important;
    }

    /* Style horizontal radio as tabs */
    div[data-testid="stRadio"] > div {
        gap: 0 !important;
    }
    div[data-testid="stRadio"] label {
        background: transparent;
        border: none;
        border-bottom: 2px solid transparent;
        padding: 0.5rem 1rem !important;
        margin: 0 !important;
        font-size: 0.85rem;
        cursor: pointer;
        transition: all 0.2s;
    }
    div[data-testid="stRadio"] label:hover {
        background: #f0f2f6;
    }
    div[data-testid="stRadio"] label[data-checked="true"] {
        border-bottom: 2px solid #ff4b4b;
        font-weight: 600;
    }
    /* Hide radio circles */
    div[data-testid="stRadio"] input[type="radio"] {
        display: none;
    }

    /* Dashboard header styling */
    .dashboard-header {
        display: flex;
        justify-content: space-between;
        align-items: center;
        padding: 0.5rem 0;
        border-bottom: 1px solid #eee;
        margin-bottom: 0.5rem;
    }

    /* Filter banner above charts and tables */
    .filter-banner {
        background: linear-gradient(135deg, #f8f9fa 0%, #e9ecef 100%);
        padding: 8px 14px;
        border-radius: 6px;
        border-left: 3px solid #1a73e8;
        margin-bottom: 12px;
        font-size: 12px;
        display: flex;
        justify-content: space-between;
        align-items: center;
    }
    .filter-banner .filter-text {
        color: #495057;
    }
    .filter-banner .filter-count {
        font-weight: 600;
        color: #1a73e8;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


def get_dataset_path() -> Path:
    """Dataset path from Streamlit secrets if configured, else the bundled CSV."""
    # Note: accessing st.secrets throws if no secrets file exists
    try:
        if "dataset_path" in st.secrets:
            return Path(st.secrets["dataset_path"])
    except Exception as e:
        logger.debug(f"No secrets configured: {e}")
    return DEFAULT_DATASET_PATH


@st.cache_data(ttl=3600)  # Cache for 1 hour
def load_data(path: str) -> pd.DataFrame:
    """Load and cache the approval dataset."""
    return load_approval_data(path)


def get_app_state() -> AppState:
    """Load the dataset once and keep the derived state for the session."""
    if 'app_state' not in st.session_state:
        path = get_dataset_path()
        try:
            df = load_data(str(path))
        except DataLoadError as e:
            logger.exception("Dataset load failed")
            st.error(f"Failed to load data: {e}")
            st.stop()
        st.session_state.app_state = build_app_state(df)
    return st.session_state.app_state


def render_about(app_state: AppState):
    st.subheader("About")
    st.markdown(
        "Approval averages with confidence intervals. Each chart shows one "
        "politician or institution: the shaded band spans the low and high "
        "bounds, the line is the estimate. Hover a chart to read the nearest "
        "value for every answer."
    )
    st.caption(
        f"{app_state.observation_count:,} observations • "
        f"{len(app_state.institutions)} institutions"
    )
    if app_state.malformed:
        with st.expander(f"⚠️ {len(app_state.malformed)} malformed rows skipped"):
            for message in app_state.malformed:
                st.text(message)


def main():
    """Main application entry point."""

    with st.spinner("Loading approval data..."):
        app_state = get_app_state()

    # Header slot first so it sits above the tab bar
    header_slot = st.empty()

    # Tab navigation with session state persistence
    active_tab = render_tab_selector(TABS)
    visible = activate_tab(TABS, active_tab.tab_id)

    # Filter panel: built and subscribed only where the active tab wants it
    panel = FilterPanel()
    controller = LayoutController(app_state, panel)
    if active_tab.show_filters:
        selection = panel.build(list(app_state.institutions))
    else:
        selection = panel.hold(list(app_state.institutions))

    # Subtle data refresh at bottom of sidebar
    with st.sidebar:
        st.divider()
        col1, col2 = st.columns([1, 1])
        with col1:
            st.caption("Data cached 1hr")
        with col2:
            if st.button("↻ Refresh", key="refresh_data", help="Clear cache and reload the dataset"):
                st.cache_data.clear()
                st.session_state.pop('app_state', None)
                st.rerun()

    filtered_df = filter_observations(app_state.dataset, selection)

    # Dashboard header
    header_slot.markdown(
        f'''<div class="dashboard-header">
            <h4 style="margin:0;color:#333;">📈 Approval Tracker</h4>
            <span style="color:#666;font-size:13px;">{len(selection) or len(app_state.institutions)} / {len(app_state.institutions)} institutions</span>
        </div>''',
        unsafe_allow_html=True
    )

    if visible['trends']:
        render_filter_summary(selection, app_state.observation_count, len(filtered_df))
        controller.apply()
        st.caption("Hover a chart for the nearest reading • Shaded band = confidence interval")

    elif visible['data']:
        render_filter_summary(selection, app_state.observation_count, len(filtered_df))
        st.subheader("Observations")
        st.dataframe(filtered_df, height=500, hide_index=True)

    elif visible['about']:
        render_about(app_state)


if __name__ == "__main__":
    main()
