"""
Chart grid component: the layout controller.

Reads the live institution selection, decides the grid (see
utils/layout.py), clears the previous charts and draws one chart per
plotted institution.
"""
import logging
from typing import Optional

import streamlit as st

from components.plot_renderer import render_plot
from components.sidebar_filters import FilterPanel, SelectionChanged
from utils.app_state import AppState
from utils.layout import LayoutPlan, plan_layout

logger = logging.getLogger(__name__)


class LayoutController:
    """
    Owns the chart grid. Subscribes to the filter panel once at creation.

    Args:
        app_state: Dataset, institution list and color map
        panel: Filter panel to read the live selection from
    """

    def __init__(self, app_state: AppState, panel: FilterPanel):
        self.app_state = app_state
        self.panel = panel
        self.last_event: Optional[SelectionChanged] = None
        panel.subscribe(self.on_selection_changed)

    def on_selection_changed(self, event: SelectionChanged) -> None:
        self.last_event = event
        logger.info(f"Selection changed: {list(event.selection) or 'all institutions'}")

    def plan(self) -> LayoutPlan:
        return plan_layout(self.app_state.institutions, self.panel.current_selection())

    def apply(self, container=None) -> LayoutPlan:
        """
        Clear the grid and render every plotted institution.

        Args:
            container: Streamlit container to draw into (defaults to main area)

        Returns:
            The LayoutPlan that was rendered
        """
        plan = self.plan()
        logger.debug(f"Rendering {len(plan.institutions)} charts in {plan.columns} column(s)")

        # Replacing the placeholder drops charts from the previous run
        placeholder = (container or st).empty()
        grid = placeholder.container()

        with grid:
            for row in plan.rows():
                cols = st.columns(plan.columns)
                for col, institution in zip(cols, row):
                    try:
                        render_plot(
                            self.app_state.dataset,
                            institution,
                            col,
                            color_map=self.app_state.color_map,
                        )
                    except Exception as e:
                        logger.exception(f"Failed to render chart for {institution}")
                        col.warning(f"Could not draw chart for {institution}: {e}")

        return plan
