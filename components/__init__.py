"""
Streamlit components for the Approval Tracker Dashboard.

Modules:
- sidebar_filters: Institution checkboxes and selection events
- chart_grid: Layout controller for the chart grid
- plot_renderer: Plotly approval chart
- tabs: Tab bar and per-tab filter visibility
"""
