"""
Approval chart component using Plotly.
Renders one institution's trend lines with confidence bands, a vertical
crosshair, and a per-answer tooltip.

Drawing order per answer: lower bound (invisible), upper bound filled down
to it, then the trend line on top. A transparent overlay trace carries the
tooltip text for a daily grid so hover shows every answer's reading
nearest to the pointer's date.
"""
import streamlit as st
import plotly.graph_objects as go
import pandas as pd
from typing import Dict, Optional

from utils.chart_spec import (
    ChartSpec,
    build_chart_spec,
    format_tooltip,
    hover_dates,
    hover_points,
    TOOLTIP_DATE_FORMAT,
)
from utils.color_schemes import (
    hex_to_rgba,
    BAND_OPACITY,
    GRID_COLOR,
    CROSSHAIR_COLOR,
)

# Chart dimensions
CHART_HEIGHT = 320
CHART_MARGIN = dict(t=50, r=20, b=60, l=50)


def _add_series_traces(fig: go.Figure, series) -> None:
    """Band (lo..hi) plus trend line for one answer."""
    dates = list(series.dates)

    fig.add_trace(go.Scatter(
        x=dates,
        y=list(series.lo),
        mode='lines',
        line=dict(width=0, color=series.color),
        hoverinfo='skip',
        showlegend=False,
        name=f"{series.answer} (low)",
    ))

    fig.add_trace(go.Scatter(
        x=dates,
        y=list(series.hi),
        mode='lines',
        line=dict(width=0, color=series.color),
        fill='tonexty',
        fillcolor=hex_to_rgba(series.color, BAND_OPACITY),
        hoverinfo='skip',
        showlegend=False,
        name=f"{series.answer} (high)",
    ))

    fig.add_trace(go.Scatter(
        x=dates,
        y=list(series.pct_estimate),
        mode='lines',
        line=dict(color=series.color, width=2),
        hoverinfo='skip',
        name=series.answer,
    ))


def _add_hover_overlay(fig: go.Figure, spec: ChartSpec) -> None:
    """
    Invisible markers on the hover grid, each carrying the tooltip for its date.

    Every grid date gets its own nearest-point lookup per answer, so the
    tooltip follows the pointer rather than the closest observation.
    """
    dates = hover_dates(spec)
    if not dates:
        return

    tooltips = [format_tooltip(hover_points(spec, d)) for d in dates]

    fig.add_trace(go.Scatter(
        x=dates,
        y=[sum(spec.y_domain) / 2] * len(dates),
        mode='markers',
        marker=dict(size=1, opacity=0),
        text=tooltips,
        hovertemplate='%{text}<extra></extra>',
        showlegend=False,
        name='hover',
    ))


def build_figure(spec: ChartSpec, height: int = CHART_HEIGHT) -> go.Figure:
    """
    Turn a chart description into a Plotly figure.

    Args:
        spec: ChartSpec from build_chart_spec()
        height: Figure height in pixels

    Returns:
        Plotly Figure (no traces when the chart has no series)
    """
    fig = go.Figure()

    for series in spec.series:
        _add_series_traces(fig, series)

    _add_hover_overlay(fig, spec)

    grid_style = dict(
        showgrid=True,
        gridcolor=GRID_COLOR,
        gridwidth=0.5,
        griddash='dash',
        zeroline=False,
        layer='below traces',
    )

    xaxis = dict(
        type='date',
        tickformat=spec.x_tick_format,
        tickangle=spec.x_tick_angle,
        hoverformat=TOOLTIP_DATE_FORMAT,
        # Crosshair: vertical spike line following the cursor
        showspikes=True,
        spikemode='across',
        spikesnap='cursor',
        spikecolor=CROSSHAIR_COLOR,
        spikethickness=1,
        spikedash='solid',
        **grid_style
    )
    if spec.x_domain is not None:
        xaxis['range'] = [spec.x_domain[0], spec.x_domain[1]]

    yaxis = dict(range=list(spec.y_domain), **grid_style)

    fig.update_layout(
        title=dict(text=spec.title, x=0.5, xanchor='center'),
        xaxis=xaxis,
        yaxis=yaxis,
        hovermode='x unified',
        hoverdistance=-1,
        spikedistance=-1,
        hoverlabel=dict(bgcolor='#fff', bordercolor='#ccc', font=dict(size=12)),
        plot_bgcolor='#fff',
        paper_bgcolor='#fff',
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="center",
            x=0.5
        ),
        margin=CHART_MARGIN,
        height=height,
    )

    if spec.is_empty:
        fig.add_annotation(
            text="No data available",
            xref='paper', yref='paper',
            x=0.5, y=0.5,
            showarrow=False,
            font=dict(color='#666', size=13),
        )

    return fig


def render_plot(
    df: pd.DataFrame,
    institution: str,
    container,
    color_map: Optional[Dict[str, str]] = None
):
    """
    Draw one institution's chart into a Streamlit container.

    Args:
        df: Full observation DataFrame
        institution: Institution to chart
        container: Streamlit container or column to draw into
        color_map: Answer -> color mapping shared across all charts
    """
    spec = build_chart_spec(df, institution, color_map)
    fig = build_figure(spec)

    with container:
        with st.container(border=True):
            st.plotly_chart(fig, key=f"plot_{institution}")
            if spec.is_empty:
                st.caption("No observations for this institution.")

    return spec
