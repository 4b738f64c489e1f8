"""
Declarative chart description for one institution's approval chart.

Everything here is plain data derived from the observation frame: scale
domains, one SeriesSpec per answer, and the tooltip text shown while
hovering. The Plotly backend in components/plot_renderer.py consumes a
ChartSpec without looking at the raw frame again.
"""
import html
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .color_schemes import build_color_map, get_answer_color
from .data_loader import filter_institution, group_by_answer

# Axis and tooltip formats
X_TICK_FORMAT = '%b %Y'
X_TICK_ANGLE = -45
TOOLTIP_DATE_FORMAT = '%b %d, %Y'

# Spacing of the hover grid the tooltip is precomputed on
HOVER_GRID_FREQ = 'D'

# Used when an institution has no usable `hi` values
DEFAULT_Y_DOMAIN = (0.0, 100.0)


@dataclass(frozen=True)
class SeriesSpec:
    """One answer category: band between lo/hi plus a trend line."""
    answer: str
    color: str
    dates: Tuple[pd.Timestamp, ...]
    pct_estimate: Tuple[float, ...]
    lo: Tuple[float, ...]
    hi: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.dates)


@dataclass(frozen=True)
class ChartSpec:
    """Everything needed to draw one institution's chart."""
    title: str
    x_domain: Optional[Tuple[pd.Timestamp, pd.Timestamp]]
    y_domain: Tuple[float, float]
    series: Tuple[SeriesSpec, ...] = field(default_factory=tuple)
    x_tick_format: str = X_TICK_FORMAT
    x_tick_angle: int = X_TICK_ANGLE

    @property
    def is_empty(self) -> bool:
        return len(self.series) == 0


def _finite_max(values: pd.Series) -> Optional[float]:
    values = pd.to_numeric(values, errors='coerce')
    values = values[np.isfinite(values)]
    if len(values) == 0:
        return None
    return float(values.max())


def compute_x_domain(df: pd.DataFrame) -> Optional[Tuple[pd.Timestamp, pd.Timestamp]]:
    """Date extent (min, max) of the subset, or None when there are no dates."""
    dates = df['date'].dropna() if 'date' in df.columns else pd.Series(dtype='datetime64[ns]')
    if len(dates) == 0:
        return None
    return (dates.min(), dates.max())


def compute_y_domain(df: pd.DataFrame) -> Tuple[float, float]:
    """
    [0, max(hi)] across all answers of the subset.

    Falls back to DEFAULT_Y_DOMAIN when there is no finite positive `hi`.
    """
    top = _finite_max(df['hi']) if 'hi' in df.columns else None
    if top is None or top <= 0:
        return DEFAULT_Y_DOMAIN
    return (0.0, top)


def _series_spec(answer: str, series_df: pd.DataFrame, color: str) -> SeriesSpec:
    return SeriesSpec(
        answer=answer,
        color=color,
        dates=tuple(series_df['date']),
        pct_estimate=tuple(float(v) for v in series_df['pct_estimate']),
        lo=tuple(float(v) for v in series_df['lo']),
        hi=tuple(float(v) for v in series_df['hi']),
    )


def build_chart_spec(
    df: pd.DataFrame,
    institution: str,
    color_map: Optional[Dict[str, str]] = None
) -> ChartSpec:
    """
    Build the chart description for one institution.

    Args:
        df: Full observation DataFrame
        institution: Institution to chart
        color_map: Answer -> hex color (built from the subset when omitted)

    Returns:
        ChartSpec; zero series when the institution has no observations
    """
    subset = filter_institution(df, institution)

    if color_map is None:
        color_map = build_color_map(subset['answer'])

    groups = group_by_answer(subset)
    series = tuple(
        _series_spec(answer, series_df, get_answer_color(answer, color_map))
        for answer, series_df in groups.items()
    )

    return ChartSpec(
        title=institution,
        x_domain=compute_x_domain(subset),
        y_domain=compute_y_domain(subset),
        series=series,
    )


def nearest_observation(series: SeriesSpec, hovered_date: pd.Timestamp) -> Optional[int]:
    """
    Index of the observation in `series` closest in time to `hovered_date`.

    Ties keep the first-encountered point. Returns None for an empty series.
    """
    best_index = None
    best_distance = None
    hovered_date = pd.Timestamp(hovered_date)

    for i, date in enumerate(series.dates):
        if pd.isna(date):
            continue
        distance = abs(pd.Timestamp(date) - hovered_date)
        if best_distance is None or distance < best_distance:
            best_index = i
            best_distance = distance

    return best_index


def hover_points(spec: ChartSpec, hovered_date: pd.Timestamp) -> List[dict]:
    """Nearest point per answer for a hovered date, in series order."""
    points = []
    for series in spec.series:
        index = nearest_observation(series, hovered_date)
        if index is None:
            continue
        points.append({
            'answer': series.answer,
            'date': series.dates[index],
            'pct_estimate': series.pct_estimate[index],
        })
    return points


def _format_pct(value: float) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    return f"{value:.1f}%"


def format_tooltip(points: List[dict]) -> str:
    """Tooltip HTML: one block per answer (label, date, estimate)."""
    blocks = [
        f"<b>{html.escape(str(p['answer']))}</b><br>"
        f"Date: {pd.Timestamp(p['date']).strftime(TOOLTIP_DATE_FORMAT)}<br>"
        f"Value: {_format_pct(p['pct_estimate'])}"
        for p in points
    ]
    return "<br><br>".join(blocks)


def hover_dates(spec: ChartSpec, freq: str = HOVER_GRID_FREQ) -> List[pd.Timestamp]:
    """
    Dates the pointer can land on: a regular grid across the x domain.

    Observation dates are merged in so every reading stays reachable when
    they fall between grid steps.
    """
    if spec.x_domain is None or spec.is_empty:
        return []
    start, end = spec.x_domain
    grid = set(pd.date_range(start.normalize(), end, freq=freq))
    grid.update(pd.Timestamp(d) for s in spec.series for d in s.dates if not pd.isna(d))
    return sorted(grid)
