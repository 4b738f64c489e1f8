"""
Utilities for the Approval Tracker Dashboard.

Modules:
- data_loader: CSV loading, cleaning, and per-institution grouping
- color_schemes: Answer category colors
- layout: Chart grid layout policy
- chart_spec: Declarative chart description and hover lookup
"""

from .data_loader import (
    load_approval_data,
    extract_institutions,
    filter_institution,
    filter_observations,
    group_by_answer,
    DataLoadError,
    MalformedRecordError,
    DEFAULT_DATASET_PATH,
)

from .color_schemes import (
    ANSWER_COLORS_HEX,
    FALLBACK_PALETTE,
    build_color_map,
    get_answer_color,
    hex_to_rgba,
)

from .layout import (
    LayoutPlan,
    grid_columns,
    plan_layout,
)

from .chart_spec import (
    ChartSpec,
    SeriesSpec,
    build_chart_spec,
    nearest_observation,
    hover_points,
    format_tooltip,
)

__all__ = [
    # Data loader
    'load_approval_data',
    'extract_institutions',
    'filter_institution',
    'filter_observations',
    'group_by_answer',
    'DataLoadError',
    'MalformedRecordError',
    'DEFAULT_DATASET_PATH',
    # Color schemes
    'ANSWER_COLORS_HEX',
    'FALLBACK_PALETTE',
    'build_color_map',
    'get_answer_color',
    'hex_to_rgba',
    # Layout
    'LayoutPlan',
    'grid_columns',
    'plan_layout',
    # Chart description
    'ChartSpec',
    'SeriesSpec',
    'build_chart_spec',
    'nearest_observation',
    'hover_points',
    'format_tooltip',
]
