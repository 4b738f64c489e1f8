"""
Color schemes for the approval tracker dashboard.

Approve/Disapprove keep fixed colors so charts read the same across
institutions. Any other answer category cycles through a muted fallback
palette in first-seen order.
"""
from typing import Dict, Iterable, List

# =============================================================================
# Answer Category Colors
# =============================================================================
ANSWER_COLORS_HEX = {
    'Approve': '#4CAF50',      # Green
    'Disapprove': '#E91E63',   # Pink
}

# Fallback palette for answers outside the canonical pair
FALLBACK_PALETTE = [
    '#4183C4',  # Primary Blue
    '#9C66B2',  # Primary Purple
    '#D4A574',  # Warm Amber
    '#4CAF93',  # Primary Teal
    '#8E99A4',  # Cool Slate
    '#B87D7D',  # Dusty Rose
]

# Band fill opacity (trend lines are drawn fully opaque)
BAND_OPACITY = 0.2

# Chart chrome
GRID_COLOR = '#808080'
CROSSHAIR_COLOR = '#000000'


def build_color_map(answers: Iterable[str]) -> Dict[str, str]:
    """
    Assign a hex color to every answer category.

    Canonical answers get their fixed color. The rest take palette slots in
    the order they are first seen, wrapping around when the palette runs out.

    Args:
        answers: Answer values in dataset order (duplicates allowed)

    Returns:
        Dict mapping answer -> hex color
    """
    color_map: Dict[str, str] = {}
    extra: List[str] = []

    for answer in answers:
        if answer in color_map:
            continue
        if answer in ANSWER_COLORS_HEX:
            color_map[answer] = ANSWER_COLORS_HEX[answer]
        else:
            color_map[answer] = FALLBACK_PALETTE[len(extra) % len(FALLBACK_PALETTE)]
            extra.append(answer)

    return color_map


def get_answer_color(answer: str, color_map: Dict[str, str] = None) -> str:
    """Get hex color for an answer, falling back to the first palette slot."""
    if color_map and answer in color_map:
        return color_map[answer]
    return ANSWER_COLORS_HEX.get(answer, FALLBACK_PALETTE[0])


def hex_to_rgba(hex_color: str, alpha: float = 1.0) -> str:
    """
    Convert '#RRGGBB' to a CSS 'rgba(r, g, b, a)' string.

    Plotly band fills need an explicit alpha, while line colors stay hex.
    """
    value = hex_color.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB color, got {hex_color!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"
