"""
Grid layout policy for the chart grid.

No selection shows every institution two to a row. A selection shows only
the chosen institutions, at most two columns wide. Extra plots add rows
instead of columns.
"""
from dataclasses import dataclass
from typing import Iterable, List, Tuple

MAX_GRID_COLUMNS = 2


def grid_columns(selection_size: int) -> int:
    """Number of grid columns for a selection of the given size."""
    if selection_size == 0:
        return MAX_GRID_COLUMNS
    return min(selection_size, MAX_GRID_COLUMNS)


@dataclass(frozen=True)
class LayoutPlan:
    """Which institutions to plot, and how many per row."""
    columns: int
    institutions: Tuple[str, ...]

    def rows(self) -> List[Tuple[str, ...]]:
        """Chunk the plot list into rows of `columns` entries (last row may be short)."""
        return [
            self.institutions[i:i + self.columns]
            for i in range(0, len(self.institutions), self.columns)
        ]


def plan_layout(institutions: Iterable[str], selection: Iterable[str]) -> LayoutPlan:
    """
    Decide the grid for the current selection.

    Plot order always follows `institutions` (extractor order), never the
    order in which checkboxes were ticked.
    """
    institutions = list(institutions)
    selected = set(selection)

    if not selected:
        return LayoutPlan(columns=grid_columns(0), institutions=tuple(institutions))

    plotted = tuple(inst for inst in institutions if inst in selected)
    return LayoutPlan(columns=grid_columns(len(plotted)), institutions=plotted)
