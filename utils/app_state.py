"""
Application state built once per session from the loaded dataset.

Holds the immutable observation frame and everything derived from it that
does not depend on the current selection.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

import pandas as pd

from .color_schemes import build_color_map
from .data_loader import extract_institutions


@dataclass(frozen=True, eq=False)
class AppState:
    dataset: pd.DataFrame = field(repr=False)
    institutions: Tuple[str, ...]
    color_map: Dict[str, str]
    malformed: Tuple[str, ...] = ()

    @property
    def observation_count(self) -> int:
        return len(self.dataset)


def build_app_state(df: pd.DataFrame) -> AppState:
    """Derive institutions and the shared answer color map from the dataset."""
    answers = df['answer'] if 'answer' in df.columns else []
    return AppState(
        dataset=df,
        institutions=tuple(extract_institutions(df)),
        color_map=build_color_map(answers),
        malformed=tuple(df.attrs.get('malformed', [])),
    )
