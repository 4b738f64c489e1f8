"""
Data loading and processing utilities for the approval tracker dashboard.
Handles CSV reading, type coercion, and record cleaning.

Data Source: static CSV of approval averages (one row per institution,
date and answer category) with columns:
- politician/institution: Who the rating is for
- date: YYYY-MM-DD
- answer: Approve / Disapprove (other categories tolerated)
- pct_estimate, lo, hi: Estimate and confidence interval bounds (percent)
"""
import pandas as pd
from pathlib import Path
from typing import List, Optional, Union
import logging

# Configure logging
logger = logging.getLogger(__name__)

# Default dataset location (relative to project root)
DEFAULT_DATASET_PATH = Path(__file__).parent.parent / 'datasets' / 'approval_averages.csv'

# Source header -> canonical column name
COLUMN_RENAMES = {
    'politician/institution': 'institution',
}

OBSERVATION_COLUMNS = ['institution', 'date', 'answer', 'pct_estimate', 'lo', 'hi']
NUMERIC_COLUMNS = ['pct_estimate', 'lo', 'hi']

DATE_FORMAT = '%Y-%m-%d'


class DataLoadError(RuntimeError):
    """The dataset could not be read or is missing required columns."""


class MalformedRecordError(ValueError):
    """A single row has an unusable date or institution."""

    def __init__(self, row: int, reason: str):
        self.row = row
        self.reason = reason
        super().__init__(f"Row {row}: {reason}")


def read_csv_resource(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read the raw CSV as strings.

    Raises:
        DataLoadError: If the file is missing, empty, or not parseable
    """
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"Dataset not found: {path}")

    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise DataLoadError(f"Dataset is empty: {path}")
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise DataLoadError(f"Failed to parse dataset {path}: {e}")


def find_malformed_records(df: pd.DataFrame) -> List[MalformedRecordError]:
    """
    Collect rows that cannot be plotted.

    Expects `date` already parsed (NaT marks a failure). Numeric columns are
    not checked here - NaN values are kept and drawn as gaps.
    """
    errors = []
    bad_date = df['date'].isna()
    bad_institution = df['institution'].fillna('').astype(str).str.strip() == ''

    for row in df.index[bad_date | bad_institution]:
        if bad_institution[row]:
            reason = "empty institution"
        else:
            reason = "unparseable date"
        errors.append(MalformedRecordError(int(row), reason))

    return errors


def clean_observations(raw_df: pd.DataFrame) -> pd.DataFrame:
    """
    Coerce raw string columns to the observation schema.

    Returns a new DataFrame with malformed rows removed. The list of removed
    rows is stored in ``df.attrs['malformed']`` for display.
    """
    df = raw_df.rename(columns=COLUMN_RENAMES).reset_index(drop=True)

    missing = [col for col in OBSERVATION_COLUMNS if col not in df.columns]
    if missing:
        raise DataLoadError(f"Dataset is missing required columns: {missing}")

    df = df[OBSERVATION_COLUMNS].copy()

    # Clean up text columns
    df['institution'] = df['institution'].astype(str).str.strip()
    df['answer'] = df['answer'].astype(str).str.strip()

    # Malformed numbers become NaN - tolerated downstream
    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors='coerce').astype(float)

    df['date'] = pd.to_datetime(df['date'].str.strip(), format=DATE_FORMAT, errors='coerce')

    malformed = find_malformed_records(df)
    for err in malformed:
        logger.warning(f"Skipping malformed record: {err}")

    if malformed:
        df = df.drop(index=[err.row for err in malformed]).reset_index(drop=True)
        logger.warning(f"Dropped {len(malformed)} malformed records")

    df.attrs['malformed'] = [str(err) for err in malformed]
    return df


def load_approval_data(path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
    """
    Load and clean the approval averages dataset.

    Args:
        path: CSV path (defaults to datasets/approval_averages.csv)

    Returns:
        DataFrame with columns institution, date, answer, pct_estimate, lo, hi

    Raises:
        DataLoadError: If the file cannot be read or required columns are missing
    """
    path = Path(path) if path is not None else DEFAULT_DATASET_PATH

    raw_df = read_csv_resource(path)
    df = clean_observations(raw_df)

    logger.info(f"Loaded {len(df)} observations from {path.name}")
    return df


def extract_institutions(df: pd.DataFrame) -> List[str]:
    """Unique institutions in first-occurrence order (not sorted)."""
    if 'institution' not in df.columns or len(df) == 0:
        return []
    return pd.unique(df['institution']).tolist()


def filter_institution(df: pd.DataFrame, institution: str) -> pd.DataFrame:
    """Rows for one institution, original order preserved."""
    return df[df['institution'] == institution]


def filter_observations(df: pd.DataFrame, selection: Optional[list] = None) -> pd.DataFrame:
    """Apply the institution selection (empty/None means all institutions)."""
    if not selection:
        return df
    return df[df['institution'].isin(selection)]


def group_by_answer(df: pd.DataFrame) -> dict:
    """
    Split observations into Series keyed by answer.

    Keys follow first-seen answer order. Each Series is sorted by date with a
    stable sort so equal dates keep their input order.
    """
    groups = {}
    if len(df) == 0:
        return groups

    for answer in pd.unique(df['answer']):
        series = df[df['answer'] == answer]
        groups[answer] = series.sort_values('date', kind='mergesort')

    return groups
