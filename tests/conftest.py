"""
Pytest fixtures for the approval tracker tests.

Provides a small observation frame (cleaned through the real loader path)
and helpers for writing CSV files to a temp directory.
"""
import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.data_loader import clean_observations

HEADER = "politician/institution,date,answer,pct_estimate,lo,hi"

SAMPLE_ROWS = [
    "Alpha,2024-01-01,Approve,50,45,55",
    "Alpha,2024-01-01,Disapprove,40,35,45",
    "Beta,2024-01-01,Approve,30,25,35",
    "Alpha,2024-02-01,Approve,52,47,57",
    "Alpha,2024-02-01,Disapprove,41,36,46",
    "Gamma,2024-01-15,Approve,60,58,62",
    "Beta,2024-02-01,Approve,33,28,38",
    "Delta,2024-01-01,Approve,45,40,50",
    "Epsilon,2024-01-01,Approve,55,50,60",
]


def make_raw_frame(rows):
    records = [dict(zip(HEADER.split(','), row.split(','))) for row in rows]
    return pd.DataFrame(records, columns=HEADER.split(','))


@pytest.fixture
def sample_df():
    return clean_observations(make_raw_frame(SAMPLE_ROWS))


@pytest.fixture
def write_csv(tmp_path):
    """Write lines under the standard header and return the file path."""
    def _write(rows, header=HEADER, name="approval.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header] + list(rows)) + "\n")
        return path
    return _write
