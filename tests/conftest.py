"""
Shared fixtures for the epicharts test suite.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


def make_obs(epiweek, name, value, week_start, week_end, region="Northeast", **extra):
    row = {
        "epiweek": epiweek,
        "name": name,
        "mean_lineage_prevalence": value,
        "week_start": week_start,
        "week_end": week_end,
        "geo_loc_region": region,
    }
    row.update(extra)
    return row


@pytest.fixture
def sparse_observations():
    """Weeks 7 and 9 of 2021 observed, week 8 missing entirely."""
    return [
        make_obs(202107, "A", 0.4, "2021-02-12", "2021-02-18"),
        make_obs(202107, "B", 0.6, "2021-02-12", "2021-02-18"),
        make_obs(202109, "A", 0.7, "2021-02-26", "2021-03-04"),
    ]


@pytest.fixture
def mmwr_observations():
    """CDC MMWR weeks around the 2023/2024 boundary, 2024 week 1 missing."""
    return [
        make_obs(202352, "XBB", 0.2, "2023-12-24", "2023-12-30", region="South"),
        make_obs(202352, "Other", 0.8, "2023-12-24", "2023-12-30", region="South"),
        make_obs(202402, "JN.1", 0.9, "2024-01-07", "2024-01-13", region="South"),
    ]
