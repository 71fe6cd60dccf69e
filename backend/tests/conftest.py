"""
Test fixtures for the step risk backend test suite.
"""
import os
import sys
from datetime import date

import pytest

# Disable rate limiting during tests
os.environ["TESTING"] = "true"

# Ensure the backend directory is on sys.path
BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from steprisk.models.activity import WeeklyActivitySeries  # noqa: E402


@pytest.fixture
def make_series():
    """Build a series of consecutive days starting 2025-06-01."""
    def _make(values):
        return WeeklyActivitySeries.from_values(values, start=date(2025, 6, 1))
    return _make


@pytest.fixture
def steady_week(make_series):
    return make_series([5000, 5200, 4800, 5100, 4900, 5000, 5050])


@pytest.fixture
def zero_week(make_series):
    return make_series([0, 0, 0, 0, 0, 0, 0])


@pytest.fixture
def declining_week(make_series):
    return make_series([6000, 5500, 5000, 4500, 4000, 3500, 3000])


@pytest.fixture
def score_payload():
    return {
        "steps": [
            {"value": v, "date": f"2025-06-0{i + 1}", "source": "device"}
            for i, v in enumerate([5000, 5200, 4800, 5100, 4900, 5000, 5050])
        ],
    }
