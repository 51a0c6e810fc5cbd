import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from api.requests import TimeSeriesPoint

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_points(values, step_seconds=60, start=START, quality="good", tag="FIC-101.PV"):
    """Build an evenly spaced series from plain values."""
    return [
        TimeSeriesPoint(
            timestamp=start + timedelta(seconds=i * step_seconds),
            value=float(v),
            quality=quality,
            tag_name=tag,
        )
        for i, v in enumerate(values)
    ]


@pytest.fixture
def points():
    return make_points


# Keep collection focused on the tests directory; engine modules are imported
# by tests, never collected.

def pytest_ignore_collect(collection_path, config):
    if os.path.sep + "engine" + os.path.sep in str(collection_path):
        return True
    return None
