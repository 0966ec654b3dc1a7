"""
Tests for the daily polling window.
"""

from datetime import datetime, time, timedelta

import pytest
import pytz

from solarprognose.activity import Activity


@pytest.fixture
def default_activity():
    """02:00 to 21:00, every hour."""
    return Activity(time(2, 0), time(21, 0), timedelta(hours=1))


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2025, 6, 1, 1, 30), datetime(2025, 6, 1, 2, 0)),
        (datetime(2025, 6, 1, 2, 0), datetime(2025, 6, 1, 3, 0)),
        (datetime(2025, 6, 1, 14, 59, 59), datetime(2025, 6, 1, 15, 0)),
        (datetime(2025, 6, 1, 20, 30), datetime(2025, 6, 1, 21, 0)),
        (datetime(2025, 6, 1, 21, 0), datetime(2025, 6, 2, 2, 0)),
        (datetime(2025, 6, 1, 23, 45), datetime(2025, 6, 2, 2, 0)),
    ],
)
def test_next_run(default_activity, now, expected):
    """
    The next run is the first slot strictly after now, wrapping to the next day.
    """
    assert default_activity.next_run(now) == expected


def test_next_run_keeps_time_zone(default_activity):
    """
    Slots are computed in the local time zone of now.
    """
    berlin = pytz.timezone("Europe/Berlin")
    now = berlin.localize(datetime(2025, 6, 1, 21, 30))
    next_run = default_activity.next_run(now)
    assert next_run == berlin.localize(datetime(2025, 6, 2, 2, 0))
    assert next_run.utcoffset() == timedelta(hours=2)


def test_is_active(default_activity):
    """
    The window includes start and end.
    """
    assert default_activity.is_active(datetime(2025, 6, 1, 2, 0))
    assert default_activity.is_active(datetime(2025, 6, 1, 21, 0))
    assert not default_activity.is_active(datetime(2025, 6, 1, 1, 59))
    assert not default_activity.is_active(datetime(2025, 6, 1, 22, 0))


def test_from_config():
    """
    The activity section of config.yaml is parsed.
    """
    activity = Activity.from_config({"start": "06:00", "end": "18:00", "interval_hours": 2})
    assert activity.start_time == time(6, 0)
    assert activity.end_time == time(18, 0)
    assert activity.interval == timedelta(hours=2)


def test_invalid_activity():
    """
    A non positive interval or an inverted window is rejected.
    """
    with pytest.raises(ValueError):
        Activity(time(2, 0), time(21, 0), timedelta(0))
    with pytest.raises(ValueError):
        Activity(time(21, 0), time(2, 0))
