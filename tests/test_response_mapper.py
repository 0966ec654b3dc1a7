"""
Unit tests for the status check and the hour remapping of forecast keys.
"""

import pytest

from solarprognose.errors import MalformedDataError, UpstreamError
from solarprognose.response_mapper import (
    check_status,
    handle_map,
    hour_of_day,
    remap_forecast_hours,
)
from solarprognose.values import Value, flatten_json

# 2024-06-01T14:00:00Z
FOURTEEN_UTC = 1717250400


def test_hour_of_day():
    """
    The hour is taken in UTC.
    """
    assert hour_of_day(FOURTEEN_UTC) == 14
    assert hour_of_day(FOURTEEN_UTC + 3599) == 14
    assert hour_of_day(FOURTEEN_UTC + 3600) == 15


def test_negative_status_raises_upstream_error():
    """
    A negative status aborts with the code and message of the response.
    """
    read_values = flatten_json({"status": -2, "message": "invalid access token"})
    with pytest.raises(UpstreamError) as excinfo:
        handle_map(read_values)
    assert excinfo.value.code == -2
    assert excinfo.value.message == "invalid access token"


def test_negative_status_without_message():
    """
    The message defaults to an empty string.
    """
    with pytest.raises(UpstreamError) as excinfo:
        check_status({"status": Value.string("-1")})
    assert excinfo.value.code == -1
    assert excinfo.value.message == ""


def test_missing_status_counts_as_success():
    """
    Without a status field the response is accepted.
    """
    assert check_status({}) == 0
    assert check_status({"status": Value.null()}) == 0


def test_unparsable_status_raises_malformed_data():
    """
    A status that is not a number cannot be judged and fails the tick.
    """
    with pytest.raises(MalformedDataError):
        check_status({"status": Value.string("ok")})


@pytest.mark.parametrize("raw", [float("inf"), float("-inf"), "1e999"])
def test_infinite_status_raises_malformed_data(raw):
    """
    A status too large for an integer fails the tick like any unparsable status.
    """
    with pytest.raises(MalformedDataError):
        check_status({"status": Value.of(raw)})


def test_remap_adds_hour_keys(sample_payload):
    """
    A sample keyed by the timestamp of 14:00 UTC is copied to data_14_*.
    """
    read_values = handle_map(flatten_json(sample_payload))

    assert read_values["data_14_0"] == Value.number(3.2)
    assert read_values["data_14_1"] == Value.number(15.4)
    assert read_values["data_14_ts"] == Value.timestamp(FOURTEEN_UTC)
    assert read_values["data_6_0"] == Value.number(0.12)
    assert "data_10_0" not in read_values


def test_remap_is_superset_of_input(sample_payload):
    """
    No key is removed and original entries keep their values.
    """
    original = flatten_json(sample_payload)
    snapshot = dict(original)
    remapped = handle_map(original)

    for key, value in snapshot.items():
        assert remapped[key] == value
    assert len(remapped) > len(snapshot)


def test_remap_is_idempotent(sample_payload):
    """
    Mapping the output again does not change any entry.
    """
    once = handle_map(flatten_json(sample_payload))
    snapshot = dict(once)
    twice = handle_map(once)
    assert twice == snapshot


def test_malformed_offset_raises():
    """
    A forecast key with a non numeric offset fails the whole map.
    """
    read_values = {
        "status": Value.number(0),
        f"data_{FOURTEEN_UTC}_0": Value.number(1.0),
        "data_abc_0": Value.number(2.0),
    }
    with pytest.raises(MalformedDataError, match="data_abc_0"):
        remap_forecast_hours(read_values)


def test_keys_without_three_parts_pass_through():
    """
    Keys that do not have exactly three components are not forecast data.
    """
    read_values = {
        "data_abc": Value.number(1),
        f"data_{FOURTEEN_UTC}_0_extra": Value.number(2),
        "preferredNextApiRequestAt_epochTimeUtc": Value.number(FOURTEEN_UTC),
        "weather_source_text": Value.string("DWD"),
    }
    snapshot = dict(read_values)
    assert remap_forecast_hours(read_values) == snapshot


def test_null_values_are_not_remapped():
    """
    Null entries do not produce hour keys.
    """
    read_values = {f"data_{FOURTEEN_UTC}_0": Value.null()}
    remap_forecast_hours(read_values)
    assert "data_14_0" not in read_values
    assert "data_14_ts" not in read_values


def test_same_hour_last_write_wins():
    """
    Two samples within one hour map to the same keys; the later entry wins.
    """
    read_values = {
        f"data_{FOURTEEN_UTC}_0": Value.number(1.0),
        f"data_{FOURTEEN_UTC + 1800}_0": Value.number(2.0),
    }
    remap_forecast_hours(read_values)
    assert read_values["data_14_0"] == Value.number(2.0)
    assert read_values["data_14_ts"] == Value.timestamp(FOURTEEN_UTC + 1800)
