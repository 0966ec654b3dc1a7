"""
response_mapper.py

Validates the status of a flattened Solarprognose response and adds hour keyed
entries to it.

The provider keys its forecast samples by the sample's unix timestamp
(``data_<epoch>_0``, ``data_<epoch>_1``). The declared output fields are keyed
by the UTC hour of day instead (``data_<hour>_0``, ``data_<hour>_1``,
``data_<hour>_ts``), so every sample is copied under its hour. The original
entries are kept.
"""

import logging
import re
from datetime import datetime

import pytz

from .constants import DATA, MESSAGE, STATUS, SUFFIX_TIMESTAMP
from .errors import MalformedDataError, UpstreamError
from .values import Value

logger = logging.getLogger("__main__")

OFFSET_PATTERN = re.compile(r"-?[0-9]+")


def check_status(read_values):
    """
    Raises UpstreamError if the response carries a negative status.
    A missing status counts as 0.
    """
    status_value = read_values.get(STATUS)
    if status_value is None or status_value.is_null:
        return 0
    try:
        status = status_value.as_int()
    except (ValueError, OverflowError) as e:
        raise MalformedDataError(f"invalid status '{status_value.raw}'") from e
    if status < 0:
        message_value = read_values.get(MESSAGE)
        message = message_value.as_str() if message_value is not None else ""
        logger.error(
            "[SP-IF] solarprognose returns error code %s, message: %s",
            status,
            message,
        )
        raise UpstreamError(status, message)
    return status


def hour_of_day(unix_timestamp):
    """Returns the UTC hour (0-23) of a unix timestamp in seconds."""
    return datetime.fromtimestamp(unix_timestamp, pytz.utc).hour


def remap_forecast_hours(read_values):
    """
    Adds ``data_<hour>_<suffix>`` and ``data_<hour>_ts`` for every non null
    ``data_<epoch>_<suffix>`` entry of read_values, in place.

    Offsets 0..23 are hour keys added by an earlier pass and are skipped, which
    keeps the mapping idempotent. When two samples fall into the same hour the
    later one wins.

    Raises:
        MalformedDataError: if an offset token is not an integer.
    """
    modified = {}
    for key, value in read_values.items():
        if not key.startswith(DATA) or value is None or value.is_null:
            continue
        split = key.split("_")
        if len(split) != 3:
            continue
        token, suffix = split[1], split[2]
        if not OFFSET_PATTERN.fullmatch(token):
            raise MalformedDataError(
                f"forecast key '{key}' has a non numeric offset '{token}'"
            )
        unix_timestamp = int(token, 10)
        if 0 <= unix_timestamp < 24:
            continue
        try:
            hour = hour_of_day(unix_timestamp)
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedDataError(
                f"forecast key '{key}' has an out of range timestamp"
            ) from e
        new_key = f"{DATA}{hour}_"
        modified[new_key + suffix] = value
        modified[new_key + SUFFIX_TIMESTAMP] = Value.timestamp(unix_timestamp)
    read_values.update(modified)
    return read_values


def handle_map(read_values):
    """
    Checks the status and remaps the forecast hours of read_values.

    Returns:
        dict: read_values, augmented in place.

    Raises:
        UpstreamError: negative status reported by the API.
        MalformedDataError: status or offset token cannot be parsed.
    """
    check_status(read_values)
    return remap_forecast_hours(read_values)
