"""
url_builder.py

Resolves the request URL for the Solarprognose API from a URL template, the
provider setting and the current time. The time is passed in so the window is
reproducible in tests.
"""

import logging
import math
import re
from datetime import timedelta

import pytz
import requests

from .constants import (
    ALGORITHM,
    ELEMENTID,
    ENDTIME,
    FORECAST_WINDOW_HOURS,
    ITEM,
    PROVIDER_HOST,
    PROVIDER_PORT,
    STARTTIME,
    TOKEN,
)
from .errors import ConfigurationError, MalformedURLError

logger = logging.getLogger("__main__")

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def get_time_window(now):
    """
    Returns (start, end) in UTC epoch seconds. start is 'now' truncated to the
    second, end is 23 hours later. Naive datetimes are taken as UTC.
    """
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    start = math.floor(now.timestamp())
    end = start + int(timedelta(hours=FORECAST_WINDOW_HOURS).total_seconds())
    return start, end


def replace_named_placeholders(pattern, values):
    """
    Replaces every '{name}' in pattern with values[name].

    Raises:
        ConfigurationError: if a placeholder has no value.
    """

    def substitute(match):
        name = match.group(1)
        value = values.get(name)
        if value is None:
            raise ConfigurationError(f"no value for placeholder '{{{name}}}'")
        return str(value)

    return PLACEHOLDER_PATTERN.sub(substitute, pattern)


def validate_url(url_string):
    """
    Checks that url_string is an absolute http(s) URL with a host.

    Raises:
        MalformedURLError: if the URL cannot be prepared by requests.
    """
    try:
        requests.models.PreparedRequest().prepare_url(url_string, None)
    except requests.exceptions.RequestException as e:
        raise MalformedURLError(f"invalid url '{url_string}': {e}") from e
    if not url_string.lower().startswith(("http://", "https://")):
        raise MalformedURLError(f"invalid url '{url_string}': unsupported scheme")
    return url_string


def get_api_url(setting, url_pattern, now):
    """
    Builds the substitution table from setting and now and resolves url_pattern.
    Configuration values are substituted verbatim.
    """
    start, end = get_time_window(now)
    configuration_values = {
        PROVIDER_HOST: setting.provider_host,
        PROVIDER_PORT: setting.provider_port,
        STARTTIME: str(start),
        ENDTIME: str(end),
        TOKEN: setting.get_configuration_value_as_string(TOKEN),
        ITEM: setting.get_configuration_value_as_string(ITEM),
        ELEMENTID: setting.get_configuration_value_as_string(ELEMENTID),
        ALGORITHM: setting.get_configuration_value_as_string(ALGORITHM),
    }
    url_string = replace_named_placeholders(url_pattern, configuration_values)
    logger.debug("[SP-IF] url: %s", url_string)
    return validate_url(url_string)
