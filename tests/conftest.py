"""Fixtures for the Solarprognose tests."""

from datetime import datetime

import pytest
import pytz

from solarprognose.config import ProviderSetting

# 2024-06-01T00:00:00Z
JUNE_FIRST_UTC = 1717200000


@pytest.fixture
def provider_setting():
    """Setting with the values used throughout the tests."""
    return ProviderSetting(
        provider_host="www.solarprognose.de",
        configuration={
            "token": "12345",
            "algorithm": "mosmix",
            "item": "item",
            "elementid": "0815",
        },
    )


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2025-01-01T00:00:00Z."""
    return lambda: datetime(2025, 1, 1, 0, 0, 0, tzinfo=pytz.utc)


@pytest.fixture
def sample_payload():
    """
    Decoded Solarprognose response with samples at 06, 07, 08 and 14 UTC on
    2024-06-01. Every sample is [kW, accumulated kWh].
    """
    samples = {6: [0.12, 0.12], 7: [0.85, 0.97], 8: [1.9, 2.87], 14: [3.2, 15.4]}
    return {
        "preferredNextApiRequestAt": {
            "secondOfHour": 2236,
            "epochTimeUtc": JUNE_FIRST_UTC + 14 * 3600 + 2236,
        },
        "status": 0,
        "iLastPredictionGenerationEpochTime": JUNE_FIRST_UTC + 13 * 3600,
        "weather_source_text": "Kurzfristig (3 Tage): Wetterdaten vom DWD",
        "datalinename": "Germany",
        "data": {
            str(JUNE_FIRST_UTC + hour * 3600): values
            for hour, values in samples.items()
        },
    }
