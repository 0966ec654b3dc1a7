"""Exceptions raised while fetching and mapping a Solarprognose forecast."""


class SolarprognoseError(Exception):
    """Base class for all errors that abort an activity tick."""


class ConfigurationError(SolarprognoseError):
    """A required setting is missing or invalid."""


class MalformedURLError(SolarprognoseError):
    """The resolved request URL is not a valid absolute URL."""


class UpstreamError(SolarprognoseError):
    """The Solarprognose API reported a negative status."""

    def __init__(self, code, message=""):
        super().__init__(f"solarprognose returns error code {code}, message: {message}")
        self.code = code
        self.message = message


class MalformedDataError(SolarprognoseError):
    """The response payload cannot be interpreted as forecast data."""


class NetworkError(SolarprognoseError):
    """Transport level failure while talking to the provider."""


class RequestTimeoutError(NetworkError, TimeoutError):
    """The provider did not answer within the read timeout."""


class ActivityInterruptedError(SolarprognoseError, InterruptedError):
    """The activity tick was aborted before its result was committed."""
