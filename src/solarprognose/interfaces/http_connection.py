"""
http_connection.py

Thin synchronous HTTP connection used by the provider. It maps transport
failures of requests to the plugin's error types.
"""

import logging
import requests

from ..errors import MalformedDataError, NetworkError, RequestTimeoutError

logger = logging.getLogger("__main__")


class HttpConnection:
    """
    One requests session with the read timeout of a provider setting.
    """

    CONTENT_TYPE_JSON = "application/json"

    def __init__(self, setting, session=None):
        self.timeout = setting.read_timeout_seconds
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Accept": self.CONTENT_TYPE_JSON})

    def _get(self, url):
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                f"no response within {self.timeout} s: {e}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"request failed: {e}") from e

    def get_json(self, url):
        """
        Performs a GET on url and returns the decoded JSON body.

        Raises:
            RequestTimeoutError: read timeout exceeded.
            NetworkError: connection or HTTP status error.
            MalformedDataError: body is not valid JSON.
        """
        response = self._get(url)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedDataError(f"response is not valid JSON: {e}") from e

    def test(self, url, content_type):
        """
        Checks that url is reachable and answers with content_type.
        """
        response = self._get(url)
        received = response.headers.get("Content-Type", "")
        if content_type not in received:
            raise NetworkError(
                f"unexpected content type '{received}', expected '{content_type}'"
            )
        logger.debug("[HTTP] connection test successful: %s", response.status_code)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class HttpConnectionFactory:
    """Creates an HttpConnection for a setting."""

    def create_connection(self, setting):
        return HttpConnection(setting)
