"""
solarprognose_interface.py

This module provides the SolarprognoseInterface class, the provider that fetches
the hourly solar power forecast of one plant from the Solarprognose API
(www.solarprognose.de) and maps it to the host's output fields.

One activity tick performs exactly one GET request, checks the reported status,
copies the epoch keyed samples under their UTC hour of day and extracts the
declared fields. Any error aborts the tick before variables are touched.

Classes:
    SolarprognoseInterface: request building, connection test, response
        handling and the host facing declarations (dialog, fields, tables,
        default setting and activity).

Logging:
    Uses the standard Python logging module with the '[SP-IF]' prefix.
"""

from datetime import datetime, time, timedelta
import logging
import pytz

from ..activity import Activity
from ..config import ProviderSetting
from ..constants import (
    ALGORITHM,
    ALGORITHM_OPTIONS,
    BASE_URL,
    ELEMENTID,
    ITEM,
    TOKEN,
)
from ..errors import ActivityInterruptedError
from ..fields import CommandProviderProperty, calculate, forecast_fields
from ..messages import get_resource_bundle
from ..plugin import KnownProtocol, PluginDescriptor, SupportedInterface
from ..response_mapper import handle_map
from ..tables import forecast_table
from ..ui import (
    HtmlInputType,
    HtmlWidth,
    UIInputElement,
    UIList,
    UISelectElement,
    UITextElement,
    ValueText,
)
from ..url_builder import get_api_url
from ..values import flatten_json
from .http_connection import HttpConnection, HttpConnectionFactory

logger = logging.getLogger("__main__")
logger.info("[SP-IF] loading module ")

PROPERTY_NAME = "Solarprognose"


def utc_now():
    return datetime.now(pytz.utc)


class SolarprognoseInterface:
    """
    Provider for the Solarprognose V1 API.
    """

    DESCRIPTOR = PluginDescriptor(
        name="Solarprognose",
        version="1.0.1",
        author="Stefan Töngi",
        url="https://github.com/solarreader-plugins/plugin-Solarprognose",
        svg_image="solarprognose.svg",
        supported_interfaces=(SupportedInterface.URL,),
        used_protocol=KnownProtocol.HTTP,
        supports="Solarprognose V1",
    )

    def __init__(
        self, setting=None, connection_factory=None, clock=utc_now, locale=None
    ):
        self.setting = setting if setting is not None else self.get_default_provider_setting()
        self.connection_factory = (
            connection_factory
            if connection_factory is not None
            else HttpConnectionFactory()
        )
        self.clock = clock
        self.resource_bundle = get_resource_bundle(locale)
        logger.debug("[SP-IF] instantiate %s", self.__class__.__name__)

    # ------------------------------------------------------------------
    # host facing declarations

    @staticmethod
    def get_default_provider_setting():
        return ProviderSetting.default()

    @staticmethod
    def get_default_activity():
        return Activity(time(2, 0, 0), time(21, 0, 0), timedelta(hours=1))

    def get_provider_dialog(self):
        """
        Returns the form elements the host shows to configure the provider.
        """
        rb = self.resource_bundle
        ui_list = UIList()
        ui_list.add_element(UITextElement(label=rb["solarprognose.title.text"]))
        ui_list.add_element(
            UIInputElement(
                id="id-solarprognose-token",
                name=TOKEN,
                required=True,
                input_type=HtmlInputType.TEXT,
                column_width=HtmlWidth.HALF,
                label=rb["solarprognose.token.text"],
                placeholder=rb["solarprognose.token.text"],
                tooltip=rb["solarprognose.token.tooltip"],
                invalid_feedback=rb["solarprognose.token.error"],
            )
        )
        ui_list.add_element(
            UIInputElement(
                id="id-solarprognose-elementid",
                name=ELEMENTID,
                required=True,
                input_type=HtmlInputType.NUMBER,
                step="any",
                column_width=HtmlWidth.HALF,
                label=rb["solarprognose.elementid.text"],
                placeholder=rb["solarprognose.elementid.text"],
                tooltip=rb["solarprognose.elementid.tooltip"],
                invalid_feedback=rb["solarprognose.elementid.error"],
            )
        )
        ui_list.add_element(
            UISelectElement(
                name=ALGORITHM,
                column_width=HtmlWidth.HALF,
                label=rb["solarprognose.algorithm.text"],
                tooltip=rb["solarprognose.algorithm.tooltip"],
                options=[ValueText(option) for option in ALGORITHM_OPTIONS],
            )
        )
        ui_list.add_element(
            UIInputElement(
                id="id-solarprognose-item",
                name=ITEM,
                required=True,
                input_type=HtmlInputType.TEXT,
                column_width=HtmlWidth.HALF,
                label=rb["solarprognose.item.text"],
                placeholder=rb["solarprognose.item.text"],
                tooltip=rb["solarprognose.item.tooltip"],
                invalid_feedback=rb["solarprognose.item.error"],
            )
        )
        return ui_list

    @staticmethod
    def get_supported_properties():
        return [
            CommandProviderProperty(
                name=PROPERTY_NAME, command=BASE_URL, property_fields=forecast_fields()
            )
        ]

    @staticmethod
    def get_default_tables():
        return [forecast_table()]

    # ------------------------------------------------------------------
    # request / response

    def build_request(self, setting=None, url_pattern=BASE_URL):
        """
        Resolves url_pattern for setting (default: the provider's own setting)
        and the current time of the clock.
        """
        setting = setting if setting is not None else self.setting
        return get_api_url(setting, url_pattern, self.clock())

    def test_connection(self, test_setting):
        """
        Checks that the API is reachable with test_setting.

        Returns:
            str: localized success message.
        """
        connection = self.connection_factory.create_connection(test_setting)
        try:
            test_url = self.build_request(test_setting)
            connection.test(test_url, HttpConnection.CONTENT_TYPE_JSON)
        finally:
            connection.close()
        return self.resource_bundle["solarprognose.connection.successful"]

    @staticmethod
    def handle_response(payload):
        """
        Flattens a decoded JSON payload, checks its status and adds the hour
        keyed entries.

        Returns:
            dict: remapped map of tagged values.
        """
        return handle_map(flatten_json(payload))

    def handle_command_property(self, connection, command_property, stop_event=None):
        url = self.build_request(self.setting, command_property.command)
        payload = connection.get_json(url)
        if stop_event is not None and stop_event.is_set():
            raise ActivityInterruptedError("activity stopped during request")
        read_values = self.handle_response(payload)
        return calculate(read_values, command_property.property_fields, {})

    def do_activity_work(self, variables, stop_event=None):
        """
        Runs one activity tick and writes the extracted fields into variables.
        variables is only updated after every property succeeded.

        Raises:
            SolarprognoseError: any failure of the tick.
        """
        collected = {}
        connection = self.connection_factory.create_connection(self.setting)
        try:
            for command_property in self.get_supported_properties():
                collected.update(
                    self.handle_command_property(
                        connection, command_property, stop_event
                    )
                )
        finally:
            connection.close()
        variables.update(collected)
        available = sum(
            1 for key, value in collected.items()
            if key.startswith("timestamp_") and value is not None
        )
        logger.info("[SP-IF] forecast updated - %s hours available", available)
        return True
