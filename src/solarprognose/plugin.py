"""
Plugin descriptors and the registry the host looks plugins up in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

logger = logging.getLogger("__main__")


class SupportedInterface(Enum):
    URL = "url"


class KnownProtocol(Enum):
    HTTP = "http"


@dataclass(frozen=True)
class PluginDescriptor:
    name: str
    version: str
    author: str = ""
    url: str = ""
    svg_image: str = ""
    supported_interfaces: Tuple[SupportedInterface, ...] = ()
    used_protocol: KnownProtocol = KnownProtocol.HTTP
    supports: str = ""


class PluginRegistry:
    """Maps plugin names to their descriptor and a factory for instances."""

    def __init__(self):
        self._plugins: Dict[str, Tuple[PluginDescriptor, Callable]] = {}

    def register(self, descriptor: PluginDescriptor, factory: Callable):
        if descriptor.name in self._plugins:
            raise ValueError(f"plugin '{descriptor.name}' is already registered")
        self._plugins[descriptor.name] = (descriptor, factory)
        logger.debug(
            "[Plugin] registered %s %s", descriptor.name, descriptor.version
        )

    def get(self, name) -> PluginDescriptor:
        try:
            return self._plugins[name][0]
        except KeyError:
            raise KeyError(f"unknown plugin '{name}'") from None

    def create(self, name, **kwargs):
        if name not in self._plugins:
            raise KeyError(f"unknown plugin '{name}'")
        return self._plugins[name][1](**kwargs)

    def names(self):
        return sorted(self._plugins)

    def __contains__(self, name):
        return name in self._plugins


registry = PluginRegistry()
