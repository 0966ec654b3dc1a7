"""
Declarative form elements of the provider dialog. The host renders them; the
plugin only describes them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional


class HtmlInputType(Enum):
    TEXT = "text"
    NUMBER = "number"


class HtmlWidth(Enum):
    FULL = "full"
    HALF = "half"


@dataclass
class UITextElement:
    label: str
    element: str = "text"


@dataclass
class UIInputElement:
    name: str
    label: str
    id: str = ""
    input_type: HtmlInputType = HtmlInputType.TEXT
    required: bool = False
    column_width: HtmlWidth = HtmlWidth.FULL
    placeholder: str = ""
    tooltip: str = ""
    invalid_feedback: str = ""
    step: Optional[str] = None
    element: str = "input"


@dataclass
class ValueText:
    value: str
    text: Optional[str] = None

    def __post_init__(self):
        if self.text is None:
            self.text = self.value


@dataclass
class UISelectElement:
    name: str
    label: str
    options: List[ValueText] = field(default_factory=list)
    column_width: HtmlWidth = HtmlWidth.FULL
    tooltip: str = ""
    element: str = "select"


@dataclass
class UIList:
    elements: list = field(default_factory=list)

    def add_element(self, element):
        self.elements.append(element)

    def get_element(self, name):
        for element in self.elements:
            if getattr(element, "name", None) == name:
                return element
        return None

    def to_dicts(self):
        """Plain dictionaries with enums replaced by their values."""
        return [_plain(asdict(element)) for element in self.elements]


def _plain(node):
    if isinstance(node, dict):
        return {key: _plain(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_plain(value) for value in node]
    if isinstance(node, Enum):
        return node.value
    return node
