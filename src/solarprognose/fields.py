"""
Declared output fields of the provider and the extraction of those fields out of
a remapped response map.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .constants import (
    DATA,
    HOURS_PER_DAY,
    SUFFIX_ACCUMULATED,
    SUFFIX_POWER,
    SUFFIX_TIMESTAMP,
)
from .values import Value

logger = logging.getLogger("__main__")


class FieldType(Enum):
    NUMBER = "number"
    STRING = "string"
    TIMESTAMP = "timestamp"


@dataclass
class PropertyField:
    """One output variable and the response key it is read from."""

    name: str
    field_type: FieldType
    unit: str = ""
    index: str = ""
    note: str = ""


@dataclass
class CommandProviderProperty:
    """A request command (URL template) and the fields read from its response."""

    name: str
    command: str
    property_fields: List[PropertyField] = field(default_factory=list)


def forecast_fields() -> List[PropertyField]:
    """Returns the three fields per hour of day declared by the provider."""
    fields = []
    for hour in range(HOURS_PER_DAY):
        fields.append(
            PropertyField(
                f"prognose_{hour}",
                FieldType.NUMBER,
                unit="kw",
                index=f"{DATA}{hour}_{SUFFIX_POWER}",
                note=f"prognose for current date at hour {hour}",
            )
        )
        fields.append(
            PropertyField(
                f"prognose_accumulated_{hour}",
                FieldType.NUMBER,
                unit="kwh",
                index=f"{DATA}{hour}_{SUFFIX_ACCUMULATED}",
                note=f"accumulated prognose for current date from hour 0 to hour {hour}",
            )
        )
        fields.append(
            PropertyField(
                f"timestamp_{hour}",
                FieldType.TIMESTAMP,
                unit="seconds",
                index=f"{DATA}{hour}_{SUFFIX_TIMESTAMP}",
                note=f"timestamp for hour {hour}",
            )
        )
    return fields


def _convert(value: Value, field_type: FieldType) -> Optional[Any]:
    if field_type is FieldType.NUMBER:
        return value.as_float()
    if field_type is FieldType.TIMESTAMP:
        return value.as_int()
    return value.as_str()


def calculate(
    read_values: Dict[str, Value],
    property_fields: List[PropertyField],
    variables: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Reads every field's index out of read_values and writes the converted value
    into variables under the field's name. Missing, null or unconvertible
    values are written as None.
    """
    for property_field in property_fields:
        value = read_values.get(property_field.index)
        if value is None or value.is_null:
            variables[property_field.name] = None
            continue
        try:
            variables[property_field.name] = _convert(value, property_field.field_type)
        except (TypeError, ValueError, OverflowError):
            logger.warning(
                "[SP-IF] cannot convert '%s' for field %s",
                value.raw,
                property_field.name,
            )
            variables[property_field.name] = None
    return variables
