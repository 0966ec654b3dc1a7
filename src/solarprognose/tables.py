"""
Default table definition of the provider. The host persists one row per hour;
to_dataframe renders the same rows from a set of output variables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

import pandas as pd
import pytz

from .constants import HOURS_PER_DAY

TABLE_NAME = "Wetterprognose"


class TableColumnType(Enum):
    STRING = "string"
    NUMBER = "number"
    TIMESTAMP = "timestamp"


@dataclass
class TableColumn:
    name: str
    column_type: TableColumnType
    primary_key: bool = False


@dataclass
class TableCell:
    """
    A cell reads the variable 'source' when the variable 'condition' is not null.
    With a date_format the value is a timestamp rendered as a date string.
    """

    condition: str
    source: str
    date_format: Optional[str] = None

    @property
    def precondition(self) -> str:
        return f"{self.condition} != null"

    def evaluate(self, variables, tz=pytz.utc):
        if variables.get(self.condition) is None:
            return None
        value = variables.get(self.source)
        if value is None or self.date_format is None:
            return value
        return datetime.fromtimestamp(int(value), tz).strftime(self.date_format)


@dataclass
class TableRow:
    cells: List[TableCell] = field(default_factory=list)

    def add_cell(self, cell: TableCell):
        self.cells.append(cell)


@dataclass
class Table:
    name: str
    columns: List[TableColumn] = field(default_factory=list)
    rows: List[TableRow] = field(default_factory=list)

    def add_column(self, column: TableColumn):
        self.columns.append(column)

    def add_table_row(self, row: TableRow):
        self.rows.append(row)

    def to_dataframe(self, variables, tz=pytz.utc) -> pd.DataFrame:
        """
        Evaluates every row against variables and returns the rows that emitted
        at least one cell.
        """
        records = []
        for row in self.rows:
            values = [cell.evaluate(variables, tz) for cell in row.cells]
            if any(value is not None for value in values):
                records.append(values)
        return pd.DataFrame.from_records(
            records, columns=[column.name for column in self.columns]
        )


def forecast_table() -> Table:
    """Returns the 'Wetterprognose' table with one row per hour of day."""
    table = Table(TABLE_NAME)
    table.add_column(TableColumn("Date", TableColumnType.STRING, primary_key=True))
    table.add_column(TableColumn("Forecast_W", TableColumnType.NUMBER))
    table.add_column(TableColumn("Forecast_Wh", TableColumnType.NUMBER))
    table.add_column(TableColumn("timestamp", TableColumnType.TIMESTAMP))
    for hour in range(HOURS_PER_DAY):
        condition = f"timestamp_{hour}"
        row = TableRow()
        row.add_cell(TableCell(condition, f"timestamp_{hour}", date_format="%d.%m.%Y"))
        row.add_cell(TableCell(condition, f"prognose_{hour}"))
        row.add_cell(TableCell(condition, f"prognose_accumulated_{hour}"))
        row.add_cell(TableCell(condition, f"timestamp_{hour}"))
        table.add_table_row(row)
    return table
