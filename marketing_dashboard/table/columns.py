"""Column definitions for tabular views.

A column's ColumnType drives both how its values compare when sorting and
how they render by default.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Literal


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class Column:
    """Presentation metadata for one table column."""

    key: str
    label: str
    column_type: ColumnType = ColumnType.STRING
    align: Literal["left", "center", "right"] = "left"
    sortable: bool = True
    formatter: Callable[[Any], str] | None = None


def field_value(row: Any, key: str) -> Any:
    """Read a column value from a mapping or an attribute-style row."""
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


# =============================================================================
# FORMATTERS
# =============================================================================


def format_number(value: Any) -> str:
    """Thousands separators; at most two decimals for non-integral values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, int) or value.is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


def format_money(value: float) -> str:
    return f"${format_number(value)}"


def format_multiplier(value: float) -> str:
    """ROAS style: 2.5 -> '2.50x'."""
    return f"{value:.2f}x"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def format_date(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)


def format_cell(value: Any, column: Column) -> str:
    """Render a cell with the column's formatter, or the default for its type."""
    if column.formatter is not None:
        return column.formatter(value)
    if value is None:
        return ""
    match column.column_type:
        case ColumnType.STRING:
            return str(value)
        case ColumnType.NUMBER:
            return format_number(value)
        case ColumnType.DATE:
            return format_date(value)
    raise ValueError(f"Unknown column type: {column.column_type!r}")
