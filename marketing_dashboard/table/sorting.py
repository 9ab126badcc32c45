"""Generic typed sorting for table rows.

Rows are mappings or attribute-style records. Sorting never mutates the input and
is stable, so rows with equal keys keep their input order in both directions.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any

from .columns import Column, ColumnType, field_value

# Mapping rows or attribute-style records (dataclasses, pydantic models)
Row = Any


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    """Active sort: a column key and a direction. None means unsorted."""

    key: str
    direction: SortDirection = SortDirection.ASC


# =============================================================================
# COMPARISON KEYS
# =============================================================================


def _to_number(value: Any) -> float:
    """Numeric value, with missing/non-numeric/NaN coerced to 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _to_timestamp(value: Any) -> float:
    """POSIX timestamp; naive values are read as UTC, unparseable ones as 0."""
    match value:
        case datetime():
            moment = value
        case date():
            moment = datetime.combine(value, time())
        case str():
            try:
                # 3.10 fromisoformat does not accept a "Z" suffix
                if value.endswith(("Z", "z")):
                    value = value[:-1] + "+00:00"
                moment = datetime.fromisoformat(value)
            except ValueError:
                return 0.0
        case _:
            return 0.0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def _to_text(value: Any) -> str:
    return "" if value is None else str(value).lower()


def sort_value(value: Any, column_type: ColumnType) -> Any:
    """Comparable key for a cell value under the given column type."""
    match column_type:
        case ColumnType.STRING:
            return _to_text(value)
        case ColumnType.NUMBER:
            return _to_number(value)
        case ColumnType.DATE:
            return _to_timestamp(value)
    raise ValueError(f"Unknown column type: {column_type!r}")


# =============================================================================
# SORTING
# =============================================================================


def sort_rows(
    rows: Sequence[Row],
    key: str,
    column_type: ColumnType | str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Row]:
    """Return a new list of rows ordered by `key`.

    Args:
        rows: Rows to order (not modified)
        key: Column key to sort by; missing keys read as None
        column_type: "string" (case-insensitive), "number" or "date"
        direction: "asc" or "desc"
    """
    column_type = ColumnType(column_type)
    direction = SortDirection(direction)
    return sorted(
        rows,
        key=lambda row: sort_value(field_value(row, key), column_type),
        reverse=direction is SortDirection.DESC,
    )


def next_sort_state(current: SortState | None, column: Column) -> SortState | None:
    """Header-click transition: unsorted -> asc -> desc -> unsorted.

    Clicking a different column starts it at ascending. Clicking a
    non-sortable column leaves the state unchanged.
    """
    if not column.sortable:
        return current
    if current is None or current.key != column.key:
        return SortState(column.key, SortDirection.ASC)
    if current.direction is SortDirection.ASC:
        return SortState(column.key, SortDirection.DESC)
    return None


def apply_sort(
    rows: Sequence[Row], state: SortState | None, columns: Sequence[Column]
) -> list[Row]:
    """Order rows for display under the current sort state.

    With no active sort the input order is returned unchanged.

    Raises:
        ValueError: If the state refers to a column not in `columns`.
    """
    if state is None:
        return list(rows)
    column = next((c for c in columns if c.key == state.key), None)
    if column is None:
        raise ValueError(f"Unknown sort column: {state.key!r}")
    return sort_rows(rows, column.key, column.column_type, state.direction)
