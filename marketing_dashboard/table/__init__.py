"""Filtering and sorting utilities for tabular views."""

from .columns import Column, ColumnType, format_cell
from .filters import MembershipPredicate, TextPredicate, filter_records
from .sorting import SortDirection, SortState, apply_sort, next_sort_state, sort_rows

__all__ = [
    "Column",
    "ColumnType",
    "MembershipPredicate",
    "SortDirection",
    "SortState",
    "TextPredicate",
    "apply_sort",
    "filter_records",
    "format_cell",
    "next_sort_state",
    "sort_rows",
]
