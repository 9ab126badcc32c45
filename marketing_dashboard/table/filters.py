"""Composable record filters.

Predicates are conjoined: a record is kept only if every predicate accepts
it. Filtering always builds a new list from the full, unfiltered input.
"""

from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from .columns import field_value

T = TypeVar("T")

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class TextPredicate:
    """Case-insensitive substring match on a text field. Empty query matches all."""

    query: str
    field_name: str = "name"

    def __call__(self, record: Any) -> bool:
        if not self.query:
            return True
        value = field_value(record, self.field_name)
        return self.query.lower() in str(value or "").lower()


@dataclass(frozen=True)
class MembershipPredicate:
    """Field value must be one of `allowed`. An empty set applies no filter.

    A single string is treated as one allowed value.
    """

    allowed: Collection[str] | str
    field_name: str = "objective"

    def __post_init__(self) -> None:
        # A bare string is one value, not a collection of characters
        allowed = {self.allowed} if isinstance(self.allowed, str) else self.allowed
        object.__setattr__(self, "allowed", frozenset(allowed))

    def __call__(self, record: Any) -> bool:
        if not self.allowed:
            return True
        return field_value(record, self.field_name) in self.allowed


def filter_records(records: Iterable[T], predicates: Iterable[Predicate]) -> list[T]:
    """Records accepted by every predicate, in input order."""
    predicates = list(predicates)
    return [r for r in records if all(p(r) for p in predicates)]
