from typing import List

from .base import EventFilterBase
from ..channel import Event

OPERATORS = ("AND", "OR")


class CompositeFilter(EventFilterBase):
    """Combine multiple filters with AND/OR logic."""

    def __init__(self, filters: List[EventFilterBase], operator: str = "AND"):
        operator = operator.upper()
        if operator not in OPERATORS:
            raise ValueError(f"Unknown operator: {operator}")
        self.filters = list(filters)
        self.operator = operator

    def matches(self, event: Event) -> bool:
        if self.operator == "AND":
            return all(f.matches(event) for f in self.filters)
        return any(f.matches(event) for f in self.filters)

    def __repr__(self) -> str:
        return f"CompositeFilter({self.filters!r}, operator={self.operator!r})"
