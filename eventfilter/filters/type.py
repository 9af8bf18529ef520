from typing import Iterable

from .base import EventFilterBase
from ..channel import Event


class TypeFilter(EventFilterBase):
    """Filter events by event type."""

    def __init__(self, event_types: Iterable[str]):
        self.event_types = frozenset(event_types)

    def matches(self, event: Event) -> bool:
        return event.event_type in self.event_types

    def __repr__(self) -> str:
        return f"TypeFilter({sorted(self.event_types)!r})"
