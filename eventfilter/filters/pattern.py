from typing import Any, Dict

from .base import EventFilterBase
from ..channel import Event


class PatternFilter(EventFilterBase):
    """Filter events by pattern matching on event data."""

    def __init__(self, pattern: Dict[str, Any]):
        self.pattern = dict(pattern)

    def matches(self, event: Event) -> bool:
        """Every key of the pattern must be present in the data with an equal value."""
        for key, value in self.pattern.items():
            if key not in event.data or event.data[key] != value:
                return False
        return True

    def __repr__(self) -> str:
        return f"PatternFilter({self.pattern!r})"
