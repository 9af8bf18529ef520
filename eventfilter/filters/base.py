from abc import ABC, abstractmethod

from ..channel import Event


class EventFilterBase(ABC):
    """Base class for event filtering rules."""

    @abstractmethod
    def matches(self, event: Event) -> bool:
        """Check if event matches this filter."""
        pass
