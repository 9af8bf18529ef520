import logging
import threading
from typing import Optional

from .base import FilteringMechanismBase
from ..channel import Event, EventChannel
from ..filters import EventFilterBase, TypeFilter

logger = logging.getLogger(__name__)

DEFAULT_FILTERED_TYPES = ("event",)


class ChannelFilteringMechanism(FilteringMechanismBase):
    """
    Filters an ``EventChannel`` by registering itself as a channel delegate.

    While active, every event matching ``rule`` is dropped before dispatch.
    With no rule, events of type ``event`` are dropped.
    """

    def __init__(
        self,
        channel: Optional[EventChannel] = None,
        rule: Optional[EventFilterBase] = None,
    ):
        self.channel = channel if channel is not None else EventChannel()
        self.rule = rule if rule is not None else TypeFilter(DEFAULT_FILTERED_TYPES)
        self.suppressed_count = 0
        self._active = False
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._active

    def initialize_filtering(self) -> None:
        self.channel.add_delegate(self)
        logger.info(f"Event filter attached to channel with rule {self.rule!r}")

    def apply_filter_flag(self, enabled: bool) -> None:
        self._active = enabled
        logger.info(f"Channel event filter {'enabled' if enabled else 'disabled'}")

    def should_filter(self, event: Event) -> bool:
        if not self._active or not self.rule.matches(event):
            return False
        with self._lock:
            self.suppressed_count += 1
        return True

    def close(self) -> None:
        self.channel.remove_delegate(self)
        self._active = False
