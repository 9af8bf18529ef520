import typing
from dataclasses import dataclass, field, replace
from enum import Enum


class FilterPhase(Enum):
    """The four reachable combinations of started and enabled."""

    NOT_STARTED_DISABLED = "not_started_disabled"
    NOT_STARTED_ENABLED = "not_started_enabled"
    STARTED_DISABLED = "started_disabled"
    STARTED_ENABLED = "started_enabled"


@dataclass
class FilterState:
    """
    Process-wide on/off state of the event filter.

    ``started`` flips to True once, on the first successful start, and is
    never reset. ``enabled`` may change any number of times, before or
    after start. ``in_sync`` is False while the mechanism has not accepted
    the recorded flag.
    """

    started: bool = field(default=False)
    enabled: bool = field(default=False)
    in_sync: bool = field(default=True)

    @property
    def phase(self) -> FilterPhase:
        if self.started:
            if self.enabled:
                return FilterPhase.STARTED_ENABLED
            return FilterPhase.STARTED_DISABLED
        if self.enabled:
            return FilterPhase.NOT_STARTED_ENABLED
        return FilterPhase.NOT_STARTED_DISABLED

    def copy(self) -> "FilterState":
        return replace(self)

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return {
            "started": self.started,
            "enabled": self.enabled,
            "in_sync": self.in_sync,
            "phase": self.phase.value,
        }
