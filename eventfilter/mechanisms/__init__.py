from .base import FilteringMechanismBase
from .channel import ChannelFilteringMechanism
from .null import NullFilteringMechanism

__all__ = [
    "FilteringMechanismBase",
    "ChannelFilteringMechanism",
    "NullFilteringMechanism",
]
