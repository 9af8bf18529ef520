from .base import EventFilterBase
from .builder import build_filter
from .composite import CompositeFilter
from .pattern import PatternFilter
from .type import TypeFilter

__all__ = [
    "EventFilterBase",
    "CompositeFilter",
    "PatternFilter",
    "TypeFilter",
    "build_filter",
]
