import logging
from typing import List

from .base import FilteringMechanismBase

logger = logging.getLogger(__name__)


class NullFilteringMechanism(FilteringMechanismBase):
    """Mechanism that filters nothing and only records what it was asked to do."""

    def __init__(self):
        self.initialize_count = 0
        self.applied_flags: List[bool] = []

    def initialize_filtering(self) -> None:
        self.initialize_count += 1
        logger.debug("Null filtering mechanism initialized")

    def apply_filter_flag(self, enabled: bool) -> None:
        self.applied_flags.append(enabled)
        logger.debug(f"Null filtering mechanism flag set to {enabled}")
