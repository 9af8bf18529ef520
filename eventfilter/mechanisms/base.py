from abc import ABC, abstractmethod


class FilteringMechanismBase(ABC):
    """
    The subsystem that actually filters events.

    The service calls ``initialize_filtering`` at most once per successful
    start and pushes every effective change of the flag through
    ``apply_filter_flag``.
    """

    @abstractmethod
    def initialize_filtering(self) -> None:
        """Bring the filtering machinery up."""
        pass

    @abstractmethod
    def apply_filter_flag(self, enabled: bool) -> None:
        """Turn filtering on or off."""
        pass

    def close(self) -> None:
        """Release resources held by the mechanism."""
        pass
