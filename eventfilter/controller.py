import logging
import typing

from .exceptions import InitializationFailure
from .service import EventFilterService

logger = logging.getLogger(__name__)

StateCallback = typing.Callable[[bool], None]


class EventFilterController:
    """
    Binds a host toggle (checkbox, switch, menu item) to an event filter
    service. The service is handed in by the host; the controller never looks
    it up by itself.

    ``on_state_changed`` is called with the current enabled flag whenever the
    host should refresh its toggle.
    """

    def __init__(
        self,
        service: EventFilterService,
        on_state_changed: typing.Optional[StateCallback] = None,
    ) -> None:
        self.service = service
        self.on_state_changed = on_state_changed

    def load(self) -> bool:
        """
        Start the filter service and return the flag the toggle should show.
        Raises:
            InitializationFailure: the service could not be started.
        """
        try:
            self.service.start()
        except InitializationFailure as e:
            logger.error(f"Event filter service could not be started: {e}")
            raise

        enabled = self.service.is_enabled()
        self._notify(enabled)
        return enabled

    def toggle(self, checked: bool) -> None:
        self.service.set_enabled(checked)
        self._notify(self.service.is_enabled())

    def _notify(self, enabled: bool) -> None:
        if self.on_state_changed is not None:
            self.on_state_changed(enabled)
