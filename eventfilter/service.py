import logging
import threading
import typing

from .concurrency.async_utils import to_thread
from .exceptions import FilterFlagError, InitializationFailure
from .mechanisms.base import FilteringMechanismBase
from .state import FilterState

if typing.TYPE_CHECKING:
    from .otel.metrics import FilterMetricsCollector

__all__ = ["EventFilterService"]

logger = logging.getLogger(__name__)


class EventFilterService:
    """
    Owns the on/off state of the event filter and the one-time startup of the
    underlying filtering mechanism.

    The host constructs one instance and passes it to whatever needs it.
    All operations are serialized with a single re-entrant lock, so calls from
    several threads (e.g. ``set_enabled`` racing ``start``) are applied one at
    a time and the mechanism sees the flags in the order they were recorded.

    The recorded flag is the source of truth. When the mechanism refuses a
    flag the service keeps the flag, marks itself out of sync and pushes the
    flag again on the next ``set_enabled`` or ``sync`` call.

    Example:
        >>> service = EventFilterService(ChannelFilteringMechanism(channel))
        >>> service.start()
        >>> service.set_enabled(True)
        >>> service.is_enabled()
        True
    """

    def __init__(
        self,
        mechanism: FilteringMechanismBase,
        metrics: typing.Optional["FilterMetricsCollector"] = None,
    ) -> None:
        self.mechanism = mechanism
        self.metrics = metrics
        self._state = FilterState()
        self._lock = threading.RLock()

    @property
    def mechanism_name(self) -> str:
        return self.mechanism.__class__.__name__

    def start(self) -> None:
        """
        Start the underlying filtering mechanism. Only the first successful
        call has an effect.

        Right after initialization the recorded flag, on or off, is pushed to
        the mechanism, so a flag left over in a shared backend is overwritten.
        Raises:
            InitializationFailure: the mechanism could not be initialized. The
                service stays un-started and a later call retries.
        """
        with self._lock:
            if self._state.started:
                logger.debug("Event filter service already started")
                return

            try:
                self.mechanism.initialize_filtering()
            except Exception as e:
                logger.error(
                    f"Failed to start event filter mechanism {self.mechanism_name}: {e}"
                )
                if self.metrics:
                    self.metrics.increment_start_failures(
                        self.mechanism_name, e.__class__.__name__
                    )
                raise InitializationFailure(
                    f"Event filter mechanism could not be started: {e}",
                    code="initialization_failure",
                    exception=e,
                ) from e

            self._state.started = True
            if self.metrics:
                self.metrics.increment_starts(self.mechanism_name)
            logger.info(f"Event filter service started with {self.mechanism_name}")

            self._try_push_flag()

    def set_enabled(self, flag: bool) -> None:
        """
        Record whether filtering should be active. Never raises.

        Before start only the flag is recorded. After start the mechanism is
        told about the flag when it changes, or when the last push failed.
        """
        flag = bool(flag)
        with self._lock:
            previous = self._state.enabled
            self._state.enabled = flag

            if not self._state.started:
                logger.debug(f"Event filter flag recorded before start: {flag}")
                return

            if previous == flag and self._state.in_sync:
                logger.debug(f"Event filter already {'enabled' if flag else 'disabled'}")
                return

            if self._try_push_flag():
                logger.info(f"Event filter {'enabled' if flag else 'disabled'}")

    def sync(self) -> None:
        """
        Push the recorded flag to a started mechanism again.
        Raises:
            FilterFlagError: the mechanism still refuses the flag.
        """
        with self._lock:
            if not self._state.started:
                return
            self._push_flag(self._state.enabled)

    def is_enabled(self) -> bool:
        with self._lock:
            return self._state.enabled

    def is_started(self) -> bool:
        with self._lock:
            return self._state.started

    def is_in_sync(self) -> bool:
        with self._lock:
            return self._state.in_sync

    def get_state(self) -> FilterState:
        """Return a snapshot of the current state."""
        with self._lock:
            return self._state.copy()

    def status(self) -> typing.Dict[str, typing.Any]:
        status = self.get_state().to_dict()
        status["mechanism"] = self.mechanism_name
        return status

    def _try_push_flag(self) -> bool:
        try:
            self._push_flag(self._state.enabled)
        except FilterFlagError:
            return False
        return True

    def _push_flag(self, flag: bool) -> None:
        try:
            self.mechanism.apply_filter_flag(flag)
        except Exception as e:
            self._state.in_sync = False
            logger.error(f"Mechanism {self.mechanism_name} rejected filter flag {flag}: {e}")
            if self.metrics:
                self.metrics.increment_error_count(e.__class__.__name__, "service")
            raise FilterFlagError(
                f"Could not apply filter flag {flag}: {e}",
                code="apply_flag_failure",
                params={"enabled": flag},
                exception=e,
            ) from e

        self._state.in_sync = True
        if self.metrics:
            self.metrics.increment_toggles(flag)

    async def astart(self) -> None:
        await to_thread(self.start)

    async def aset_enabled(self, flag: bool) -> None:
        await to_thread(self.set_enabled, flag)

    async def ais_enabled(self) -> bool:
        return await to_thread(self.is_enabled)

    def __repr__(self) -> str:
        state = self.get_state()
        return (
            f"<EventFilterService mechanism={self.mechanism_name} "
            f"phase={state.phase.value} in_sync={state.in_sync}>"
        )
