import logging
import logging.config
import typing

from eventfilter.conf import ConfigLoader
from eventfilter.exceptions import ImproperlyConfigured
from eventfilter.filters import build_filter
from eventfilter.import_utils import import_string
from eventfilter.mechanisms import ChannelFilteringMechanism, FilteringMechanismBase
from eventfilter.mechanisms.redis import RedisFilteringMechanism
from eventfilter.otel.metrics import FilterMetricsCollector, initialize_metrics
from eventfilter.service import EventFilterService

if typing.TYPE_CHECKING:
    from eventfilter.channel import EventChannel

__all__ = [
    "configure_logging",
    "create_event_filter_service",
    "initialise_event_filter",
]

logger = logging.getLogger(__name__)


def configure_logging(config: typing.Optional[ConfigLoader] = None) -> None:
    config = config or ConfigLoader.get_lazily_loaded_config()
    logging.config.dictConfig(config.LOGGING_CONFIG)


def _create_metrics(config: ConfigLoader) -> typing.Optional[FilterMetricsCollector]:
    metrics_config = config.get("METRICS_CONFIG", {})
    if not metrics_config.get("ENABLED"):
        return None
    return initialize_metrics(
        service_name=metrics_config.get("SERVICE_NAME", "eventfilter"),
        endpoint=metrics_config.get("ENDPOINT"),
        console_export=metrics_config.get("CONSOLE_EXPORT", False),
        export_interval_ms=metrics_config.get("EXPORT_INTERVAL_MS", 60000),
    )


def create_mechanism(
    config: ConfigLoader,
    channel: typing.Optional["EventChannel"] = None,
) -> FilteringMechanismBase:
    """
    Build the filtering mechanism named by EVENT_FILTER_MECHANISM.
    Raises:
        ImproperlyConfigured: the path does not name a filtering mechanism.
    """
    mechanism_klass = import_string(config.EVENT_FILTER_MECHANISM)
    if not (
        isinstance(mechanism_klass, type)
        and issubclass(mechanism_klass, FilteringMechanismBase)
    ):
        raise ImproperlyConfigured(
            f"{config.EVENT_FILTER_MECHANISM} is not a filtering mechanism",
            code="invalid_mechanism",
        )

    options = dict(config.get("EVENT_FILTER_MECHANISM_OPTIONS", {}))

    if issubclass(mechanism_klass, ChannelFilteringMechanism):
        options.setdefault("rule", build_filter(config.EVENT_FILTER_RULE))
        if channel is not None:
            options.setdefault("channel", channel)
    elif issubclass(mechanism_klass, RedisFilteringMechanism):
        options.setdefault("url", config.REDIS_URL)
        options.setdefault("key", config.EVENT_FILTER_REDIS_KEY)

    try:
        return mechanism_klass(**options)
    except TypeError as e:
        raise ImproperlyConfigured(
            f"Invalid options for {mechanism_klass.__name__}: {e}",
            code="invalid_mechanism_options",
        ) from e


def create_event_filter_service(
    config: typing.Optional[ConfigLoader] = None,
    channel: typing.Optional["EventChannel"] = None,
    metrics: typing.Optional[FilterMetricsCollector] = None,
) -> EventFilterService:
    """
    Build an event filter service from configuration. The service is not
    started; the host starts it and keeps the instance.
    :param config: Configuration, the lazily loaded one if omitted.
    :param channel: Channel to filter when the channel mechanism is configured.
    :param metrics: Metrics collector, built from METRICS_CONFIG if omitted.
    :return: The service.
    """
    config = config or ConfigLoader.get_lazily_loaded_config()
    if metrics is None:
        metrics = _create_metrics(config)

    mechanism = create_mechanism(config, channel=channel)
    if isinstance(mechanism, ChannelFilteringMechanism) and mechanism.channel.metrics is None:
        mechanism.channel.metrics = metrics

    service = EventFilterService(mechanism, metrics=metrics)
    if config.get("EVENT_FILTER_ENABLED", False):
        service.set_enabled(True)

    logger.info(f"Created event filter service: {service!r}")
    return service


def initialise_event_filter(
    config_file: typing.Optional[str] = None,
    channel: typing.Optional["EventChannel"] = None,
) -> EventFilterService:
    """
    Load configuration, configure logging and build the service.
    :param config_file: Optional settings file overriding the defaults.
    :param channel: Channel to filter.
    :return: The service, not yet started.
    """
    config = ConfigLoader.get_lazily_loaded_config(config_file=config_file)
    configure_logging(config)
    return create_event_filter_service(config, channel=channel)
