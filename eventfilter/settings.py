EVENT_FILTER_MECHANISM = "eventfilter.mechanisms.channel.ChannelFilteringMechanism"

# Extra keyword arguments for the mechanism constructor
EVENT_FILTER_MECHANISM_OPTIONS = {}

# Events matching this rule are dropped while filtering is enabled.
# Shapes: {"types": [...]}, {"pattern": {...}}, {"all": [...]}, {"any": [...]}
EVENT_FILTER_RULE = {"types": ["event"]}

# Flag recorded on the service before it is started
EVENT_FILTER_ENABLED = False

REDIS_URL = "redis://localhost:6379/0"
EVENT_FILTER_REDIS_KEY = "eventfilter:enabled"

METRICS_CONFIG = {
    "ENABLED": False,
    "SERVICE_NAME": "eventfilter",
    "ENDPOINT": None,  # e.g. "http://localhost:4317"
    "CONSOLE_EXPORT": False,
    "EXPORT_INTERVAL_MS": 60000,
}

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
    },
    "handlers": {
        "default": {
            "level": "INFO",
            "formatter": "standard",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "": {
            "handlers": ["default"],
            "level": "WARNING",
            "propagate": False,
        },
        "eventfilter": {"handlers": ["default"], "level": "INFO", "propagate": False},
    },
}
