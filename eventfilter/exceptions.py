import typing


class EventFilterError(Exception):
    def __init__(
        self, message: str, code: typing.Any = None, params: typing.Any = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.params = params

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return {
            "error_class": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "params": self.params,
        }


class ImproperlyConfigured(EventFilterError):
    """Raised when the filter settings cannot be turned into working objects."""


class MechanismError(EventFilterError):
    """Raised by a filtering mechanism when it cannot perform an operation."""

    def __init__(
        self,
        *args: typing.Any,
        exception: typing.Optional[Exception] = None,
        **kwargs: typing.Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.exception = exception


class InitializationFailure(EventFilterError, RuntimeError):
    """
    Raised by ``EventFilterService.start`` when the underlying filtering
    mechanism could not be started. The service stays un-started, so calling
    ``start`` again retries the initialization.
    """

    def __init__(
        self,
        *args: typing.Any,
        exception: typing.Optional[Exception] = None,
        **kwargs: typing.Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.exception = exception


class FilterFlagError(EventFilterError):
    """Raised when the mechanism rejects a new filter flag after start."""

    def __init__(
        self,
        *args: typing.Any,
        exception: typing.Optional[Exception] = None,
        **kwargs: typing.Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.exception = exception
