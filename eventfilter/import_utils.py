import typing
from importlib import import_module

from .exceptions import ImproperlyConfigured


def import_string(dotted_path: str) -> typing.Any:
    """
    Import a dotted module path and return the attribute/class designated by
    the last name in the path.
    Raises:
        ImproperlyConfigured: if the path is malformed or cannot be imported.
    """
    try:
        module_path, class_name = dotted_path.rsplit(".", 1)
    except ValueError as err:
        raise ImproperlyConfigured(
            f"{dotted_path} doesn't look like a module path", code="invalid_path"
        ) from err

    try:
        module = import_module(module_path)
    except ImportError as err:
        raise ImproperlyConfigured(
            f"Module '{module_path}' could not be imported: {err}",
            code="import_error",
        ) from err

    try:
        return getattr(module, class_name)
    except AttributeError as err:
        raise ImproperlyConfigured(
            f'Module "{module_path}" does not define a "{class_name}" attribute/class',
            code="import_error",
        ) from err
