import asyncio
import typing

T = typing.TypeVar("T")


async def to_thread(
    func: typing.Callable[..., T],
    /,
    *args: typing.Any,
    **kwargs: typing.Any,
) -> T:
    """
    Run a blocking callable in a worker thread, keeping the caller's
    context variables.

    Args:
        func: The synchronous function to execute
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The result of the function call
    """
    return await asyncio.to_thread(func, *args, **kwargs)
