import logging
from typing import Optional

from redis import Redis, RedisError

from .base import FilteringMechanismBase
from ..exceptions import MechanismError

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_REDIS_KEY = "eventfilter:enabled"

FLAG_ON = "1"
FLAG_OFF = "0"


class RedisFilteringMechanism(FilteringMechanismBase):
    """
    Shares the filter flag with other processes through Redis.

    The flag is stored under ``key`` as "1" or "0" and every change is also
    published on a pub/sub channel of the same name, so filtering workers can
    either poll the key or subscribe to changes.

    Example:
        >>> mechanism = RedisFilteringMechanism(url="redis://localhost:6379/0")
        >>> mechanism.initialize_filtering()
        >>> mechanism.apply_filter_flag(True)
    """

    def __init__(
        self,
        url: str = DEFAULT_REDIS_URL,
        key: str = DEFAULT_REDIS_KEY,
        client: Optional[Redis] = None,
        socket_connect_timeout: int = 5,
    ):
        self.url = url
        self.key = key
        self.socket_connect_timeout = socket_connect_timeout
        self._client = client

    def _get_client(self) -> Redis:
        if self._client is None:
            self._client = Redis.from_url(
                self.url,
                decode_responses=True,
                socket_connect_timeout=self.socket_connect_timeout,
            )
        return self._client

    def initialize_filtering(self) -> None:
        """
        Connect to Redis and make sure the flag key exists.

        Raises:
            MechanismError: If Redis cannot be reached.
        """
        client = self._get_client()
        try:
            client.ping()
            # keep a flag written by another process
            client.set(self.key, FLAG_OFF, nx=True)
        except RedisError as e:
            logger.error(f"Failed to connect to Redis at {self.url}: {e}")
            raise MechanismError(
                f"Redis unavailable: {e}", code="redis_unavailable", exception=e
            ) from e

        logger.info(f"Redis event filter initialized on key '{self.key}'")

    def apply_filter_flag(self, enabled: bool) -> None:
        """
        Raises:
            MechanismError: If the flag could not be written.
        """
        value = FLAG_ON if enabled else FLAG_OFF
        client = self._get_client()
        try:
            with client.pipeline(transaction=True) as pipe:
                pipe.set(self.key, value)
                pipe.publish(self.key, value)
                pipe.execute()
        except RedisError as e:
            logger.error(f"Failed to write filter flag to Redis: {e}")
            raise MechanismError(
                f"Could not write filter flag: {e}", code="redis_write", exception=e
            ) from e

        logger.debug(f"Redis filter flag '{self.key}' set to {value}")

    def read_filter_flag(self) -> bool:
        """Read the flag currently stored in Redis."""
        return self._get_client().get(self.key) == FLAG_ON

    def close(self) -> None:
        if self._client is not None:
            try:
                self._client.close()
            except RedisError as e:
                logger.warning(f"Error during Redis disconnect: {e}")
            self._client = None

    def __repr__(self) -> str:
        return f"<RedisFilteringMechanism {self.url} key={self.key}>"
