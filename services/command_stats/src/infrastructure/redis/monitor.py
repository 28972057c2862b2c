"""Raw line source over the Redis MONITOR command."""

from __future__ import annotations

from typing import Iterator

from redis import Redis
from redis.exceptions import RedisError

from src.core.errors import MonitorUnavailableError
from src.core.logger import get_logger

logger = get_logger("command_stats.monitor")


class MonitorFeed:
    """Iterates the raw lines of a MONITOR subscription, one per command.

    redis-py's Monitor consumes the ``OK`` acknowledgement on entry; every
    following response is handed out unparsed so the caller owns parsing.
    The iteration blocks until the next command executes and never ends on
    its own.
    """

    def __init__(self, redis: Redis):
        self.r = redis

    def __iter__(self) -> Iterator[str]:
        try:
            with self.r.monitor() as monitor:
                logger.info("monitor_subscribed")
                while True:
                    response = monitor.connection.read_response()
                    if isinstance(response, bytes):
                        response = response.decode("utf-8", errors="replace")
                    yield response
        except RedisError as exc:
            raise MonitorUnavailableError("monitor feed failed") from exc
