from __future__ import annotations

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from shared.utils.retry import retry
from src.core.config import Settings
from src.core.logger import get_logger

logger = get_logger("command_stats.redis")


def create_redis(
    host: str,
    port: int,
    db: int = 0,
    socket_timeout: float | None = None,
    retries: int = 5,
    role: str = "redis",
) -> redis.Redis:
    """Open a Redis client and make sure the server answers before returning."""

    def _connect() -> redis.Redis:
        r = redis.Redis(
            host=host,
            port=port,
            db=db,
            socket_timeout=socket_timeout,
            decode_responses=True,
        )
        r.ping()
        return r

    def _on_retry(attempt: int, exc: BaseException, sleep_for: float):
        logger.warning(
            "redis_connect_retry",
            extra={
                "role": role,
                "host": host,
                "port": port,
                "attempt": attempt,
                "error": str(exc),
                "sleep_for": round(sleep_for, 2),
            },
        )

    r = retry(
        _connect,
        retries=retries,
        base_delay=0.5,
        max_delay=8.0,
        jitter=0.2,
        retry_on=(RedisConnectionError, RedisTimeoutError),
        on_retry=_on_retry,
    )
    logger.info("redis_connected", extra={"role": role, "host": host, "port": port})
    return r


def create_stats_redis(settings: Settings) -> redis.Redis:
    return create_redis(
        settings.stats_redis_host,
        settings.stats_redis_port,
        settings.stats_redis_db,
        socket_timeout=settings.redis_socket_timeout_seconds,
        retries=settings.redis_connect_retries,
        role="stats",
    )


def create_monitor_redis(settings: Settings) -> redis.Redis:
    # The feed blocks until the next command runs, so no read timeout here
    return create_redis(
        settings.monitor_redis_host,
        settings.monitor_redis_port,
        settings.monitor_redis_db,
        socket_timeout=None,
        retries=settings.redis_connect_retries,
        role="monitor",
    )
