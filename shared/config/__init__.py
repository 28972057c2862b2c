"""Shared configuration base classes.

Provides common configuration patterns used across all services to reduce
duplication and ensure consistency.
"""

from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration for all services."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "authorization",
    ]
    app_environment: str = "production"


class BaseRedisConfig(BaseSettings):
    """Connection settings for the two Redis endpoints a service talks to.

    The monitored store and the stats store are configured independently,
    each with its own host, port and database.
    """

    monitor_redis_host: str = "127.0.0.1"
    monitor_redis_port: int = 6379
    monitor_redis_db: int = 0

    stats_redis_host: str = "127.0.0.1"
    stats_redis_port: int = 6379
    stats_redis_db: int = 0

    redis_socket_timeout_seconds: float | None = None
    redis_connect_retries: int = 5


class BaseServiceConfig(BaseLoggingConfig, BaseRedisConfig):
    """Base configuration combining logging and Redis settings.

    Services should inherit from this and add their own specific settings.
    The otel_service_name should be overridden by each service.
    """

    otel_service_name: str = "unknown"  # Should be overridden by service


__all__ = ["BaseLoggingConfig", "BaseRedisConfig", "BaseServiceConfig"]
