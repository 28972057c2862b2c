"""Shared utilities and components for all services."""

from .config import BaseLoggingConfig, BaseRedisConfig, BaseServiceConfig
from .constants import Environment, RedisKeys

__all__ = [
    "Environment",
    "RedisKeys",
    "BaseServiceConfig",
    "BaseLoggingConfig",
    "BaseRedisConfig",
]
