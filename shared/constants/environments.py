from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    PRODUCTION = "production"
    STAGING = "staging"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def is_production(cls, env: str) -> bool:
        """Check if environment is production."""
        return env.lower() == cls.PRODUCTION.value

    @classmethod
    def is_development(cls, env: str) -> bool:
        """Check if environment is development"""
        return env.lower() == cls.DEVELOPMENT.value

    @classmethod
    def wants_plain_logs(cls, env: str) -> bool:
        """Interactive environments log human-readable lines instead of JSON."""
        return env.lower() in (cls.DEVELOPMENT.value, cls.TESTING.value)
