"""Exception types raised by the command stats service."""

from __future__ import annotations


class CommandStatsError(Exception):
    """Base class for all command stats failures."""


class ConfigurationError(CommandStatsError):
    """Invalid or unsupported configuration value."""


class MonitorParseError(CommandStatsError):
    """A monitor feed line could not be split into an event."""

    def __init__(self, line: str, reason: str):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class MonitorUnavailableError(CommandStatsError):
    """The monitored Redis could not be subscribed to or read from."""


class StatsStoreUnavailableError(CommandStatsError):
    """A read or write against the stats Redis failed."""


class UnsupportedOperationError(CommandStatsError):
    """The requested operation is intentionally not provided."""
