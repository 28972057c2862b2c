from pydantic import field_validator

from shared.config import BaseServiceConfig
from src.domain.window_step import parse_window_step

MODES = {
    "start": "start",
    "s": "start",
    "print": "print",
    "p": "print",
    "print-latest": "print-latest",
    "latest": "print-latest",
    "l": "print-latest",
    "clean": "clean",
    "c": "clean",
}


class Settings(BaseServiceConfig):
    # Mode / dispatch
    command_stats_mode: str = "start"

    # Filtering (comma-separated command names)
    command_stats_allow_list: str = ""
    command_stats_deny_list: str = ""

    # Windows / retention
    command_stats_window_step: str = "1h"
    command_stats_window_keep: int = 5

    # Stream behaviour
    command_stats_line_out: bool = False
    command_stats_on_parse_error: str = "skip"  # skip|abort
    command_stats_report_on_rollover: bool = True

    # Metrics exporter, 0 disables
    command_stats_metrics_port: int = 0

    otel_service_name: str = "command_stats"

    @field_validator("command_stats_window_step")
    @classmethod
    def _check_window_step(cls, value: str) -> str:
        parse_window_step(value)
        return value

    @field_validator("command_stats_window_keep")
    @classmethod
    def _check_window_keep(cls, value: int) -> int:
        if value < 1:
            raise ValueError("window keep must be at least 1")
        return value

    @field_validator("command_stats_on_parse_error")
    @classmethod
    def _check_parse_policy(cls, value: str) -> str:
        value = value.lower()
        if value not in ("skip", "abort"):
            raise ValueError("parse error policy must be 'skip' or 'abort'")
        return value

    @property
    def window_step_seconds(self) -> int:
        return parse_window_step(self.command_stats_window_step)


settings = Settings()
