"""Entrypoint: dispatches to streaming, printing or cleaning.

The mode comes from ``COMMAND_STATS_MODE`` or the first command-line
argument::

    COMMAND_STATS_WINDOW_STEP=15s python -m src.main start
    python -m src.main print
    python -m src.main clean
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from redis.exceptions import RedisError

from shared.metrics import start_exporter
from src.core.config import MODES, Settings, settings
from src.core.errors import CommandStatsError, ConfigurationError
from src.core.logger import configure_logging, get_logger
from src.infrastructure.redis.client import create_monitor_redis, create_stats_redis
from src.infrastructure.redis.monitor import MonitorFeed
from src.infrastructure.redis.repository import CommandStatsRepository
from src.monitor.filter import CommandFilter
from src.monitor.windows import WindowManager
from src.services.cleaner import Cleaner
from src.services.reporter import Reporter
from src.services.stream import StreamDriver

logger = get_logger("command_stats.main")


def resolve_mode(value: str) -> str:
    mode = MODES.get(value.strip().lower())
    if mode is None:
        raise ConfigurationError(
            f"unknown mode {value!r}, expected one of {sorted(set(MODES.values()))}"
        )
    return mode


def build_repository(config: Settings) -> CommandStatsRepository:
    return CommandStatsRepository(
        create_stats_redis(config),
        config.window_step_seconds,
        config.command_stats_window_keep,
    )


def build_stream(config: Settings, repo: CommandStatsRepository) -> StreamDriver:
    return StreamDriver(
        feed=MonitorFeed(create_monitor_redis(config)),
        repository=repo,
        command_filter=CommandFilter.from_csv(
            config.command_stats_allow_list, config.command_stats_deny_list
        ),
        window_manager=WindowManager(
            config.window_step_seconds, config.command_stats_window_keep
        ),
        line_out=config.command_stats_line_out,
        on_parse_error=config.command_stats_on_parse_error,
        report_on_rollover=config.command_stats_report_on_rollover,
    )


def run(mode: str, config: Settings) -> None:
    repo = build_repository(config)
    if mode == "print":
        Reporter(repo).print_all()
    elif mode == "print-latest":
        Reporter(repo).print_latest()
    elif mode == "clean":
        Cleaner(repo).clean_all()
    else:
        if start_exporter(config.command_stats_metrics_port):
            logger.info(
                "metrics_listening", extra={"port": config.command_stats_metrics_port}
            )
        logger.info("windows_retained", extra={"count": len(repo.list_windows())})
        build_stream(config, repo).run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    argv = sys.argv[1:] if argv is None else argv
    try:
        mode = resolve_mode(argv[0] if argv else settings.command_stats_mode)
        logger.info("command_stats_starting", extra={"mode": mode})
        run(mode, settings)
    except KeyboardInterrupt:
        logger.info("keyboard_interrupt_shutdown")
        return 130
    except (CommandStatsError, RedisError):
        logger.exception("fatal_error_main")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
