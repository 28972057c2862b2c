"""Streaming mode: MONITOR feed -> parser -> filter -> window -> stats store."""

from __future__ import annotations

import sys
import time
from typing import IO, Iterable, Optional, Union

from src.core.errors import (
    MonitorParseError,
    StatsStoreUnavailableError,
    UnsupportedOperationError,
)
from src.core.logger import get_logger
from src.core.metrics import (
    COMMANDS_FILTERED_TOTAL,
    COMMANDS_RECORDED_TOTAL,
    MONITOR_LINES_TOTAL,
    MONITOR_PARSE_ERRORS_TOTAL,
    RECORD_LATENCY_SECONDS,
    STATS_STORE_ERRORS_TOTAL,
    WINDOW_ROLLOVERS_TOTAL,
)
from src.domain.models import MonitorEvent
from src.infrastructure.redis.repository import CommandStatsRepository
from src.monitor.filter import CommandFilter
from src.monitor.parser import parse_monitor_line
from src.monitor.transactions import WriterTransactionTracker
from src.monitor.windows import WindowManager
from src.services.reporter import Reporter

logger = get_logger("command_stats.stream")

PARSE_ERROR_SKIP = "skip"
PARSE_ERROR_ABORT = "abort"


class StreamDriver:
    """Counts every accepted MONITOR event into the current window.

    Lines are handled strictly one at a time, in arrival order. A stats store
    failure ends the stream; events seen while the store is down are lost.
    """

    def __init__(
        self,
        feed: Iterable[Union[str, bytes]],
        repository: CommandStatsRepository,
        command_filter: CommandFilter,
        window_manager: WindowManager,
        reporter: Optional[Reporter] = None,
        line_out: bool = False,
        on_parse_error: str = PARSE_ERROR_SKIP,
        report_on_rollover: bool = True,
        out: Optional[IO[str]] = None,
        transactions: Optional[WriterTransactionTracker] = None,
    ):
        if on_parse_error not in (PARSE_ERROR_SKIP, PARSE_ERROR_ABORT):
            raise ValueError(f"unknown parse error policy: {on_parse_error}")
        self.feed = feed
        self.repo = repository
        self.filter = command_filter
        self.transactions = transactions or WriterTransactionTracker(
            command_filter.namespace
        )
        self.windows = window_manager
        self.reporter = reporter or Reporter(repository, out)
        self.line_out = line_out
        self.on_parse_error = on_parse_error
        self.report_on_rollover = report_on_rollover
        self.out = out
        self.windows.on_rollover = self._window_closed

    def run(self) -> None:
        """Consume the feed until the connection fails or the process is killed."""
        logger.info(
            "stream_starting",
            extra={
                "window_step": self.windows.window_step,
                "window_keep": self.windows.window_keep,
                "allow": sorted(self.filter.allow),
                "deny": sorted(self.filter.deny),
            },
        )
        for line in self.feed:
            self.process_line(line)

    def stop(self) -> None:
        raise UnsupportedOperationError(
            "a MONITOR stream cannot be interrupted, stop the process instead"
        )

    def process_line(self, line: Union[str, bytes]) -> Optional[int]:
        """Handle one feed line.

        A MULTI is held until its client's next command, so one line can count
        zero, one or several events. Returns the last window counted into.
        """
        MONITOR_LINES_TOTAL.inc()
        try:
            event = parse_monitor_line(line)
        except MonitorParseError as exc:
            MONITOR_PARSE_ERRORS_TOTAL.inc()
            if self.on_parse_error == PARSE_ERROR_ABORT:
                raise
            logger.warning(
                "monitor_parse_error", extra={"reason": exc.reason, "line": exc.line}
            )
            return None
        if event is None:
            return None

        window = None
        for ready in self.transactions.admit(event):
            counted = self._count(ready)
            if counted is not None:
                window = counted
        return window

    def _count(self, event: MonitorEvent) -> Optional[int]:
        reason = self.filter.reason(event)
        if reason is not None:
            COMMANDS_FILTERED_TOTAL.inc()
            logger.debug(
                "command_filtered",
                extra={"command": event.command, "filter_reason": reason},
            )
            return None

        if self.line_out:
            print(event.line, file=self.out or sys.stdout)

        window = self.windows.resolve_window()
        started = time.perf_counter()
        try:
            self.repo.record(window, event.command)
        except StatsStoreUnavailableError:
            STATS_STORE_ERRORS_TOTAL.inc()
            logger.exception(
                "record_failed",
                extra={"window": window, "command": event.command},
            )
            raise
        RECORD_LATENCY_SECONDS.observe(time.perf_counter() - started)
        COMMANDS_RECORDED_TOTAL.inc()
        return window

    def _window_closed(self, window: int) -> None:
        WINDOW_ROLLOVERS_TOTAL.inc()
        logger.info("window_closed", extra={"window": window})
        if self.report_on_rollover:
            self.reporter.print_window(window)
