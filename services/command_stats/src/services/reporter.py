from __future__ import annotations

import sys
from typing import IO, Optional

from shared.constants import RedisKeys
from src.infrastructure.redis.repository import CommandStatsRepository


class Reporter:
    """Prints retained windows as ``COMMAND: count`` lines, busiest first."""

    def __init__(self, repository: CommandStatsRepository, out: Optional[IO[str]] = None):
        self.repo = repository
        self.out = out

    def _write(self, text: str) -> None:
        print(text, file=self.out or sys.stdout)

    def print_window(self, window_start: int) -> bool:
        """Print one window; returns False when it has no entries."""
        rows = self.repo.read_histogram(window_start)
        if not rows:
            return False
        self._write(RedisKeys.window_key(window_start))
        # Stable sort keeps the store's iteration order for equal counts
        for command, count in sorted(rows, key=lambda row: row[1], reverse=True):
            self._write(f"{command}: {count}")
        return True

    def print_all(self) -> int:
        printed = 0
        for window in self.repo.list_windows():
            if self.print_window(window):
                printed += 1
        return printed

    def print_latest(self) -> int:
        windows = self.repo.list_windows()
        if not windows:
            return 0
        return int(self.print_window(windows[-1]))
