from __future__ import annotations

from src.core.logger import get_logger
from src.infrastructure.redis.repository import CommandStatsRepository

logger = get_logger("command_stats.cleaner")


class Cleaner:
    def __init__(self, repository: CommandStatsRepository):
        self.repo = repository

    def clean_all(self) -> int:
        """Delete every retained window. Safe to repeat on an empty store."""
        windows = self.repo.list_windows()
        for window in windows:
            self.repo.delete(window)
        logger.info("windows_cleaned", extra={"count": len(windows)})
        return len(windows)
