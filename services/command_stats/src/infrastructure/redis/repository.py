from __future__ import annotations

from typing import Iterator, List, Tuple

from redis import Redis
from redis.exceptions import RedisError

from shared.constants import RedisKeys
from src.core.errors import StatsStoreUnavailableError
from src.core.logger import get_logger

logger = get_logger("command_stats.repository")

HistogramRow = Tuple[str, int]


class CommandStatsRepository:
    """Redis-backed store of per-window command histograms.

    Notes:
        - One sorted set per window, member = command, score = count.
        - A plain set indexes the histogram keys of retained windows.
        - Retention is enforced by key expiry (step * keep seconds, refreshed
          on every increment); expired keys are pruned from the index lazily.
        - Writes are submitted as MULTI/EXEC pipelines.
        - Redis failures surface as StatsStoreUnavailableError, never retried.
    """

    def __init__(self, redis: Redis, window_step: int, window_keep: int):
        self.r = redis
        self.window_step = int(window_step)
        self.window_keep = int(window_keep)

    @property
    def window_ttl(self) -> int:
        return self.window_step * self.window_keep

    # Writes
    def record(self, window_start: int, command: str) -> None:
        key = RedisKeys.window_key(window_start)
        try:
            pipe = self.r.pipeline(transaction=True)
            pipe.sadd(RedisKeys.WINDOW_COMMAND_INDEX, key)
            pipe.zincrby(key, 1, command)
            pipe.expire(key, self.window_ttl)
            pipe.execute()
        except RedisError as exc:
            raise StatsStoreUnavailableError(
                f"failed to record {command} in window {window_start}"
            ) from exc

    def delete(self, window_start: int) -> None:
        key = RedisKeys.window_key(window_start)
        try:
            pipe = self.r.pipeline(transaction=True)
            pipe.delete(key)
            pipe.srem(RedisKeys.WINDOW_COMMAND_INDEX, key)
            pipe.execute()
        except RedisError as exc:
            raise StatsStoreUnavailableError(
                f"failed to delete window {window_start}"
            ) from exc

    # Retrieval
    def list_windows(self) -> List[int]:
        """Window starts still retained in the store, oldest first."""
        try:
            keys = sorted(self.r.smembers(RedisKeys.WINDOW_COMMAND_INDEX))
            if not keys:
                return []
            pipe = self.r.pipeline(transaction=False)
            for key in keys:
                pipe.exists(key)
            alive = pipe.execute()
            expired = [key for key, present in zip(keys, alive) if not present]
            if expired:
                self.r.srem(RedisKeys.WINDOW_COMMAND_INDEX, *expired)
        except RedisError as exc:
            raise StatsStoreUnavailableError("failed to list windows") from exc

        if expired:
            logger.debug("pruned_expired_windows", extra={"count": len(expired)})

        windows = []
        for key, present in zip(keys, alive):
            if not present:
                continue
            try:
                windows.append(RedisKeys.window_from_key(self._as_str(key)))
            except ValueError:
                logger.warning("unrecognised_window_key", extra={"key": key})
        return sorted(windows)

    def iter_histogram(self, window_start: int) -> Iterator[HistogramRow]:
        """Yield every (command, count) of a window, following ZSCAN cursors."""
        key = RedisKeys.window_key(window_start)
        cursor = 0
        while True:
            try:
                cursor, rows = self.r.zscan(key, cursor)
            except RedisError as exc:
                raise StatsStoreUnavailableError(
                    f"failed to read window {window_start}"
                ) from exc
            for member, score in rows:
                yield self._as_str(member), int(score)
            if int(cursor) == 0:
                break

    def read_histogram(self, window_start: int) -> List[HistogramRow]:
        return list(self.iter_histogram(window_start))

    @staticmethod
    def _as_str(value) -> str:
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value
