class RedisKeys:
    """Centralised Redis key pattern definitions"""

    # Every key written by the stats writer lives under this namespace
    COMMAND_STATS_NAMESPACE = "stats:redis_commands:"

    # Window data patterns
    WINDOW_COMMAND_ZSET = COMMAND_STATS_NAMESPACE + "{window_start}"

    # Index patterns
    WINDOW_COMMAND_INDEX = COMMAND_STATS_NAMESPACE + "keys"

    @classmethod
    def window_key(cls, window_start: int) -> str:
        """Generate the histogram key for a window start."""
        return cls.WINDOW_COMMAND_ZSET.format(window_start=window_start)

    @classmethod
    def window_from_key(cls, key: str) -> int:
        """Recover the window start from a histogram key.

        Raises ValueError when the key does not end in an integer segment.
        """
        return int(key.rsplit(":", 1)[-1])
