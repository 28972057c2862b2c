import fakeredis
import pytest
from src.infrastructure.redis.repository import CommandStatsRepository


@pytest.fixture
def fake_redis():
    """In-memory Redis standing in for the stats store."""
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def repo(fake_redis):
    return CommandStatsRepository(fake_redis, window_step=15, window_keep=5)


@pytest.fixture
def monitor_line():
    """Build a MONITOR line the way redis-server prints it."""

    def _build(command="get", *args, client="127.0.0.1:61190", db=0):
        quoted = " ".join(f'"{a}"' for a in (command, *args))
        return f"1461627352.016587 [{db} {client}] {quoted}"

    return _build


class FakeClock:
    def __init__(self, now: float = 0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock(1_700_000_000)
