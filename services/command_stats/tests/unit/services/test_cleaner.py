from src.services.cleaner import Cleaner

from shared.constants import RedisKeys


def test_clean_all_removes_every_window(repo, fake_redis):
    for window in (1000, 1015, 1030):
        repo.record(window, "GET")

    assert Cleaner(repo).clean_all() == 3

    assert repo.list_windows() == []
    assert not fake_redis.exists(RedisKeys.WINDOW_COMMAND_INDEX)
    assert not fake_redis.keys("stats:redis_commands:*")


def test_clean_all_is_idempotent(repo):
    repo.record(1000, "GET")
    cleaner = Cleaner(repo)
    assert cleaner.clean_all() == 1
    assert cleaner.clean_all() == 0
    assert repo.list_windows() == []


def test_clean_all_on_empty_store(repo):
    assert Cleaner(repo).clean_all() == 0


def test_clean_leaves_unrelated_keys(repo, fake_redis):
    fake_redis.set("user:1", "x")
    repo.record(1000, "GET")
    Cleaner(repo).clean_all()
    assert fake_redis.get("user:1") == "x"
