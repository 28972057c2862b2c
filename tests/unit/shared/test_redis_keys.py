import pytest

from shared.constants import Environment, RedisKeys


def test_window_key_layout():
    assert RedisKeys.window_key(1700000000) == "stats:redis_commands:1700000000"
    assert RedisKeys.WINDOW_COMMAND_INDEX == "stats:redis_commands:keys"


def test_window_from_key_round_trip():
    assert RedisKeys.window_from_key(RedisKeys.window_key(1234)) == 1234


def test_window_from_key_rejects_non_window_keys():
    with pytest.raises(ValueError):
        RedisKeys.window_from_key(RedisKeys.WINDOW_COMMAND_INDEX)



@pytest.mark.parametrize(
    "env,plain",
    [("development", True), ("Testing", True), ("production", False), ("staging", False)],
)
def test_environment_log_style(env, plain):
    assert Environment.wants_plain_logs(env) is plain
