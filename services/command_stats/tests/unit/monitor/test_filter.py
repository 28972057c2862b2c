from src.monitor.filter import (
    REASON_DENIED,
    REASON_NOT_ALLOWED,
    REASON_SELF,
    CommandFilter,
    parse_command_list,
)
from src.monitor.parser import parse_monitor_line


def _event(command, *args, client="127.0.0.1:5000"):
    quoted = " ".join(f'"{a}"' for a in (command, *args))
    return parse_monitor_line(f"1.0 [0 {client}] {quoted}")


def test_parse_command_list_normalizes_and_skips_blanks():
    assert parse_command_list("get, set,,\"del\" ") == frozenset({"GET", "SET", "DEL"})
    assert parse_command_list("") == frozenset()
    assert parse_command_list(None) == frozenset()


def test_deny_list_rejects_case_insensitively():
    f = CommandFilter(deny=["FLUSHALL"])
    assert not f.is_allowed(_event("flushall"))
    assert f.reason(_event("flushall")) == REASON_DENIED
    assert f.is_allowed(_event("get", "k"))


def test_allow_list_rejects_other_commands():
    f = CommandFilter(allow=["GET", "SET"])
    assert f.is_allowed(_event("get", "k"))
    assert f.is_allowed(_event("set", "k", "v"))
    assert f.reason(_event("del", "k")) == REASON_NOT_ALLOWED


def test_empty_lists_allow_everything():
    f = CommandFilter()
    for command in ("get", "set", "flushall", "monitor"):
        assert f.is_allowed(_event(command))


def test_self_traffic_rejected_regardless_of_lists():
    f = CommandFilter(allow=["ZINCRBY", "SADD"])
    assert f.reason(_event("zincrby", "stats:redis_commands:1700000000", "1", "GET")) == REASON_SELF
    assert f.reason(_event("sadd", "stats:redis_commands:keys", "x")) == REASON_SELF


def test_deny_wins_over_self_traffic():
    f = CommandFilter(deny=["EXPIRE"])
    assert f.reason(_event("expire", "stats:redis_commands:1", "75")) == REASON_DENIED


def test_only_first_argument_marks_self_traffic():
    f = CommandFilter()
    assert f.is_allowed(_event("mget", "user:1", "stats:redis_commands:1"))


def test_filter_keeps_no_per_client_state():
    f = CommandFilter()
    reader = "127.0.0.1:51000"
    assert not f.is_allowed(_event("smembers", "stats:redis_commands:keys", client=reader))
    # An application later reusing the same ephemeral port is counted normally
    assert f.is_allowed(_event("multi", client=reader))
    assert f.is_allowed(_event("exec", client=reader))


def test_from_csv_builds_lists():
    f = CommandFilter.from_csv("get,set", "flushall")
    assert f.allow == frozenset({"GET", "SET"})
    assert f.deny == frozenset({"FLUSHALL"})


def test_custom_namespace():
    f = CommandFilter(namespace="mystats:")
    assert not f.is_allowed(_event("incr", "mystats:x"))
    assert f.is_allowed(_event("incr", "stats:redis_commands:x"))
