import pytest
from src.core.errors import MonitorParseError
from src.monitor.parser import normalize_command, parse_monitor_line, strip_quotes


def test_parse_basic_line():
    event = parse_monitor_line('1461627352.016587 [0 127.0.0.1:61190] "get" "test:food"')
    assert event is not None
    assert event.timestamp == "1461627352.016587"
    assert event.database_index == 0
    assert event.client_address == "127.0.0.1:61190"
    assert event.command == "GET"
    assert event.arguments == ("test:food",)


def test_parse_ack_returns_none():
    assert parse_monitor_line("OK") is None
    assert parse_monitor_line("OK\r\n") is None


def test_parse_command_without_arguments():
    event = parse_monitor_line('1461627352.1 [3 10.0.0.5:4000] "ping"')
    assert event.command == "PING"
    assert event.arguments == ()
    assert event.database_index == 3


def test_parse_keeps_raw_line():
    line = '1461627352.1 [0 127.0.0.1:1] "set" "k" "v"'
    assert parse_monitor_line(line).line == line


def test_parse_accepts_bytes():
    event = parse_monitor_line(b'1461627352.1 [0 127.0.0.1:1] "hget" "h" "f"')
    assert event.command == "HGET"
    assert event.arguments == ("h", "f")


def test_parse_lua_client():
    event = parse_monitor_line('1461627352.1 [0 lua] "incr" "counter"')
    assert event.client_address == "lua"
    assert event.command == "INCR"


@pytest.mark.parametrize(
    "token",
    ['"get"', '"get', 'get"', "get", '"GeT"', "GET"],
)
def test_command_never_keeps_quotes_and_is_uppercased(token):
    event = parse_monitor_line(f"1.0 [0 127.0.0.1:1] {token} \"k\"")
    assert event.command == "GET"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "1461627352.016587",
        "1461627352.016587 [0 127.0.0.1:61190]",
        '1461627352.016587 0 127.0.0.1:61190] "get"',
        '1461627352.016587 [0 127.0.0.1:61190 "get"',
        '1461627352.016587 [x 127.0.0.1:61190] "get"',
    ],
)
def test_malformed_lines_raise_parse_error(line):
    with pytest.raises(MonitorParseError) as excinfo:
        parse_monitor_line(line)
    assert excinfo.value.line == line
    assert excinfo.value.reason


def test_strip_quotes_is_independent_per_side():
    assert strip_quotes('"a"') == "a"
    assert strip_quotes('"a') == "a"
    assert strip_quotes('a"') == "a"
    assert strip_quotes("a") == "a"
    assert strip_quotes('""') == ""
    assert strip_quotes('"') == ""


def test_normalize_command_trims_and_uppercases():
    assert normalize_command(' "flushall" ') == "FLUSHALL"
