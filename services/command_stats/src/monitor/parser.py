from __future__ import annotations

from typing import Optional, Union

from src.core.errors import MonitorParseError
from src.domain.models import MonitorEvent

MONITOR_ACK = "OK"
QUOTE = '"'


def strip_quotes(token: str) -> str:
    """Drop one leading and one trailing double quote, independently."""
    if token.startswith(QUOTE):
        token = token[1:]
    if token.endswith(QUOTE):
        token = token[:-1]
    return token


def normalize_command(token: str) -> str:
    return strip_quotes(token.strip()).upper()


def parse_monitor_line(line: Union[str, bytes]) -> Optional[MonitorEvent]:
    """Translate a raw MONITOR line into a MonitorEvent, or None for the ack.

    Lines have the shape::

        1461627352.016587 [0 127.0.0.1:61190] "get" "test:food"

    Raises MonitorParseError when the positional fields cannot be extracted.
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    line = line.rstrip("\r\n")
    if line == MONITOR_ACK:
        return None

    parts = line.split()
    if len(parts) < 4:
        raise MonitorParseError(line, "too few tokens")

    timestamp, db_token, client_token = parts[0], parts[1], parts[2]
    if not db_token.startswith("["):
        raise MonitorParseError(line, "missing '[' before database index")
    if not client_token.endswith("]"):
        raise MonitorParseError(line, "missing ']' after client address")
    try:
        database_index = int(db_token[1:])
    except ValueError:
        raise MonitorParseError(line, "database index is not an integer") from None

    return MonitorEvent(
        line=line,
        timestamp=timestamp,
        database_index=database_index,
        client_address=client_token[:-1],
        command=normalize_command(parts[3]),
        arguments=tuple(strip_quotes(arg) for arg in parts[4:]),
    )
