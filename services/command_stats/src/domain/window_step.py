"""Parsing of human-friendly window durations such as ``15s`` or ``1hr``."""

from __future__ import annotations

import re

_STEP_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z]+)\s*$")

UNIT_SECONDS = {
    "s": 1,
    "sec": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
}


def parse_window_step(value: str) -> int:
    """Convert a duration string into whole seconds.

    Raises ValueError for unknown units, missing units and zero durations.
    """
    match = _STEP_RE.match(value or "")
    if not match:
        raise ValueError(
            f"invalid window stepping {value!r}, specify e.g. '60s', '15m', '1h'"
        )
    amount, unit = int(match.group(1)), match.group(2).lower()
    if unit not in UNIT_SECONDS:
        raise ValueError(f"invalid window stepping unit {unit!r} in {value!r}")
    seconds = amount * UNIT_SECONDS[unit]
    if seconds <= 0:
        raise ValueError(f"window stepping must be positive, got {value!r}")
    return seconds
