"""Unified metrics helpers.

Provides thin wrappers around prometheus_client primitives with (optional)
service name prefixing and basic naming validation. Keeps registry default so
the exporter can be started externally.
"""

from __future__ import annotations

import re

from prometheus_client import Counter, Histogram, start_http_server

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _validate(name: str) -> str:
    if not _NAME_RE.match(name):  # pragma: no cover - simple guard
        raise ValueError(
            f"Invalid metric name '{name}'. Use snake_case alphanumerics/underscores."
        )
    return name


def _prefix(name: str, service: str | None) -> str:
    if service and not name.startswith(service + "_"):
        return f"{service}_{name}"
    return name


def get_counter(name: str, documentation: str, service: str | None = None) -> Counter:
    return Counter(_validate(_prefix(name, service)), documentation)


def get_histogram(
    name: str,
    documentation: str,
    service: str | None = None,
    buckets: list[float] | None = None,
) -> Histogram:
    full_name = _validate(_prefix(name, service))
    if buckets is None:
        return Histogram(full_name, documentation)
    return Histogram(full_name, documentation, buckets=buckets)


def start_exporter(port: int) -> bool:
    """Expose the default registry over HTTP; a port of 0 disables it."""
    if port <= 0:
        return False
    start_http_server(port)
    return True


__all__ = [
    "get_counter",
    "get_histogram",
    "start_exporter",
]
