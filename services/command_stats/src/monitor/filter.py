from __future__ import annotations

from typing import Iterable, Optional

from shared.constants import RedisKeys
from src.domain.models import MonitorEvent
from src.monitor.parser import normalize_command

REASON_DENIED = "denied"
REASON_SELF = "self"
REASON_NOT_ALLOWED = "not_allowed"


def parse_command_list(value: Optional[str]) -> frozenset:
    """Split a comma-separated list into normalized command names."""
    if not value:
        return frozenset()
    return frozenset(
        normalize_command(item) for item in value.split(",") if item.strip()
    )


class CommandFilter:
    """Decides whether an observed event should be counted.

    Evaluation order, first match wins: deny-list, self-traffic, allow-list.
    An empty allow-list allows everything.
    """

    def __init__(
        self,
        allow: Iterable[str] = (),
        deny: Iterable[str] = (),
        namespace: str = RedisKeys.COMMAND_STATS_NAMESPACE,
    ):
        self.allow = frozenset(normalize_command(c) for c in allow)
        self.deny = frozenset(normalize_command(c) for c in deny)
        self.namespace = namespace

    @classmethod
    def from_csv(
        cls,
        allow_csv: Optional[str],
        deny_csv: Optional[str],
        namespace: str = RedisKeys.COMMAND_STATS_NAMESPACE,
    ) -> "CommandFilter":
        return cls(parse_command_list(allow_csv), parse_command_list(deny_csv), namespace)

    def is_self_traffic(self, event: MonitorEvent) -> bool:
        return event.first_argument.startswith(self.namespace)

    def reason(self, event: MonitorEvent) -> Optional[str]:
        """Why the event is rejected, or None when it should be counted."""
        if self.deny and event.command in self.deny:
            return REASON_DENIED
        if self.is_self_traffic(event):
            return REASON_SELF
        if self.allow and event.command not in self.allow:
            return REASON_NOT_ALLOWED
        return None

    def is_allowed(self, event: MonitorEvent) -> bool:
        return self.reason(event) is None
