"""Recognises the MULTI/EXEC envelope around the stats writer's own batches.

``MULTI`` and ``EXEC`` carry no key, so they cannot be matched against the
stats namespace directly. A ``MULTI`` is held back until the same client's
next command shows whether the transaction touches namespaced keys:

* namespaced: the envelope belongs to the writer and is dropped, along with
  the matching ``EXEC`` or ``DISCARD``;
* anything else: the held events are released in arrival order.

Both orders redis-server uses on the feed are handled. Older servers print
``EXEC`` before the queued commands, newer ones after them. State is kept
per client only while a transaction is undecided or open, and is capped.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import List

from shared.constants import RedisKeys
from src.domain.models import MonitorEvent

MULTI = "MULTI"
EXEC = "EXEC"
DISCARD = "DISCARD"

DEFAULT_MAX_TRACKED = 1024


class WriterTransactionTracker:
    def __init__(
        self,
        namespace: str = RedisKeys.COMMAND_STATS_NAMESPACE,
        max_tracked: int = DEFAULT_MAX_TRACKED,
    ):
        if max_tracked < 1:
            raise ValueError("max_tracked must be at least 1")
        self.namespace = namespace
        self.max_tracked = max_tracked
        # client address -> held MULTI (and EXEC, for the older ordering)
        self._held: "OrderedDict[str, List[MonitorEvent]]" = OrderedDict()
        # writer clients between their first namespaced command and EXEC
        self._open: "OrderedDict[str, None]" = OrderedDict()

    @property
    def tracked(self) -> int:
        return len(self._held) + len(self._open)

    def admit(self, event: MonitorEvent) -> List[MonitorEvent]:
        """Events ready for filtering after ``event`` arrived, in arrival order."""
        client = event.client_address
        namespaced = event.first_argument.startswith(self.namespace)

        if client in self._open:
            if event.command in (EXEC, DISCARD):
                del self._open[client]
                return []
            if not namespaced:
                del self._open[client]

        held = self._held.pop(client, None)
        if held is not None:
            if namespaced:
                if len(held) == 1:
                    self._track(self._open, client, None)
                return [event]
            if event.command == EXEC and len(held) == 1:
                held.append(event)
                return self._track(self._held, client, held)
            released = held
        else:
            released = []

        if event.command == MULTI:
            return released + self._track(self._held, client, [event])
        return released + [event]

    def _track(self, table: OrderedDict, client: str, value) -> List[MonitorEvent]:
        """Store ``value`` for ``client``; returns held events evicted over the cap."""
        table[client] = value
        table.move_to_end(client)
        evicted: List[MonitorEvent] = []
        while len(table) > self.max_tracked:
            _, dropped = table.popitem(last=False)
            if dropped:
                evicted.extend(dropped)
        return evicted
