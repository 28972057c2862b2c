from __future__ import annotations

import time
from typing import Callable, Optional

RolloverCallback = Callable[[int], None]


class WindowManager:
    """Maps wall-clock time onto contiguous, fixed-size windows.

    Windows are identified by their start in epoch seconds. Once the first
    window is opened, each rollover advances to the scheduled next boundary
    rather than to the current instant, so consecutive windows never overlap
    or leave a gap, and an id older than the last one returned is never
    produced.
    """

    def __init__(
        self,
        window_step: int,
        window_keep: int,
        clock: Callable[[], float] = time.time,
        on_rollover: Optional[RolloverCallback] = None,
    ):
        if window_step <= 0:
            raise ValueError("window_step must be positive")
        if window_keep < 1:
            raise ValueError("window_keep must be at least 1")
        self.window_step = int(window_step)
        self.window_keep = int(window_keep)
        self.clock = clock
        self.on_rollover = on_rollover
        self.current_window: Optional[int] = None
        self.next_window: Optional[int] = None

    @property
    def retention_seconds(self) -> int:
        return self.window_step * self.window_keep

    def resolve_window(self, now: Optional[float] = None) -> int:
        """Return the window an event observed at ``now`` belongs to."""
        if now is None:
            now = self.clock()
        now = int(now)

        previous = self.current_window
        if previous is None:
            window = now
        elif now >= self.next_window:
            window = self.next_window
        else:
            window = previous

        self.current_window = window
        self.next_window = window + self.window_step

        if previous is not None and window != previous and self.on_rollover:
            self.on_rollover(previous)
        return window
