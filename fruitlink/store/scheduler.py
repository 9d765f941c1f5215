"""
Delayed callbacks with cancellation.

After a chat reply creates an entity, the session navigates to it a short
moment later. Rather than fire-and-forget timers, navigation is queued here
and executed by whoever drives the session (the dashboard on each rerun, the
CLI before exiting) via ``run_due()`` or ``drain()``. ``cancel_all()`` on
teardown guarantees nothing fires against a session that is gone.

The scheduler never sleeps or spawns threads; time comes from the injected
clock.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

from fruitlink.utils.time_utils import Clock, monotonic_clock

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledTask:
    """Handle for a queued callback. ``cancel()`` is idempotent."""

    due_at: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    done: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class DelayedTaskScheduler:
    """Min-heap of callbacks keyed by due time.

    Args:
        clock: Time source in seconds. Defaults to ``time.monotonic``.
    """

    def __init__(self, clock: Clock = monotonic_clock) -> None:
        self._clock = clock
        self._heap: list[ScheduledTask] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        """Number of queued, not-cancelled tasks."""
        return sum(1 for t in self._heap if not t.cancelled)

    def schedule(
        self,
        delay_seconds: float,
        callback: Callable[[], None],
        label: str = "",
    ) -> ScheduledTask:
        """Queue ``callback`` to run ``delay_seconds`` from now."""
        task = ScheduledTask(
            due_at=self._clock() + max(delay_seconds, 0.0),
            seq=next(self._seq),
            callback=callback,
            label=label,
        )
        heapq.heappush(self._heap, task)
        logger.debug("Scheduled %s in %.2fs", label or "task", delay_seconds)
        return task

    def run_due(self) -> int:
        """Run every task whose due time has passed; return how many ran."""
        now = self._clock()
        ran = 0
        while self._heap and self._heap[0].due_at <= now:
            ran += self._run(heapq.heappop(self._heap))
        return ran

    def drain(self) -> int:
        """Run every pending task immediately, in due order."""
        ran = 0
        while self._heap:
            ran += self._run(heapq.heappop(self._heap))
        return ran

    def cancel_all(self) -> int:
        """Cancel and discard every pending task; return how many were dropped."""
        dropped = self.pending
        for task in self._heap:
            task.cancel()
        self._heap.clear()
        if dropped:
            logger.debug("Cancelled %d pending task(s)", dropped)
        return dropped

    def _run(self, task: ScheduledTask) -> int:
        if task.cancelled:
            return 0
        task.done = True
        task.callback()
        return 1
