"""Tests for fruitlink.store.scheduler.DelayedTaskScheduler."""

from __future__ import annotations

import pytest

from fruitlink.store.scheduler import DelayedTaskScheduler


@pytest.fixture
def scheduler(clock) -> DelayedTaskScheduler:
    return DelayedTaskScheduler(clock=clock)


class TestDelayedTaskScheduler:
    def test_not_run_before_due(self, scheduler, clock):
        ran = []
        scheduler.schedule(1.0, lambda: ran.append("x"))
        clock.advance(0.5)
        assert scheduler.run_due() == 0
        assert ran == []
        assert scheduler.pending == 1

    def test_runs_when_due(self, scheduler, clock):
        ran = []
        task = scheduler.schedule(1.0, lambda: ran.append("x"))
        clock.advance(1.0)
        assert scheduler.run_due() == 1
        assert ran == ["x"]
        assert task.done
        assert scheduler.pending == 0

    def test_due_order(self, scheduler, clock):
        ran = []
        scheduler.schedule(2.0, lambda: ran.append("late"))
        scheduler.schedule(1.0, lambda: ran.append("early"))
        scheduler.schedule(1.0, lambda: ran.append("early-2"))
        clock.advance(5)
        scheduler.run_due()
        assert ran == ["early", "early-2", "late"]

    def test_cancelled_task_does_not_run(self, scheduler, clock):
        ran = []
        task = scheduler.schedule(1.0, lambda: ran.append("x"))
        task.cancel()
        clock.advance(2)
        assert scheduler.run_due() == 0
        assert ran == []

    def test_cancel_all(self, scheduler, clock):
        ran = []
        scheduler.schedule(1.0, lambda: ran.append("a"))
        scheduler.schedule(3.0, lambda: ran.append("b"))
        assert scheduler.cancel_all() == 2
        clock.advance(10)
        assert scheduler.run_due() == 0
        assert ran == []

    def test_drain_ignores_time(self, scheduler):
        ran = []
        scheduler.schedule(60, lambda: ran.append("a"))
        assert scheduler.drain() == 1
        assert ran == ["a"]
