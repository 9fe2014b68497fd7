"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the environment so settings never pick up a developer .env file.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["KEYED_THROTTLE_ENV"] = "testing"

from typing import Callable

import pytest


class FakeTimer:
    """Handle returned by FakeScheduler; mirrors threading.Timer.cancel()."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic clock plus timer queue for debounce tests.

    ``advance`` moves time forward and fires due timers in order, including
    timers scheduled by callbacks while advancing.
    """

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start
        self.timers: list[FakeTimer] = []

    def clock(self) -> float:
        return self.now

    def schedule(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.active() if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = max(self.now, timer.due)
            timer.callback()
        self.now = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
