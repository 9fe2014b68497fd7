"""Throttler interfaces.

A throttler turns a zero-argument operation into a zero-argument operation
whose invocation is time-gated. Suppressed calls return the throttler's
``absent`` value, which callers pick when constructing the throttler.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeVar

R = TypeVar("R")


class Throttler(Protocol):
    """Wraps ``op`` in an independent, time-gated operation."""

    def __call__(self, op: Callable[[], Any], /) -> Callable[[], Any]:
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Run ``callback`` after ``delay`` seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass(frozen=True)
class GateDecision:
    """Outcome of a fixed-window gate check.

    Attributes:
        allowed: Whether the operation was invoked.
        limit: Max invocations per window.
        remaining: Remaining invocations in the current window.
        reset_at: Clock time when the current window resets.
        retry_after_seconds: Wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after_seconds: float | None
