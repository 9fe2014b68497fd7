"""Fixed-window throttle for zero-argument operations.

Each instance keeps a single window state: the combinator already gives every
distinct input its own instance, so there is no key to track here.

Notes:
- Per-process only.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic

from keyed_throttle.adapters.throttle.base import GateDecision, R, Throttler

logger = logging.getLogger(__name__)


@dataclass
class _WindowState:
    window_start: float
    count: int


class FixedWindowThrottle(Generic[R]):
    """Invoke ``op`` at most ``limit`` times per fixed window.

    Calls over budget are dropped, never deferred, and return ``absent``.
    """

    def __init__(
        self,
        op: Callable[[], R],
        *,
        limit: int,
        window_seconds: float,
        absent: Any = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the fixed-window throttle.

        Args:
            op: Operation to gate.
            limit: Maximum number of invocations per window.
            window_seconds: Size of the fixed window in seconds.
            absent: Returned by blocked calls.
            clock: Time source function returning seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._op = op
        self._limit = limit
        self._window_seconds = window_seconds
        self._absent = absent
        self._clock = clock
        self._lock = threading.RLock()
        self._state: _WindowState | None = None
        self.last_decision: GateDecision | None = None

    def _get_window_bounds(self, now: float) -> tuple[float, float]:
        """Compute fixed-window boundaries for a given timestamp.

        Returns:
            Tuple of (window_start, reset_at).
        """
        window_start = math.floor(now / self._window_seconds) * self._window_seconds
        return window_start, window_start + self._window_seconds

    def _get_or_reset_state(self, window_start: float) -> _WindowState:
        state = self._state
        if state is None or state.window_start != window_start:
            state = _WindowState(window_start=window_start, count=0)
            self._state = state
        return state

    def consume(self) -> GateDecision:
        """Consume one unit of the window budget without invoking ``op``.

        Returns:
            GateDecision with allowance decision and metadata.
        """
        now = self._clock()
        window_start, reset_at = self._get_window_bounds(now)

        with self._lock:
            state = self._get_or_reset_state(window_start)

            if state.count < self._limit:
                state.count += 1
                decision = GateDecision(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - state.count,
                    reset_at=reset_at,
                    retry_after_seconds=None,
                )
            else:
                decision = GateDecision(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=reset_at,
                    retry_after_seconds=max(0.0, reset_at - now),
                )
            self.last_decision = decision
            return decision

    def __call__(self) -> R | Any:
        decision = self.consume()
        if decision.allowed:
            return self._op()

        logger.debug(
            "fixed_window.blocked",
            extra={
                "limit": decision.limit,
                "window_s": self._window_seconds,
                "retry_after_s": decision.retry_after_seconds,
            },
        )
        return self._absent


def fixed_window(
    *,
    limit: int,
    window_seconds: float,
    absent: Any = None,
    clock: Callable[[], float] = time.time,
) -> Throttler:
    """Build a throttler factory producing one :class:`FixedWindowThrottle` per operation."""
    if limit < 1:
        raise ValueError("limit must be >= 1")
    if window_seconds <= 0:
        raise ValueError("window_seconds must be > 0")

    def _fixed_window(op: Callable[[], Any]) -> FixedWindowThrottle[Any]:
        return FixedWindowThrottle(
            op,
            limit=limit,
            window_seconds=window_seconds,
            absent=absent,
            clock=clock,
        )

    return _fixed_window
