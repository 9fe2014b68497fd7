"""Debounce and fixed-rate throttle for zero-argument operations.

Semantics follow the usual leading/trailing-edge debounce:

- A call starts (or extends) a quiet period of ``wait`` seconds.
- ``leading`` invokes on the first call of a burst.
- ``trailing`` invokes once the calls stop for ``wait`` seconds, provided a
  call arrived since the last invocation.
- ``max_wait`` forces an invocation when a burst lasts that long, which is
  how :func:`throttle` gets a fixed rate out of a debounce.

Trailing invocations run on the scheduler's thread. A failure there is
logged and re-raised in that thread; it never reaches the original caller.

Timing state is guarded by a per-instance lock. The operation itself runs
after the lock is released, so a slow operation never blocks other callers,
``pending()`` or ``cancel()``.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Generic

from keyed_throttle.adapters.throttle.base import (
    R,
    Scheduler,
    Throttler,
    TimerHandle,
    thread_timer,
)

logger = logging.getLogger(__name__)


class Debounce(Generic[R]):
    """Debounced zero-argument operation.

    Args:
        op: Operation to gate.
        wait: Quiet period in seconds.
        leading: Invoke on the leading edge.
        trailing: Invoke on the trailing edge.
        max_wait: Maximum seconds a pending call may be delayed.
        absent: Returned by calls that do not invoke ``op``.
        clock: Monotonic time source in seconds.
        scheduler: Callable ``(delay, callback) -> handle`` used for timers.

    Raises:
        ValueError: If wait or max_wait are invalid.
    """

    def __init__(
        self,
        op: Callable[[], R],
        wait: float,
        *,
        leading: bool = False,
        trailing: bool = True,
        max_wait: float | None = None,
        absent: Any = None,
        clock: Callable[[], float] = time.monotonic,
        scheduler: Scheduler = thread_timer,
    ) -> None:
        if wait < 0:
            raise ValueError("wait must be >= 0")
        if max_wait is not None and max_wait < wait:
            raise ValueError("max_wait must be >= wait")

        self._op = op
        self._wait = wait
        self._leading = leading
        self._trailing = trailing
        self._max_wait = max_wait
        self._absent = absent
        self._clock = clock
        self._scheduler = scheduler
        self._lock = threading.RLock()

        self._timer: TimerHandle | None = None
        self._generation = 0
        self._pending = False
        self._last_call_time: float | None = None
        self._last_invoke_time = 0.0

    def __call__(self) -> R | Any:
        with self._lock:
            now = self._clock()
            is_invoking = self._should_invoke(now)
            self._pending = True
            self._last_call_time = now

            invoke = False
            if is_invoking:
                if self._timer is None:
                    invoke = self._leading_edge(now)
                elif self._max_wait is not None:
                    # Burst outlasted max_wait: invoke now and restart the timer
                    self._cancel_timer()
                    self._start_timer(self._wait)
                    self._mark_invoked(now)
                    invoke = True

            if self._timer is None:
                self._start_timer(self._wait)

            if not invoke:
                logger.debug("debounce.suppressed", extra={"wait_s": self._wait})
                return self._absent

        return self._op()

    def pending(self) -> bool:
        """Whether a timer is running for the current burst."""
        with self._lock:
            return self._timer is not None

    def cancel(self) -> None:
        """Drop any pending trailing invocation and reset timing state."""
        with self._lock:
            self._cancel_timer()
            self._pending = False
            self._last_call_time = None
            self._last_invoke_time = 0.0

    def flush(self) -> R | Any:
        """Run a pending trailing invocation immediately.

        Returns:
            The operation's result, or ``absent`` if nothing was pending.
        """
        with self._lock:
            if self._timer is None:
                return self._absent
            self._cancel_timer()
            if not self._trailing_edge(self._clock()):
                return self._absent

        return self._op()

    def _should_invoke(self, now: float) -> bool:
        if self._last_call_time is None:
            return True
        since_last_call = now - self._last_call_time
        if since_last_call >= self._wait or since_last_call < 0:
            return True
        return self._max_wait is not None and now - self._last_invoke_time >= self._max_wait

    def _remaining_wait(self, now: float, last_call_time: float) -> float:
        remaining = self._wait - (now - last_call_time)
        if self._max_wait is not None:
            remaining = min(remaining, self._max_wait - (now - self._last_invoke_time))
        return max(0.0, remaining)

    def _leading_edge(self, now: float) -> bool:
        self._last_invoke_time = now
        self._start_timer(self._wait)
        if self._leading:
            self._mark_invoked(now)
            return True
        return False

    def _trailing_edge(self, now: float) -> bool:
        self._timer = None
        if self._trailing and self._pending:
            self._mark_invoked(now)
            return True
        self._pending = False
        return False

    def _timer_expired(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                # stale timer, fired after being cancelled or replaced
                return
            now = self._clock()
            last_call_time = self._last_call_time
            if last_call_time is not None and not self._should_invoke(now):
                self._start_timer(self._remaining_wait(now, last_call_time))
                return
            if not self._trailing_edge(now):
                return

        try:
            self._op()
        except Exception:
            logger.exception("debounce.trailing_failed")
            raise

    def _mark_invoked(self, now: float) -> None:
        self._pending = False
        self._last_invoke_time = now
        logger.debug("debounce.invoke", extra={"wait_s": self._wait})

    def _start_timer(self, delay: float) -> None:
        self._generation += 1
        generation = self._generation
        self._timer = self._scheduler(delay, lambda: self._timer_expired(generation))

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


def debouncer(
    wait: float,
    *,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    absent: Any = None,
    clock: Callable[[], float] = time.monotonic,
    scheduler: Scheduler = thread_timer,
) -> Throttler:
    """Build a throttler factory producing one :class:`Debounce` per operation."""
    if wait < 0:
        raise ValueError("wait must be >= 0")

    def _debounce(op: Callable[[], Any]) -> Debounce[Any]:
        return Debounce(
            op,
            wait,
            leading=leading,
            trailing=trailing,
            max_wait=max_wait,
            absent=absent,
            clock=clock,
            scheduler=scheduler,
        )

    return _debounce


def throttler(
    wait: float,
    *,
    leading: bool = True,
    trailing: bool = True,
    absent: Any = None,
    clock: Callable[[], float] = time.monotonic,
    scheduler: Scheduler = thread_timer,
) -> Throttler:
    """Build a fixed-rate throttler factory: at most one invocation per ``wait``."""
    return debouncer(
        wait,
        leading=leading,
        trailing=trailing,
        max_wait=wait,
        absent=absent,
        clock=clock,
        scheduler=scheduler,
    )
