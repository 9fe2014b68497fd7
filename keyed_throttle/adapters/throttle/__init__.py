"""Throttler adapters.

Each adapter gates a single zero-argument operation; per-input independence
comes from the combinator creating one instance per distinct input.
"""

from keyed_throttle.adapters.throttle.base import (
    GateDecision,
    Scheduler,
    Throttler,
    TimerHandle,
    thread_timer,
)
from keyed_throttle.adapters.throttle.debounce import Debounce, debouncer, throttler
from keyed_throttle.adapters.throttle.factory import create_throttler
from keyed_throttle.adapters.throttle.fixed_window import FixedWindowThrottle, fixed_window

__all__ = [
    "Debounce",
    "FixedWindowThrottle",
    "GateDecision",
    "Scheduler",
    "Throttler",
    "TimerHandle",
    "create_throttler",
    "debouncer",
    "fixed_window",
    "thread_timer",
    "throttler",
]
