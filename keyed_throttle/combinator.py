"""Input-sensitive throttling.

Throttling a function normally gates every call to it, whatever the
arguments. :func:`make_input_sensitive_throttle` gates calls per input
instead: each distinct input (under the memoizer's key policy) gets its own
throttle instance, created lazily on first use and reused afterwards.

Example: debounce clicks per message, so clicking message A and then message
B right after lets both through::

    def click_message(message_id: str) -> bool:
        ...

    debounced_click = make_input_sensitive_throttle(
        click_message,
        memoizer=memoizer(key=str_join_key),
        throttler=debouncer(0.2, leading=True, trailing=False),
    )

Argument capture contract:
    The zero-argument operation handed to the throttler closes over the
    arguments of the *first* call seen for a key. Later calls that map to the
    same key reuse that operation, so their own arguments are discarded and
    the target only ever receives the first-seen values. With a key resolver
    that ignores some arguments, those arguments are frozen at first use.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, ParamSpec, TypeVar

from keyed_throttle.adapters.memoize import KeyResolver, Memoizer, create_memoizer, memoizer
from keyed_throttle.adapters.throttle import Scheduler, Throttler, create_throttler, debouncer
from keyed_throttle.adapters.throttle.base import thread_timer

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def make_input_sensitive_throttle(
    func: Callable[P, R],
    *,
    memoizer: Memoizer,
    throttler: Throttler,
) -> Callable[P, R | Any]:
    """Throttle ``func`` independently for each distinct input.

    The combinator adds no validation, locking, or error handling of its own:
    collaborator misuse surfaces as ordinary call errors, and a failure of
    ``func`` propagates to whoever triggers the gated invocation (the current
    caller when the throttler invokes immediately, the throttler's own context
    when it defers).

    Args:
        func: Target function.
        memoizer: ``(fn) -> fn'`` caching ``fn``'s return value per input.
        throttler: ``(op) -> op'`` gating a zero-argument operation.

    Returns:
        Function with ``func``'s signature returning the throttled operation's
        result, which is the throttler's absence value for suppressed calls.
    """

    def make_throttle_for_input(*args: P.args, **kwargs: P.kwargs) -> Callable[[], Any]:
        bound_kwargs = dict(kwargs)
        logger.debug(
            "throttle.created",
            extra={"target": getattr(func, "__qualname__", repr(func))},
        )
        return throttler(lambda: func(*args, **bound_kwargs))

    throttles_by_input = memoizer(make_throttle_for_input)

    @functools.wraps(func)
    def throttled_by_input(*args: P.args, **kwargs: P.kwargs) -> R | Any:
        throttle_for_input = throttles_by_input(*args, **kwargs)
        return throttle_for_input()

    return throttled_by_input


def input_sensitive_debounce(
    wait: float,
    *,
    key: KeyResolver | None = None,
    leading: bool = True,
    trailing: bool = False,
    max_wait: float | None = None,
    absent: Any = None,
    clock: Callable[[], float] = time.monotonic,
    scheduler: Scheduler = thread_timer,
    ttl_seconds: float | None = None,
    max_entries: int | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R | Any]]:
    """Decorator form: debounce per input with an in-memory registry.

    Usage:
        @input_sensitive_debounce(0.2, key=first_arg_key)
        def refresh(account_id: str) -> None:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R | Any]:
        return make_input_sensitive_throttle(
            func,
            memoizer=memoizer(key=key, ttl_seconds=ttl_seconds, max_entries=max_entries),
            throttler=debouncer(
                wait,
                leading=leading,
                trailing=trailing,
                max_wait=max_wait,
                absent=absent,
                clock=clock,
                scheduler=scheduler,
            ),
        )

    return decorator


def from_settings(
    func: Callable[P, R],
    *,
    key: KeyResolver | None = None,
    absent: Any = None,
) -> Callable[P, R | Any]:
    """Build an input-sensitive throttle using the configured strategies.

    Raises:
        ValidationAppError: If the configured strategies are invalid.
    """
    return make_input_sensitive_throttle(
        func,
        memoizer=create_memoizer(key=key),
        throttler=create_throttler(absent=absent),
    )
