"""Debounce tests on the default threading.Timer scheduler."""

from __future__ import annotations

import logging
import threading

import pytest

from keyed_throttle.adapters.memoize import memoizer
from keyed_throttle.adapters.throttle import debouncer
from keyed_throttle.combinator import make_input_sensitive_throttle

WAIT_S = 0.05


def test_trailing_call_fires_on_a_timer_thread() -> None:
    seen: list[tuple[str, str]] = []
    done = threading.Event()

    def save(doc_id: str) -> None:
        seen.append((doc_id, threading.current_thread().name))
        if len(seen) == 2:
            done.set()

    debounced_save = make_input_sensitive_throttle(
        save,
        memoizer=memoizer(),
        throttler=debouncer(WAIT_S, leading=False, trailing=True),
    )

    assert debounced_save("a") is None
    assert debounced_save("a") is None
    assert debounced_save("b") is None

    assert done.wait(timeout=2)
    assert sorted(doc_id for doc_id, _ in seen) == ["a", "b"]
    assert all(name != threading.current_thread().name for _, name in seen)


def test_deferred_failure_is_logged_and_never_reaches_the_caller(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.ERROR, logger="keyed_throttle")
    hook_calls: list[threading.ExceptHookArgs] = []
    raised = threading.Event()

    def capture(args: threading.ExceptHookArgs) -> None:
        hook_calls.append(args)
        raised.set()

    def explode(key: str) -> None:
        raise RuntimeError(f"deferred {key}")

    throttled = make_input_sensitive_throttle(
        explode,
        memoizer=memoizer(),
        throttler=debouncer(WAIT_S, leading=False, trailing=True),
    )

    previous_hook = threading.excepthook
    threading.excepthook = capture
    try:
        assert throttled("a") is None
        assert raised.wait(timeout=2)
    finally:
        threading.excepthook = previous_hook

    assert len(hook_calls) == 1
    assert hook_calls[0].exc_type is RuntimeError
    assert str(hook_calls[0].exc_value) == "deferred a"
    assert any(r.getMessage() == "debounce.trailing_failed" for r in caplog.records)
