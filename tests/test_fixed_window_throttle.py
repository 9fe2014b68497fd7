"""Unit tests for the fixed-window throttler adapter."""

from unittest.mock import Mock

import pytest

from keyed_throttle.adapters.throttle import FixedWindowThrottle, fixed_window


def test_allows_up_to_limit_in_same_window() -> None:
    clock = Mock(return_value=1000.0)
    op = Mock(return_value="ok")
    throttled = FixedWindowThrottle(op, limit=3, window_seconds=60, clock=clock)

    assert [throttled() for _ in range(3)] == ["ok", "ok", "ok"]
    assert throttled.last_decision is not None
    assert throttled.last_decision.remaining == 0
    assert op.call_count == 3


def test_blocks_when_over_limit() -> None:
    clock = Mock(return_value=1000.0)
    op = Mock(return_value="ok")
    throttled = FixedWindowThrottle(op, limit=2, window_seconds=60, clock=clock, absent="blocked")

    throttled()
    throttled()

    assert throttled() == "blocked"
    decision = throttled.last_decision
    assert decision is not None
    assert decision.allowed is False
    assert decision.retry_after_seconds is not None
    assert decision.retry_after_seconds > 0
    assert op.call_count == 2


def test_resets_on_new_window() -> None:
    clock = Mock(return_value=1000.0)
    op = Mock(return_value="ok")
    throttled = FixedWindowThrottle(op, limit=1, window_seconds=10, clock=clock)

    assert throttled() == "ok"
    assert throttled() is None

    clock.return_value = 1010.0
    assert throttled() == "ok"


def test_consume_does_not_invoke_operation() -> None:
    op = Mock()
    throttled = FixedWindowThrottle(op, limit=1, window_seconds=60, clock=Mock(return_value=0.0))

    assert throttled.consume().allowed is True
    assert throttled.consume().allowed is False
    op.assert_not_called()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0, "window_seconds": 60},
        {"limit": 1, "window_seconds": 0},
    ],
)
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        FixedWindowThrottle(Mock(), **kwargs)

    with pytest.raises(ValueError):
        fixed_window(**kwargs)
