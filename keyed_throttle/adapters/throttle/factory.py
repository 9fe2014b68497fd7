"""Factory for creating throttlers from configuration."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from keyed_throttle.adapters.throttle.base import Throttler
from keyed_throttle.adapters.throttle.debounce import debouncer, throttler
from keyed_throttle.adapters.throttle.fixed_window import fixed_window
from keyed_throttle.core.config import ThrottleSettings, settings
from keyed_throttle.core.errors import ValidationAppError
from keyed_throttle.schemas.options import DebounceOptions, FixedWindowOptions


def _invalid_options(strategy: str, exc: ValidationError) -> ValidationAppError:
    return ValidationAppError(
        code="throttle_invalid_options",
        message=f"Invalid options for throttle strategy '{strategy}'",
        details={"strategy": strategy, "errors": exc.errors(include_url=False)},
    )


def create_throttler(
    throttle_settings: ThrottleSettings | None = None,
    *,
    absent: Any = None,
) -> Throttler:
    """Create a throttler factory based on the configured strategy.

    Args:
        throttle_settings: Timing settings; defaults to global settings.
        absent: Value returned by suppressed calls.

    Returns:
        Throttler: Callable of shape ``(op) -> op'``.

    Raises:
        ValidationAppError: If the strategy is unknown or its options are invalid.
    """
    cfg = throttle_settings or settings.throttle
    strategy = cfg.strategy.lower()

    if strategy in ("debounce", "throttle"):
        try:
            options = DebounceOptions(
                wait_seconds=cfg.wait_seconds,
                leading=cfg.leading,
                trailing=cfg.trailing,
                max_wait_seconds=cfg.max_wait_seconds,
            )
        except ValidationError as exc:
            raise _invalid_options(strategy, exc) from exc

        if strategy == "throttle":
            return throttler(
                options.wait_seconds,
                leading=options.leading,
                trailing=options.trailing,
                absent=absent,
            )
        return debouncer(
            options.wait_seconds,
            leading=options.leading,
            trailing=options.trailing,
            max_wait=options.max_wait_seconds,
            absent=absent,
        )

    if strategy == "fixed_window":
        try:
            window = FixedWindowOptions(
                limit=cfg.limit,
                window_seconds=cfg.window_seconds,
            )
        except ValidationError as exc:
            raise _invalid_options(strategy, exc) from exc
        return fixed_window(
            limit=window.limit,
            window_seconds=window.window_seconds,
            absent=absent,
        )

    raise ValidationAppError(
        code="throttle_unknown_strategy",
        message=(
            f"Unknown throttle strategy: '{strategy}'. "
            "Supported strategies: debounce, throttle, fixed_window"
        ),
        details={"strategy": strategy},
    )
