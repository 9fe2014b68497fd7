"""Per-input throttling: one independent throttle instance per distinct input."""

from keyed_throttle.adapters.memoize import (
    create_memoizer,
    default_key,
    first_arg_key,
    memoize,
    memoizer,
    str_join_key,
)
from keyed_throttle.adapters.throttle import (
    Debounce,
    FixedWindowThrottle,
    create_throttler,
    debouncer,
    fixed_window,
    throttler,
)
from keyed_throttle.combinator import (
    from_settings,
    input_sensitive_debounce,
    make_input_sensitive_throttle,
)
from keyed_throttle.core.errors import AppError, ValidationAppError

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "Debounce",
    "FixedWindowThrottle",
    "ValidationAppError",
    "create_memoizer",
    "create_throttler",
    "debouncer",
    "default_key",
    "first_arg_key",
    "fixed_window",
    "from_settings",
    "input_sensitive_debounce",
    "make_input_sensitive_throttle",
    "memoize",
    "memoizer",
    "str_join_key",
    "throttler",
]
