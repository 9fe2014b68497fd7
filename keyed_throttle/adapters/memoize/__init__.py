"""Memoizer adapters.

Provides the keyed registry used by the combinator to hold one throttle
instance per distinct input.
"""

from keyed_throttle.adapters.memoize.base import (
    KeyResolver,
    Memoizer,
    default_key,
    first_arg_key,
    str_join_key,
)
from keyed_throttle.adapters.memoize.factory import create_memoizer
from keyed_throttle.adapters.memoize.in_memory import memoize, memoizer

__all__ = [
    "KeyResolver",
    "Memoizer",
    "create_memoizer",
    "default_key",
    "first_arg_key",
    "memoize",
    "memoizer",
    "str_join_key",
]
