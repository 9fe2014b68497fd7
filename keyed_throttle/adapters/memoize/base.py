"""Memoizer interfaces.

The combinator depends on this structural shape only, so any callable of the
form ``(fn) -> fn'`` works, including ``functools.lru_cache(maxsize=None)``.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, ParamSpec, Protocol, TypeVar

P = ParamSpec("P")
T = TypeVar("T")

KeyResolver = Callable[..., Hashable]


class Memoizer(Protocol):
    """Wraps ``fn`` so equal argument lists return the stored result."""

    def __call__(self, fn: Callable[P, T], /) -> Callable[P, T]:
        ...


def default_key(*args: Any, **kwargs: Any) -> Hashable:
    """Build a hashable key from the full argument list.

    The key is always a (positional, keyword) pair, so a positional argument
    can never collide with a keyword argument. Keyword order does not matter.
    Arguments must be hashable.
    """
    return (args, tuple(sorted(kwargs.items())))


def first_arg_key(*args: Any, **kwargs: Any) -> Hashable:
    """Key on the first positional argument only."""
    return args[0] if args else None


def str_join_key(*args: Any, **kwargs: Any) -> Hashable:
    """Key on the string form of positional arguments joined with ':'.

    Useful for unhashable arguments whose string form identifies them.
    """
    return ":".join(str(arg) for arg in args)
