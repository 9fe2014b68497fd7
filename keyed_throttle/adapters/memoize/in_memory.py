"""In-memory memoizer backed by SimpleTTLCache.

Notes:
- Per-process only.
- Thread-safe: lookup and store of a new entry happen under the cache lock,
  so two threads never build two values for the same key.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from keyed_throttle.adapters.memoize.base import KeyResolver, Memoizer, P, T, default_key
from keyed_throttle.utils.simple_cache import SimpleTTLCache

logger = logging.getLogger(__name__)


def memoize(
    fn: Callable[P, T],
    *,
    key: KeyResolver | None = None,
    cache: SimpleTTLCache[T] | None = None,
) -> Callable[P, T]:
    """Memoize ``fn`` per key.

    Args:
        fn: Function to memoize.
        key: Resolver mapping the call arguments to a hashable key. Defaults
            to the full argument list.
        cache: Cache to store results in. A fresh unbounded cache is created
            when omitted.

    Returns:
        Wrapper with the same signature as ``fn``. The backing cache is
        available as ``wrapper.cache``.
    """
    resolve_key = key or default_key
    store: SimpleTTLCache[T] = cache if cache is not None else SimpleTTLCache()

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        cache_key = resolve_key(*args, **kwargs)
        return store.get_or_set(cache_key, lambda: fn(*args, **kwargs))

    wrapper.cache = store  # type: ignore[attr-defined]
    return wrapper


def memoizer(
    *,
    key: KeyResolver | None = None,
    ttl_seconds: float | None = None,
    max_entries: int | None = None,
) -> Memoizer:
    """Build a memoizer factory.

    Each function passed to the returned factory gets its own cache, so two
    combinators built from the same factory never share per-key state.

    Args:
        key: Key resolver applied to every wrapped function.
        ttl_seconds: Entry time-to-live (None keeps entries forever).
        max_entries: LRU capacity (None for unlimited).

    Returns:
        Callable of shape ``(fn) -> fn'``.

    Raises:
        ValueError: If ttl_seconds or max_entries are invalid.
    """
    if ttl_seconds is not None and ttl_seconds <= 0:
        raise ValueError("ttl_seconds must be > 0")
    if max_entries is not None and max_entries < 1:
        raise ValueError("max_entries must be >= 1")

    def _memoize(fn: Callable[P, T]) -> Callable[P, T]:
        cache: SimpleTTLCache[T] = SimpleTTLCache(
            ttl_seconds=ttl_seconds,
            max_entries=max_entries,
        )
        return memoize(fn, key=key, cache=cache)

    return _memoize
