"""Factory for creating memoizers from configuration."""

from __future__ import annotations

from pydantic import ValidationError

from keyed_throttle.adapters.memoize.base import KeyResolver, Memoizer
from keyed_throttle.adapters.memoize.in_memory import memoizer
from keyed_throttle.core.config import MemoizeSettings, settings
from keyed_throttle.core.errors import ValidationAppError
from keyed_throttle.schemas.options import MemoizeOptions


def create_memoizer(
    memoize_settings: MemoizeSettings | None = None,
    *,
    key: KeyResolver | None = None,
) -> Memoizer:
    """Create a memoizer from settings.

    Args:
        memoize_settings: Retention settings; defaults to global settings.
        key: Optional key resolver.

    Returns:
        Memoizer factory with the configured retention policy.

    Raises:
        ValidationAppError: If the configured options are invalid.
    """
    cfg = memoize_settings or settings.memoize

    try:
        options = MemoizeOptions(
            ttl_seconds=cfg.ttl_seconds,
            max_entries=cfg.max_entries,
        )
    except ValidationError as exc:
        raise ValidationAppError(
            code="memoize_invalid_options",
            message="Invalid memoizer configuration",
            details={"errors": exc.errors(include_url=False)},
        ) from exc

    return memoizer(
        key=key,
        ttl_seconds=options.ttl_seconds,
        max_entries=options.max_entries,
    )
