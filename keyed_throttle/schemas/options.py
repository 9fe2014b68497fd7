"""Pydantic schemas validating collaborator options before construction."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class DebounceOptions(BaseModel):
    """Options for debounce and throttle strategies."""

    wait_seconds: float = Field(
        ..., ge=0, description="Quiet period before a trailing invocation."
    )
    leading: bool = Field(
        False, description="Invoke on the leading edge of the wait period."
    )
    trailing: bool = Field(
        True, description="Invoke on the trailing edge of the wait period."
    )
    max_wait_seconds: float | None = Field(
        None,
        ge=0,
        description="Maximum delay before a pending call is forced through.",
    )

    @model_validator(mode="after")
    def _max_wait_not_below_wait(self) -> "DebounceOptions":
        if self.max_wait_seconds is not None and self.max_wait_seconds < self.wait_seconds:
            raise ValueError("max_wait_seconds must be >= wait_seconds")
        return self


class FixedWindowOptions(BaseModel):
    """Options for the fixed-window strategy."""

    limit: int = Field(..., ge=1, description="Maximum invocations per window.")
    window_seconds: float = Field(..., gt=0, description="Window size in seconds.")


class MemoizeOptions(BaseModel):
    """Retention options for the per-key registry."""

    ttl_seconds: float | None = Field(
        None, gt=0, description="Entry time-to-live (None keeps entries forever)."
    )
    max_entries: int | None = Field(
        None, ge=1, description="LRU capacity (None for unlimited)."
    )
