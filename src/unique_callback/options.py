"""Configuration model for unique-callback.

UniqueOptions holds the per-wrapper settings: the time and retry budgets,
the values that are always rejected, and an optional pre-populated store.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

# Types treated as a collection of excluded values. Anything else
# (strings and dicts included) is a single excluded value.
_EXCLUDE_COLLECTIONS = (list, tuple, set, frozenset)


class UniqueOptions(BaseModel):
    """Per-wrapper configuration.

    Every field is optional and defaulted independently.

    Attributes:
        max_time: Milliseconds the wrapper may spend, counted from
            construction, before calls start failing.
        max_retries: Retries allowed per call after the first attempt.
        exclude: A value or a list/tuple/set of values that are always
            rejected. Normalized to a tuple.
        store: Previously accepted results keyed by store key. Copied on
            validation, never mutated in place.

    Unknown field names are rejected, so a misspelled option fails
    validation instead of silently falling back to its default.

    Example::

        from unique_callback import UniqueOptions
        options = UniqueOptions(max_retries=10, exclude=[0])
    """

    model_config = {"arbitrary_types_allowed": True, "frozen": True, "extra": "forbid"}

    max_time: int = Field(default=50, gt=0)
    max_retries: int = Field(default=50, ge=0)
    exclude: Any = ()
    store: Optional[dict[str, Any]] = None

    @field_validator("exclude", mode="before")
    @classmethod
    def normalize_exclude(cls, value: Any) -> tuple:
        if isinstance(value, _EXCLUDE_COLLECTIONS):
            return tuple(value)
        return (value,)

    def merged(self, **overrides: Any) -> UniqueOptions:
        """Return a validated copy with the given fields replaced."""
        if not overrides:
            return self
        return type(self)(**{**dict(self), **overrides})
