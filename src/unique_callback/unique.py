"""Deduplicating wrapper for value-generating callables.

Provides unique() -- wraps a generator function so that every call
returns a result not previously returned for the same arguments and not
in the exclusion list. Rejected candidates are retried through
tenacity until a new value turns up or the time/retry budget runs out.

Usage::

    import random
    from unique_callback import unique

    roll = unique(lambda: random.randint(1, 6), max_retries=100)
    first, second = roll(), roll()   # never equal
"""

from __future__ import annotations

import functools
import logging
import math
import threading
import time
import types
from typing import Any, Callable, Generic, Mapping, TypeVar

import tenacity

from unique_callback.exceptions import (
    RetryBudgetExceededError,
    TimeBudgetExceededError,
)
from unique_callback.keys import store_key
from unique_callback.options import UniqueOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UniqueCallback(Generic[T]):
    """Callable wrapper that only ever returns unseen results.

    Owns the record of accepted results and the construction-time start
    timestamp. Both live as long as the wrapper does.

    Note:
        The time budget is checked before each attempt only. A single slow
        generator invocation is never interrupted.
    """

    def __init__(
        self,
        method: Callable[..., T],
        options: UniqueOptions,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        functools.update_wrapper(self, method)
        self._name = getattr(method, "__qualname__", repr(method))
        self._method = method
        self._options = options
        self._exclude = options.exclude
        self._store: dict[str, T] = dict(options.store or {})
        self._clock = clock
        self._lock = threading.RLock()
        self._start = clock()

    @property
    def options(self) -> UniqueOptions:
        return self._options

    @property
    def store(self) -> Mapping[str, T]:
        """Read-only live view of accepted results, keyed by store key."""
        return types.MappingProxyType(self._store)

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the wrapper was created."""
        return (self._clock() - self._start) * 1000

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        """Return a result of the wrapped function not returned before.

        Raises:
            TimeBudgetExceededError: If more than ``max_time`` ms have
                passed since the wrapper was created.
            RetryBudgetExceededError: If ``max_retries + 1`` attempts all
                produced excluded or already-recorded results.
        """
        retryer = tenacity.Retrying(
            retry=tenacity.retry_if_result(self._is_rejected),
            before=self._check_budget,
            wait=tenacity.wait_none(),
            stop=tenacity.stop_never,
        )
        with self._lock:
            candidate, key = retryer(self._attempt, args, kwargs)
            self._store[key] = candidate
        logger.debug(
            "%s accepted result after %d attempt(s)",
            self._name,
            retryer.statistics.get("attempt_number", 1),
        )
        return candidate

    def _attempt(self, args: tuple, kwargs: dict) -> tuple[T, str]:
        """Run the wrapped function once (no retry)."""
        candidate = self._method(*args, **kwargs)
        return candidate, store_key(args, kwargs, candidate)

    def _is_rejected(self, outcome: tuple[T, str]) -> bool:
        candidate, key = outcome
        if _is_excluded(candidate, self._exclude):
            logger.debug("Rejected excluded result %r", candidate)
            return True
        if key in self._store:
            logger.debug("Rejected duplicate result for key %s", key)
            return True
        return False

    def _check_budget(self, retry_state: tenacity.RetryCallState) -> None:
        """Fail the call before the next attempt once a budget is spent."""
        retries = retry_state.attempt_number - 1
        if self.elapsed_ms > self._options.max_time:
            logger.debug("Time budget spent after %d retries", retries)
            raise TimeBudgetExceededError(self._options.max_time, retries)
        if retries > self._options.max_retries:
            logger.debug("Retry budget spent after %d retries", retries)
            raise RetryBudgetExceededError(self._options.max_retries)


def _is_excluded(candidate: Any, exclude: tuple) -> bool:
    """Value-equality membership where NaN matches NaN."""
    for value in exclude:
        if value is candidate or value == candidate:
            return True
        if (
            isinstance(value, float)
            and isinstance(candidate, float)
            and math.isnan(value)
            and math.isnan(candidate)
        ):
            return True
    return False


def unique(
    method: Callable[..., T] | None = None,
    options: UniqueOptions | Mapping[str, Any] | None = None,
    *,
    clock: Callable[[], float] = time.monotonic,
    **overrides: Any,
) -> Any:
    """Wrap a generator function so repeated calls yield unseen results.

    Results already returned for the same arguments, and results equal to
    an excluded value, are discarded and the function is called again.

    Can be used directly or as a decorator::

        roll = unique(die.roll, max_retries=10)

        @unique(exclude=[0])
        def pick(n): ...

    Args:
        method: The function used to generate values. When omitted, a
            decorator is returned.
        options: UniqueOptions, or a mapping of its field names.
        clock: Zero-argument callable returning seconds as a float. The
            time budget is measured with it from construction onwards.
        **overrides: UniqueOptions fields applied on top of ``options``
            (``max_time``, ``max_retries``, ``exclude``, ``store``).

    Returns:
        A UniqueCallback wrapping ``method``, or a decorator producing one.

    Raises:
        pydantic.ValidationError: If the options are invalid.
    """
    if options is None:
        resolved = UniqueOptions(**overrides)
    elif isinstance(options, UniqueOptions):
        resolved = options.merged(**overrides)
    else:
        resolved = UniqueOptions(**{**options, **overrides})

    if method is None:
        def decorator(fn: Callable[..., T]) -> UniqueCallback[T]:
            return UniqueCallback(fn, resolved, clock=clock)
        return decorator
    return UniqueCallback(method, resolved, clock=clock)
