"""Shared test fixtures for unique-callback.

Provides a manually advanced clock and a scripted generator whose
successive return values are fixed up front.
"""

from __future__ import annotations

import pytest


class ManualClock:
    """Clock returning seconds, advanced only when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


class Scripted:
    """Generator returning the scripted values in order, then repeating the last."""

    def __init__(self, *values) -> None:
        self.values = list(values)
        self.calls: list[tuple] = []

    def __call__(self, *args, **kwargs):
        idx = min(len(self.calls), len(self.values) - 1)
        self.calls.append((args, kwargs))
        return self.values[idx]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scripted():
    """Factory fixture: ``scripted(1, 1, 2)`` builds a Scripted generator."""
    return Scripted
