"""
Search debouncing driven by an explicit clock.

``SearchDebouncer`` holds at most one pending search. Scheduling a new
value replaces the pending one and restarts the delay; ``poll`` hands
the value back once the delay has elapsed. Nothing here starts a thread
or a runtime timer: the owner calls ``poll`` whenever it gets control,
and tests drive time by injecting a fake clock.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class PendingSearch:
    """A scheduled search waiting for its deadline."""

    value: str
    deadline: float
    token: int


class SearchDebouncer:
    """
    Single-slot debounce timer with a cancel token.

    Args:
        delay: Seconds the input must stay unchanged before it fires.
        clock: Monotonic time source; defaults to ``time.monotonic``.
    """

    def __init__(self, delay: float = 0.3, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self.clock = clock
        self._tokens = itertools.count(1)
        self._pending: PendingSearch | None = None

    @property
    def pending(self) -> PendingSearch | None:
        return self._pending

    def schedule(self, value: str) -> int:
        """Replace any pending search with *value* and restart the delay."""
        self._pending = PendingSearch(
            value=value,
            deadline=self.clock() + self.delay,
            token=next(self._tokens),
        )
        return self._pending.token

    def cancel(self, token: int | None = None) -> bool:
        """
        Drop the pending search.

        When *token* is given, only a pending search with that token is
        cancelled. Returns True if something was cancelled.
        """
        if self._pending is None:
            return False
        if token is not None and self._pending.token != token:
            return False
        self._pending = None
        return True

    def poll(self) -> PendingSearch | None:
        """Return and clear the pending search if its deadline has passed."""
        pending = self._pending
        if pending is None or self.clock() < pending.deadline:
            return None
        self._pending = None
        return pending
