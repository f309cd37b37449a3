from __future__ import annotations

from contextlib import contextmanager
from threading import Event
from typing import Iterator, Protocol


class RateLimiterPort(Protocol):
    def acquire(self, *, timeout: float | None = None, cancel: Event | None = None) -> None:
        """Block until a permit is available according to the configured rate.

        Raises CancellationError when `timeout` elapses or `cancel` is set first.
        """

    def release(self) -> None:
        """Return a permit obtained from acquire()."""

    @contextmanager
    def permit(self, *, timeout: float | None = None, cancel: Event | None = None) -> Iterator[None]:
        """Hold one permit for the duration of the with-block, releasing it on every exit path."""
        self.acquire(timeout=timeout, cancel=cancel)
        try:
            yield
        finally:
            self.release()
