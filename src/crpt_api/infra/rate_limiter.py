from __future__ import annotations

import logging
from abc import abstractmethod
from collections import deque
from threading import Condition, Event
from typing import Optional

from ..core.domain.errors import CancellationError, ConfigurationError
from ..core.ports.clock_port import ClockPort, SystemClock
from ..core.ports.rate_limiter_port import RateLimiterPort

logger = logging.getLogger(__name__)

WINDOW_POLICIES = ("fixed", "sliding")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class _WindowRateGate(RateLimiterPort):
    """Shared machinery for window based gates.

    All window state lives behind a single Condition. Callers queue in arrival
    order and only the head of the queue may take a permit, so waiters are
    served first-come-first-served once capacity opens up.

    Subclasses own the window bookkeeping through `_try_grant` and
    `_seconds_until_opening`; both are always called with the lock held.
    """

    def __init__(
        self,
        capacity: int,
        interval_seconds: float,
        clock: ClockPort | None = None,
        poll_seconds: float = 0.05,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ConfigurationError(f"capacity must be a positive integer, got {capacity!r}")
        if not _is_number(interval_seconds) or not interval_seconds > 0:
            raise ConfigurationError(f"interval_seconds must be > 0, got {interval_seconds!r}")
        if not _is_number(poll_seconds) or not poll_seconds > 0:
            raise ConfigurationError(f"poll_seconds must be > 0, got {poll_seconds!r}")
        self._capacity = capacity
        self._interval = float(interval_seconds)
        self._clock = clock or SystemClock()
        self._poll = poll_seconds
        self._cond = Condition()
        self._queue: deque[object] = deque()
        self._in_flight = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def in_flight(self) -> int:
        """Permits acquired and not yet released."""
        with self._cond:
            return self._in_flight

    @property
    def waiting(self) -> int:
        """Callers currently queued in acquire()."""
        with self._cond:
            return len(self._queue)

    @property
    def granted_in_window(self) -> int:
        """Permits counted against the current window."""
        with self._cond:
            return self._count(self._clock.monotonic())

    def acquire(self, *, timeout: float | None = None, cancel: Event | None = None) -> None:
        """Block until a permit is granted.

        Args:
            timeout: Give up after this many seconds and raise CancellationError.
            cancel: Event that, once set, aborts the wait with CancellationError.
                    It is polled every `poll_seconds` while blocked.

        A cancelled acquire grants nothing and leaves the window count untouched.
        """
        deadline = None if timeout is None else self._clock.monotonic() + timeout
        ticket = object()
        granted = False
        with self._cond:
            self._queue.append(ticket)
            try:
                while True:
                    if cancel is not None and cancel.is_set():
                        logger.debug("Permit acquisition cancelled")
                        raise CancellationError("permit acquisition was cancelled")

                    now = self._clock.monotonic()
                    at_head = self._queue[0] is ticket
                    if at_head and self._try_grant(now):
                        self._queue.popleft()
                        self._in_flight += 1
                        granted = True
                        # Let the next caller in line re-check the window
                        self._cond.notify_all()
                        return

                    # Only the head knows when it can proceed; the rest wait for a notify
                    wait = self._seconds_until_opening(now) if at_head else None
                    if deadline is not None:
                        remaining = deadline - now
                        if remaining <= 0:
                            logger.debug(f"Permit acquisition timed out after {timeout}s")
                            raise CancellationError(f"no permit available within {timeout}s")
                        wait = remaining if wait is None else min(wait, remaining)
                    if cancel is not None:
                        wait = self._poll if wait is None else min(wait, self._poll)
                    if at_head:
                        logger.debug(f"Window full ({self._capacity}/{self._interval}s); waiting {wait}s")
                    self._cond.wait(wait)
            finally:
                if not granted:
                    self._queue.remove(ticket)
                    self._cond.notify_all()

    def release(self) -> None:
        with self._cond:
            if self._in_flight <= 0:
                raise RuntimeError("release() called without a matching acquire()")
            self._in_flight -= 1
            self._cond.notify_all()

    @abstractmethod
    def _try_grant(self, now: float) -> bool:
        """Grant one permit at `now` if the window allows it."""

    @abstractmethod
    def _seconds_until_opening(self, now: float) -> float:
        """Seconds until the head of the queue may be granted."""

    @abstractmethod
    def _count(self, now: float) -> int:
        """Permits counted against the window at `now`, without changing state."""


class FixedWindowRateGate(_WindowRateGate):
    """Fixed window gate with atomic rollover.

    At most `capacity` permits are granted per window. A window opens at the
    first acquire observed after the previous one expired, so an idle gate
    never accumulates credit.

    Example:
        gate = FixedWindowRateGate(capacity=5, interval_seconds=1.0)
        with gate.permit():
            ...
    """

    def __init__(
        self,
        capacity: int,
        interval_seconds: float,
        clock: ClockPort | None = None,
        poll_seconds: float = 0.05,
    ) -> None:
        super().__init__(capacity, interval_seconds, clock=clock, poll_seconds=poll_seconds)
        self._window_start = self._clock.monotonic()
        self._granted = 0

    def _roll_over(self, now: float) -> None:
        if now - self._window_start >= self._interval:
            logger.debug(f"Window rollover after {now - self._window_start:.3f}s ({self._granted} granted)")
            self._window_start = now
            self._granted = 0

    def _try_grant(self, now: float) -> bool:
        self._roll_over(now)
        if self._granted < self._capacity:
            self._granted += 1
            return True
        return False

    def _seconds_until_opening(self, now: float) -> float:
        return max(0.0, self._window_start + self._interval - now)

    def _count(self, now: float) -> int:
        # An expired window counts as empty; the next acquire opens a new one
        if now - self._window_start >= self._interval:
            return 0
        return self._granted


class SlidingWindowRateGate(_WindowRateGate):
    """Sliding window gate that tracks the start time of every granted permit.

    Stricter than FixedWindowRateGate: no interval of length `interval_seconds`,
    wherever it is placed, ever contains more than `capacity` grants.

    Example:
        # 5 calls per second, shared by every thread holding the gate
        gate = SlidingWindowRateGate(capacity=5, interval_seconds=1.0)
    """

    def __init__(
        self,
        capacity: int,
        interval_seconds: float,
        clock: ClockPort | None = None,
        poll_seconds: float = 0.05,
    ) -> None:
        super().__init__(capacity, interval_seconds, clock=clock, poll_seconds=poll_seconds)
        self._starts: deque[float] = deque()

    def _evict(self, now: float) -> None:
        cutoff = now - self._interval
        while self._starts and self._starts[0] <= cutoff:
            self._starts.popleft()

    def _try_grant(self, now: float) -> bool:
        self._evict(now)
        if len(self._starts) < self._capacity:
            self._starts.append(now)
            return True
        return False

    def _seconds_until_opening(self, now: float) -> float:
        if not self._starts:
            return 0.0
        return max(0.0, self._starts[0] + self._interval - now)

    def _count(self, now: float) -> int:
        cutoff = now - self._interval
        return sum(1 for ts in self._starts if ts > cutoff)


def build_rate_gate(
    policy: str,
    capacity: int,
    interval_seconds: float,
    clock: Optional[ClockPort] = None,
) -> _WindowRateGate:
    """Create the gate for a window policy name ("fixed" or "sliding")."""
    if policy == "fixed":
        gate_cls: type[_WindowRateGate] = FixedWindowRateGate
    elif policy == "sliding":
        gate_cls = SlidingWindowRateGate
    else:
        raise ConfigurationError(f"unknown window policy {policy!r}; expected one of {WINDOW_POLICIES}")
    logger.info(f"Rate gate: {policy} window, {capacity} permits per {interval_seconds}s")
    return gate_cls(capacity, interval_seconds, clock=clock)
