"""A consecutive-failure circuit breaker guarding calls to external services."""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Optional, TypeVar

E = TypeVar("E", bound=Optional[BaseException])


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half-open"


StateChangeHook = Callable[[CircuitState, CircuitState], None]


class CircuitBreaker:
    """Opens after a run of consecutive failures and probes again after a timeout.

    While closed, every call is allowed. After ``failure_threshold`` consecutive
    failures the breaker opens and refuses calls. Once ``open_timeout`` seconds
    have passed it becomes half-open and lets calls through: a success closes it,
    a failure opens it again.
    """

    def __init__(
        self,
        open_timeout: float = 120.0,
        failure_threshold: int = 3,
        on_state_change: StateChangeHook | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self._open_timeout = open_timeout
        self._failure_threshold = failure_threshold
        self._on_state_change = on_state_change
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at = 0.0

    def state(self) -> CircuitState:
        """Return the current state, moving from open to half-open when due."""
        if self._state is CircuitState.OPEN and self._clock() - self._opened_at >= self._open_timeout:
            self._set_state(CircuitState.HALF_OPEN)
        return self._state

    def ready(self) -> bool:
        """Return whether a call may go ahead."""
        return self.state() is not CircuitState.OPEN

    def done(self, error: E) -> E:
        """Record the outcome of a call and hand back ``error`` unchanged."""
        if error is None:
            self._success()
        else:
            self._failure()
        return error

    def _success(self) -> None:
        self._consecutive_failures = 0
        if self.state() is CircuitState.HALF_OPEN:
            self._set_state(CircuitState.CLOSED)

    def _failure(self) -> None:
        self._consecutive_failures += 1
        current = self.state()
        if current is CircuitState.HALF_OPEN or (
            current is CircuitState.CLOSED and self._consecutive_failures >= self._failure_threshold
        ):
            self._open()

    def _open(self) -> None:
        self._opened_at = self._clock()
        self._set_state(CircuitState.OPEN)

    def _set_state(self, new: CircuitState) -> None:
        old = self._state
        if old is new:
            return
        self._state = new
        if new is CircuitState.CLOSED:
            self._consecutive_failures = 0
        if self._on_state_change is not None:
            self._on_state_change(old, new)