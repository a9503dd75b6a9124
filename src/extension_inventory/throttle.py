"""Fixed-interval gate for serialising requests to a shared remote service."""

from __future__ import annotations

import time
from collections.abc import Callable


class IntervalGate:
    """Enforce a minimum pause between the end of one call and the start of the next.

    Use as a context manager around each request::

        with gate:
            prober.probe(ext_id)

    The pause is measured from when the previous block exited, whether it
    returned normally or raised.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval < 0:
            raise ValueError(f"interval must be non-negative, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._released_at: float | None = None
        self.passes = 0

    def wait(self) -> None:
        """Block until the interval since the last release has elapsed."""
        if self._released_at is None:
            return
        remaining = self._released_at + self.interval - self._clock()
        if remaining > 0:
            self._sleep(remaining)

    def release(self) -> None:
        self._released_at = self._clock()
        self.passes += 1

    def __enter__(self) -> IntervalGate:
        self.wait()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
