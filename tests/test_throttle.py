"""Tests for the interval gate that spaces store requests."""

from __future__ import annotations

import time

import pytest

from extension_inventory.throttle import IntervalGate


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestIntervalGate:
    def test_first_pass_does_not_wait(self):
        clock = FakeClock()
        gate = IntervalGate(0.05, clock=clock, sleep=clock.sleep)
        with gate:
            pass
        assert clock.sleeps == []
        assert gate.passes == 1

    def test_waits_remaining_interval(self):
        clock = FakeClock()
        gate = IntervalGate(0.05, clock=clock, sleep=clock.sleep)
        with gate:
            pass
        clock.now += 0.02
        with gate:
            pass
        assert clock.sleeps == [pytest.approx(0.03)]

    def test_no_wait_when_interval_already_elapsed(self):
        clock = FakeClock()
        gate = IntervalGate(0.05, clock=clock, sleep=clock.sleep)
        with gate:
            pass
        clock.now += 1.0
        with gate:
            pass
        assert clock.sleeps == []

    def test_interval_measured_from_end_of_previous_pass(self):
        clock = FakeClock()
        gate = IntervalGate(0.05, clock=clock, sleep=clock.sleep)
        with gate:
            clock.now += 3.0  # slow request
        with gate:
            pass
        assert clock.sleeps == [pytest.approx(0.05)]

    def test_failed_pass_still_spaces_next(self):
        clock = FakeClock()
        gate = IntervalGate(0.05, clock=clock, sleep=clock.sleep)
        with pytest.raises(RuntimeError):
            with gate:
                raise RuntimeError("probe failed")
        with gate:
            pass
        assert clock.sleeps == [pytest.approx(0.05)]
        assert gate.passes == 2

    def test_zero_interval_never_sleeps(self):
        clock = FakeClock()
        gate = IntervalGate(0, clock=clock, sleep=clock.sleep)
        for _ in range(3):
            with gate:
                pass
        assert clock.sleeps == []

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            IntervalGate(-1)

    def test_real_clock_lower_bound(self):
        gate = IntervalGate(0.05)
        start = time.monotonic()
        for _ in range(3):
            with gate:
                pass
        assert time.monotonic() - start >= 0.1
