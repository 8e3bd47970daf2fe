"""
Unit tests for core.quota module.
Drives the gate with a fake clock instead of sleeping.
"""
import threading

from notehub.core.quota import QuotaGate


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestQuotaGate:

    def test_new_gate_is_open(self):
        gate = QuotaGate(clock=FakeClock())
        assert gate.is_open()
        assert gate.remaining_seconds() == 0
        assert gate.remaining_minutes() == 0

    def test_trip_closes_for_cooldown(self):
        clock = FakeClock()
        gate = QuotaGate(clock=clock)
        gate.trip(3600)
        assert not gate.is_open()
        assert gate.blocked_until == clock.now + 3600
        assert gate.remaining_minutes() == 60

        clock.now += 3599
        assert not gate.is_open()
        assert gate.remaining_minutes() == 1  # Rounded up

        clock.now += 1
        assert gate.is_open()

    def test_remaining_minutes_round_up(self):
        clock = FakeClock()
        gate = QuotaGate(clock=clock)
        gate.trip(3600)
        clock.now += 61
        assert gate.remaining_minutes() == 59  # 3539s left

    def test_retrip_extends_from_now(self):
        clock = FakeClock()
        gate = QuotaGate(clock=clock)
        gate.trip(3600)
        clock.now += 1800
        gate.trip(3600)
        assert gate.remaining_seconds() == 3600

    def test_reset_reopens(self):
        gate = QuotaGate(clock=FakeClock())
        gate.trip(3600)
        gate.reset()
        assert gate.is_open()

    def test_concurrent_trips_leave_consistent_state(self):
        clock = FakeClock()
        gate = QuotaGate(clock=clock)
        threads = [threading.Thread(target=gate.trip, args=(3600,)) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert gate.blocked_until == clock.now + 3600
