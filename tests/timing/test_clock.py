# tests/timing/test_clock.py
import pytest

from retro_chip8.timing.clock import MonotonicClock, VirtualClock, PeriodicTrigger

class TestVirtualClock:
    def test_advance_and_set(self):
        clock = VirtualClock(1.5)
        assert clock.now() == 1.5
        clock.advance(0.25)
        assert clock.now() == 1.75
        clock.set(-3.0)
        assert clock.now() == -3.0


def test_monotonic_clock_does_not_go_backwards():
    clock = MonotonicClock()
    first = clock.now()
    assert clock.now() >= first


class TestPeriodicTrigger:
    # 1/64秒は2進数で正確に表現できる
    PERIOD = 1 / 64

    def test_fires_after_period(self):
        clock = VirtualClock()
        trigger = PeriodicTrigger(self.PERIOD, clock)
        assert trigger.poll() is False

        clock.advance(self.PERIOD / 2)
        assert trigger.poll() is False

        clock.advance(self.PERIOD / 2)
        assert trigger.poll() is True
        assert trigger.last_delta == self.PERIOD

        # 発火後は基準時刻が更新される
        assert trigger.poll() is False

    def test_not_firing_keeps_reference(self):
        clock = VirtualClock()
        trigger = PeriodicTrigger(self.PERIOD, clock)
        for _ in range(3):
            clock.advance(self.PERIOD / 4)
            assert trigger.poll() is False
        clock.advance(self.PERIOD / 4)
        assert trigger.poll() is True

    def test_late_poll_fires_once(self):
        clock = VirtualClock()
        trigger = PeriodicTrigger(self.PERIOD, clock)
        clock.advance(self.PERIOD * 10)
        assert trigger.poll() is True
        assert trigger.poll() is False

    # @intent:test_case 時刻源が巻き戻った（負の経過時間）場合も発火します。
    def test_fires_on_negative_delta(self):
        clock = VirtualClock(10.0)
        trigger = PeriodicTrigger(self.PERIOD, clock)
        clock.set(9.0)
        assert trigger.poll() is True
        assert trigger.last_delta == -1.0

    def test_from_frequency(self):
        trigger = PeriodicTrigger.from_frequency(64.0, VirtualClock())
        assert trigger.period == self.PERIOD

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            PeriodicTrigger(0, VirtualClock())
        with pytest.raises(ValueError):
            PeriodicTrigger.from_frequency(-60.0, VirtualClock())

    def test_reset(self):
        clock = VirtualClock()
        trigger = PeriodicTrigger(self.PERIOD, clock)
        clock.advance(self.PERIOD)
        trigger.reset()
        assert trigger.poll() is False
