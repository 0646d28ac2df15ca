"""Pacing and the run loop, against a fake clock."""

import pytest

from pychip8 import Chip8, Pacer, StackUnderflowError
from pychip8.timing import cycles_per_frame


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def make_pacer(hz):
    clock = FakeClock()
    return Pacer(hz, clock=clock, sleep=clock.sleep), clock


def test_pacer_sleeps_off_the_rest_of_the_budget():
    pacer, clock = make_pacer(100)
    pacer.begin()
    clock.now += 0.004
    pacer.wait()
    assert clock.sleeps == [pytest.approx(0.006)]
    assert clock.now == pytest.approx(0.010)

def test_pacer_drops_overrun():
    pacer, clock = make_pacer(100)
    pacer.begin()
    clock.now += 0.035
    pacer.wait()
    assert clock.sleeps == []

    # the next cycle gets a full budget, no catch-up
    pacer.begin()
    clock.now += 0.001
    pacer.wait()
    assert clock.sleeps == [pytest.approx(0.009)]

def test_uncapped_pacer_never_sleeps():
    pacer, clock = make_pacer(None)
    assert pacer.hz is None
    for _ in range(10):
        pacer.begin()
        pacer.wait()
    assert clock.sleeps == []

def test_pacer_hz_round_trips():
    pacer, _ = make_pacer(500)
    assert pacer.hz == pytest.approx(500)

def test_machine_cycles_are_paced():
    pacer, clock = make_pacer(1000)
    machine = Chip8(bytes([0x12, 0x00]), pacer=pacer)
    assert machine.run(cycles=5) == 5
    assert len(clock.sleeps) == 5
    assert clock.now == pytest.approx(0.005)


# =============================================================================
#  RUN LOOP
# =============================================================================

def test_run_until_should_stop():
    machine = Chip8(bytes([0x12, 0x00]), hz=None)
    assert machine.run(should_stop=lambda: machine.cycles >= 7) == 7

def test_timers_follow_cycle_count():
    machine = Chip8(bytes([0x12, 0x00]), hz=None)
    machine.state.delay_timer = 5
    machine.state.sound_timer = 2
    machine.run(cycles=10)
    assert machine.state.delay_timer == 4
    assert machine.state.sound_timer == 1
    machine.run(cycles=100)
    assert machine.state.delay_timer == 0
    assert machine.state.sound_timer == 0

def test_fault_is_not_counted_as_cycle():
    machine = Chip8(bytes([0x00, 0xEE]), hz=None)
    with pytest.raises(StackUnderflowError):
        machine.run()
    assert machine.cycles == 0
    assert machine.halted

def test_negative_rate_is_rejected():
    with pytest.raises(ValueError):
        Pacer(-5)


# =============================================================================
#  FRAME BATCHES
# =============================================================================

class TickingClock:
    """Advances a millisecond every time it is read."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        now = self.now
        self.now += 0.001
        return now

    def sleep(self, seconds):
        self.sleeps.append(seconds)


def test_cycles_per_frame():
    assert cycles_per_frame(6000) == 100
    assert cycles_per_frame(6000, frame_hz=50) == 120
    assert cycles_per_frame(10) == 1
    assert cycles_per_frame(None) is None
    assert cycles_per_frame(0) is None

def test_run_for_is_unpaced_and_time_bounded():
    clock = TickingClock()
    machine = Chip8(bytes([0x12, 0x00]), pacer=Pacer(None, clock=clock, sleep=clock.sleep))
    done = machine.run_for(0.01)
    assert 9 <= done <= 10
    assert machine.cycles == done
    assert clock.sleeps == []
