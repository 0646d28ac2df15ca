import time

from .config import CPU_HZ, FRAME_HZ
from .decoder import fetch
from .engine import Engine
from .errors import Chip8Error, MachineHaltedError
from .log import logger
from .state import MachineState

log = logger.getChild("timing")


class Pacer:
    """Caps the cycle rate at `hz` by sleeping off each cycle's leftover budget.

    Overruns are dropped, not repaid: a slow cycle is followed
    immediately by the next one and the budget restarts from there.
    `hz=None` (or 0) disables the cap. `clock` and `sleep` default to
    the real ones and are swapped out in tests.
    """

    def __init__(self, hz=CPU_HZ, clock=time.perf_counter, sleep=time.sleep):
        if hz is not None and hz < 0:
            raise ValueError("hz must be >= 0, got %r" % (hz,))
        self.period = 1.0 / hz if hz else 0.0
        self.clock = clock
        self.sleep = sleep
        self.started = None

    @property
    def hz(self):
        return 1.0 / self.period if self.period else None

    def begin(self):
        if self.started is None:
            self.started = self.clock()

    def wait(self):
        elapsed = self.clock() - self.started
        remaining = self.period - elapsed
        if remaining > 0:
            self.sleep(remaining)
        self.started = self.clock()

    def reset(self):
        self.started = None


class Chip8:
    """Fetch-decode-execute driver for one emulation session.

    Either call `cycle()` from an outside loop (the window does this
    from a pyglet clock callback) or let `run()` own the loop. A fault
    stops the machine for good: it is re-raised once, and every later
    cycle raises MachineHaltedError.

    Fx0A is a busy wait: while no key is held it rewinds pc and the
    next cycle fetches it again. Those retries are ordinary cycles and
    still count toward the timer cadence.
    """

    def __init__(self, program=None, hz=CPU_HZ, random_byte=None, pacer=None):
        self.state = MachineState()
        self.engine = Engine(random_byte)
        self.pacer = pacer if pacer is not None else Pacer(hz)
        self.cycles = 0
        self.fault = None
        if program is not None:
            self.state.load_program(program)

    @property
    def halted(self):
        return self.fault is not None

    def step(self):
        """One unpaced cycle: fetch, advance pc, execute, count toward timers."""
        if self.fault is not None:
            raise MachineHaltedError("machine halted: %s" % self.fault) from self.fault
        state = self.state
        try:
            ins = fetch(state)
            state.pc += 2
            self.engine.execute(state, ins)
        except Chip8Error as e:
            self.fault = e
            log.error("Emulation error: %s", e)
            raise
        state.tick_timers()
        self.cycles += 1

    def cycle(self):
        self.pacer.begin()
        self.step()
        self.pacer.wait()

    def run(self, cycles=None, should_stop=None):
        """Cycle until `cycles` have run or `should_stop()` returns true."""
        done = 0
        while cycles is None or done < cycles:
            if should_stop is not None and should_stop():
                break
            self.cycle()
            done += 1
        return done

    def run_for(self, seconds):
        """Unpaced cycles until `seconds` of pacer clock time have passed."""
        clock = self.pacer.clock
        deadline = clock() + seconds
        done = 0
        while clock() < deadline:
            self.step()
            done += 1
        return done


def cycles_per_frame(hz, frame_hz=FRAME_HZ):
    """Cycles one display frame should run at `hz`, or None when uncapped."""
    if not hz:
        return None
    return max(1, int(round(hz / frame_hz)))
