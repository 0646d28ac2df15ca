import numpy as np

from .config import (
    FONTSET, HEIGHT, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START,
    TIMER_DIVIDER, WIDTH,
)
from .errors import MemoryBoundsError, ProgramTooLargeError
from .log import logger

log = logger.getChild("state")


class MachineState:
    """The complete mutable state of one CHIP-8 session.

    Owned by a single run loop; the decoder reads it and the engine
    reads and writes it. The input collaborator only touches `keys`
    (through press/release) and the display sink only reads `display`
    and clears `draw_flag`.
    """

    def __init__(self):
        self.memory = bytearray(MEMORY_SIZE)
        self.registers = bytearray(NUM_REGISTERS)
        self.index = 0
        self.pc = PROGRAM_START
        self.stack = []

        # 64x32 screen, row-major: pixel (x, y) lives at x + y * WIDTH
        self.display = np.zeros(WIDTH * HEIGHT, dtype=bool)
        self.keys = np.zeros(NUM_KEYS, dtype=bool)

        self.delay_timer = 0
        self.sound_timer = 0
        self.cycle_counter = 0
        self.draw_flag = True

        # Load fontset into memory
        self.memory[:len(FONTSET)] = bytes(FONTSET)

    def load_program(self, image):
        """Copy a raw program image into memory at PROGRAM_START."""
        image = bytes(image)
        end = PROGRAM_START + len(image)
        if end > MEMORY_SIZE:
            raise ProgramTooLargeError(
                "program of %d bytes overruns memory (max %d)"
                % (len(image), MEMORY_SIZE - PROGRAM_START))
        self.memory[PROGRAM_START:end] = image
        log.debug("Loaded %d byte program at 0x%03X", len(image), PROGRAM_START)

    # ---- Input ----
    def press(self, key):
        self._check_key(key)
        self.keys[key] = True

    def release(self, key):
        self._check_key(key)
        self.keys[key] = False

    @staticmethod
    def _check_key(key):
        if not 0 <= key < NUM_KEYS:
            raise MemoryBoundsError("no such key: %r" % (key,))

    # ---- Timers ----
    def tick_timers(self):
        """Count one cycle; every TIMER_DIVIDER cycles step both timers toward 0."""
        self.cycle_counter += 1
        if self.cycle_counter % TIMER_DIVIDER == 0:
            self.cycle_counter = 0
            if self.delay_timer > 0:
                self.delay_timer -= 1
            if self.sound_timer > 0:
                self.sound_timer -= 1

    def pixel(self, x, y):
        return bool(self.display[x + y * WIDTH])
