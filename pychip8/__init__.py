from .decoder import Instruction, addr12, fetch, imm8
from .engine import Engine
from .errors import (
    Chip8Error, MachineHaltedError, MemoryBoundsError, ProgramTooLargeError,
    StackUnderflowError,
)
from .state import MachineState
from .timing import Chip8, Pacer

__version__ = "0.1.0"
