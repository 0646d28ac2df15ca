from typing import NamedTuple

from .errors import MemoryBoundsError


class Instruction(NamedTuple):
    """One decoded instruction: the four nibbles of two memory bytes."""
    a: int
    b: int
    c: int
    d: int

    @property
    def x(self):
        return self.b

    @property
    def y(self):
        return self.c

    @property
    def n(self):
        return self.d

    @property
    def opcode(self):
        return (self.a << 12) | (self.b << 8) | (self.c << 4) | self.d

    def __str__(self):
        return "%04X" % self.opcode


def addr12(instr):
    """NNN: the 12-bit address held in nibbles 1-3."""
    return (instr.b << 8) | (instr.c << 4) | instr.d


def imm8(instr):
    """NN: the 8-bit immediate held in nibbles 2-3."""
    return (instr.c << 4) | instr.d


def fetch(state):
    """Read the two bytes at pc and split them into nibbles. No side effects."""
    pc = state.pc
    # guard pc bounds
    if pc < 0 or pc + 1 >= len(state.memory):
        raise MemoryBoundsError("PC out of bounds: 0x%03X" % pc)
    hi, lo = state.memory[pc], state.memory[pc + 1]
    return Instruction(hi >> 4, hi & 0xF, lo >> 4, lo & 0xF)
