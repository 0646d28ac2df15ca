import random

from .config import FLAG, GLYPH_SIZE, WIDTH
from .decoder import addr12, imm8
from .errors import MemoryBoundsError, StackUnderflowError
from .log import logger

log = logger.getChild("engine")


def default_random_byte():
    return random.getrandbits(8)


class Engine:
    """Applies one decoded instruction to a MachineState.

    The program counter has already been advanced past the instruction
    when `execute` runs; control-flow handlers overwrite it afterwards.
    `random_byte` is any zero-argument callable returning 0..255 and is
    the only source of randomness (Cxnn).
    """

    def __init__(self, random_byte=None):
        self.random_byte = random_byte or default_random_byte

        # dispatch table: (mask, pattern, handler), first match wins
        self.opcodes = [
            (0xFFFF, 0x0000, self.op_SYS),
            (0xFFFF, 0x00E0, self.op_CLS),
            (0xFFFF, 0x00EE, self.op_RET),

            (0xF000, 0x1000, self.op_JP),
            (0xF000, 0x2000, self.op_CALL),
            (0xF000, 0x3000, self.op_SE_Vx_kk),
            (0xF000, 0x4000, self.op_SNE_Vx_kk),
            (0xF00F, 0x5000, self.op_SE_Vx_Vy),
            (0xF000, 0x6000, self.op_LD_Vx_kk),
            (0xF000, 0x7000, self.op_ADD_Vx_kk),

            (0xF00F, 0x8000, self.op_LD_Vx_Vy),
            (0xF00F, 0x8001, self.op_OR),
            (0xF00F, 0x8002, self.op_AND),
            (0xF00F, 0x8003, self.op_XOR),
            (0xF00F, 0x8004, self.op_ADD),
            (0xF00F, 0x8005, self.op_SUB),
            (0xF00F, 0x8006, self.op_SHR),
            (0xF00F, 0x8007, self.op_SUBN),
            (0xF00F, 0x800E, self.op_SHL),

            (0xF00F, 0x9000, self.op_SNE_Vx_Vy),
            (0xF000, 0xA000, self.op_LD_I),
            (0xF000, 0xB000, self.op_JP_V0),
            (0xF000, 0xC000, self.op_RND),
            (0xF000, 0xD000, self.op_DRW),

            (0xF0FF, 0xE09E, self.op_SKP),
            (0xF0FF, 0xE0A1, self.op_SKNP),

            (0xF0FF, 0xF007, self.op_LD_Vx_DT),
            (0xF0FF, 0xF00A, self.op_WAITKEY),
            (0xF0FF, 0xF015, self.op_LD_DT_Vx),
            (0xF0FF, 0xF018, self.op_LD_ST_Vx),
            (0xF0FF, 0xF01E, self.op_ADD_I_Vx),
            (0xF0FF, 0xF029, self.op_FONT),
            (0xF0FF, 0xF033, self.op_BCD),
            (0xF0FF, 0xF055, self.op_STORE),
            (0xF0FF, 0xF065, self.op_LOAD),
        ]

    def lookup(self, ins):
        opcode = ins.opcode
        for mask, pattern, handler in self.opcodes:
            if (opcode & mask) == pattern:
                return handler
        return self.op_UNKNOWN

    def execute(self, state, ins):
        handler = self.lookup(ins)
        log.debug("%03X: %s %s", state.pc - 2, ins, handler.__name__)
        try:
            handler(state, ins)
        except IndexError as e:
            raise MemoryBoundsError(
                "opcode %s at 0x%03X indexed out of range: %s"
                % (ins, state.pc - 2, e)) from e

    # ---- Opcode handlers ----

    # 0000 - call external routine, not implemented
    def op_SYS(self, state, ins):
        pass

    # anything not in the table is ignored
    def op_UNKNOWN(self, state, ins):
        log.debug("Unknown opcode: %s", ins)

    def op_CLS(self, state, ins):
        state.display[:] = False
        state.draw_flag = True

    def op_RET(self, state, ins):
        if not state.stack:
            raise StackUnderflowError("Stack underflow on 00EE at 0x%03X" % (state.pc - 2))
        state.pc = state.stack.pop()

    def op_JP(self, state, ins):
        state.pc = addr12(ins)

    def op_CALL(self, state, ins):
        state.stack.append(state.pc)
        state.pc = addr12(ins)

    def op_SE_Vx_kk(self, state, ins):
        if state.registers[ins.x] == imm8(ins):
            state.pc += 2

    def op_SNE_Vx_kk(self, state, ins):
        if state.registers[ins.x] != imm8(ins):
            state.pc += 2

    def op_SE_Vx_Vy(self, state, ins):
        if state.registers[ins.x] == state.registers[ins.y]:
            state.pc += 2

    def op_LD_Vx_kk(self, state, ins):
        state.registers[ins.x] = imm8(ins)

    # no carry flag for the immediate add
    def op_ADD_Vx_kk(self, state, ins):
        state.registers[ins.x] = (state.registers[ins.x] + imm8(ins)) & 0xFF

    # 8xy0..8xyE - math and logic between two registers
    def op_LD_Vx_Vy(self, state, ins):
        state.registers[ins.x] = state.registers[ins.y]

    def op_OR(self, state, ins):
        state.registers[ins.x] |= state.registers[ins.y]

    def op_AND(self, state, ins):
        state.registers[ins.x] &= state.registers[ins.y]

    def op_XOR(self, state, ins):
        state.registers[ins.x] ^= state.registers[ins.y]

    def op_ADD(self, state, ins):
        V = state.registers
        s = V[ins.x] + V[ins.y]
        V[ins.x] = s & 0xFF
        V[FLAG] = 1 if s > 0xFF else 0

    def op_SUB(self, state, ins):
        V = state.registers
        vx, vy = V[ins.x], V[ins.y]
        V[ins.x] = (vx - vy) & 0xFF
        V[FLAG] = 1 if vx >= vy else 0

    def op_SHR(self, state, ins):
        V = state.registers
        vx = V[ins.x]
        V[FLAG] = vx & 1
        V[ins.x] = vx >> 1

    def op_SUBN(self, state, ins):
        V = state.registers
        vx, vy = V[ins.x], V[ins.y]
        V[ins.x] = (vy - vx) & 0xFF
        V[FLAG] = 1 if vy >= vx else 0

    def op_SHL(self, state, ins):
        V = state.registers
        vx = V[ins.x]
        V[FLAG] = vx >> 7
        V[ins.x] = (vx << 1) & 0xFF

    def op_SNE_Vx_Vy(self, state, ins):
        if state.registers[ins.x] != state.registers[ins.y]:
            state.pc += 2

    def op_LD_I(self, state, ins):
        state.index = addr12(ins)

    def op_JP_V0(self, state, ins):
        state.pc = addr12(ins) + state.registers[0]

    def op_RND(self, state, ins):
        state.registers[ins.x] = self.random_byte() & imm8(ins)

    def op_DRW(self, state, ins):
        """XOR an n-row sprite from memory[I] onto the screen at (Vx, Vy).

        The pixel index runs linearly: each row starts WIDTH after the
        previous one with no clipping, so a sprite crossing the right
        edge spills into the next display row and one crossing the
        bottom edge faults. VF is left untouched (no collision flag).
        """
        x = state.registers[ins.x]
        y = state.registers[ins.y]
        display = state.display
        pixel = y * WIDTH + x
        for row in range(ins.n):
            sprite = state.memory[state.index + row]
            for bit in range(8):
                if (sprite >> (7 - bit)) & 1:
                    display[pixel] = not display[pixel]
                pixel += 1
            pixel += WIDTH - 8
        state.draw_flag = True

    # Ex9E / ExA1 - SKP / SKNP
    def op_SKP(self, state, ins):
        if state.keys[state.registers[ins.x]]:
            state.pc += 2

    def op_SKNP(self, state, ins):
        if not state.keys[state.registers[ins.x]]:
            state.pc += 2

    # Fx07..Fx65 - timers, memory, I, and key input
    def op_LD_Vx_DT(self, state, ins):
        state.registers[ins.x] = state.delay_timer

    def op_WAITKEY(self, state, ins):
        # stall: rewind pc so this instruction is fetched again next cycle
        for key, held in enumerate(state.keys):
            if held:
                state.registers[ins.x] = key
                return
        state.pc -= 2

    def op_LD_DT_Vx(self, state, ins):
        state.delay_timer = state.registers[ins.x]

    def op_LD_ST_Vx(self, state, ins):
        state.sound_timer = state.registers[ins.x]

    def op_ADD_I_Vx(self, state, ins):
        state.index = (state.index + state.registers[ins.x]) & 0xFFFF

    def op_FONT(self, state, ins):
        state.index = state.registers[ins.x] * GLYPH_SIZE

    def op_BCD(self, state, ins):
        val = state.registers[ins.x]
        state.memory[state.index] = val // 100
        state.memory[state.index + 1] = (val // 10) % 10
        state.memory[state.index + 2] = val % 10

    def op_STORE(self, state, ins):
        for i in range(ins.x + 1):
            state.memory[state.index + i] = state.registers[i]

    def op_LOAD(self, state, ins):
        for i in range(ins.x + 1):
            state.registers[i] = state.memory[state.index + i]
