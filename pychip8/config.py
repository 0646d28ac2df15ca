# ---- Configuration ----
# Fixed machine constants plus the defaults the command line can override.

WIDTH, HEIGHT = 64, 32
MEMORY_SIZE = 4096
NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG = 0xF              # VF: carry / borrow flag register
PROGRAM_START = 0x200   # conventional load address
GLYPH_SIZE = 5          # bytes per font glyph

TIMER_DIVIDER = 10      # decrement timers once every N cycles
CPU_HZ = 6000           # default rate cap (cycles per second)
FRAME_HZ = 60
SCALE = 10

# Standard CHIP-8 fontset (binary pixel patterns)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
]  # notice 80 bytes
