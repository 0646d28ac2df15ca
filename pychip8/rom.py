from pathlib import Path

from .log import logger


def load_rom(path):
    """Read a raw program image from disk; MachineState.load_program checks its size."""
    rom = Path(path).read_bytes()
    logger.info("Loading ROM: %s (%d bytes)", path, len(rom))
    return rom
