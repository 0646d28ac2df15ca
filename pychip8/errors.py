class Chip8Error(Exception):
    """Base class for every fatal emulation fault."""


class StackUnderflowError(Chip8Error):
    """00EE executed with nothing on the stack."""


class ProgramTooLargeError(Chip8Error):
    """Program image does not fit between PROGRAM_START and the end of memory."""


class MemoryBoundsError(Chip8Error):
    """A memory, display, key or register index fell outside its range."""


class MachineHaltedError(Chip8Error):
    """A cycle was requested after the machine stopped on a fault."""
