"""CHIP-8 execution errors.

Every failure raised by the core derives from :class:`Chip8Error`, so a
driver can catch the whole family at the frame boundary.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all CHIP-8 core failures."""


class OutOfBounds(Chip8Error):
    """Address, pixel or key index outside a fixed-size store."""

    def __init__(self, message: str, address: Optional[int] = None):
        super().__init__(message)
        self.address = address


class CapacityExceeded(Chip8Error):
    """Load would overflow memory."""

    def __init__(self, size: int, base: int, capacity: int):
        super().__init__(
            f"data of {size} bytes does not fit into memory of {capacity} bytes at 0x{base:03X}"
        )
        self.size = size
        self.base = base
        self.capacity = capacity


class StackUnderflow(Chip8Error):
    """Return executed with an empty call stack."""

    def __init__(self):
        super().__init__("return with empty call stack")


class UnknownOpcode(Chip8Error):
    """Instruction word the decoder cannot classify."""

    def __init__(self, opcode: int):
        super().__init__(f"unknown instruction: 0x{opcode:04X}")
        self.opcode = opcode


class InvalidRegister(Chip8Error):
    """Register index outside 0-15."""

    def __init__(self, index: int):
        super().__init__(f"invalid register V{index}")
        self.index = index


class ProgramNotLoaded(Chip8Error):
    """Execution requested before any program was loaded."""

    def __init__(self):
        super().__init__("no program loaded")
