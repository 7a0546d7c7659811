"""Faults raised by the CHIP-8 execution engine.

Every fault is fatal for the running program: the engine never retries an
instruction and commits no state for an instruction that faults.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all emulator faults."""


class MemoryAccessError(Chip8Error):
    """Access outside memory or the display, or a write into the font region."""

    def __init__(self, message: str, address: Optional[int] = None):
        if address is not None:
            message = f"{message} (address 0x{address:04X})"
        super().__init__(message)
        self.address = address


class ProgramTooLargeError(MemoryAccessError):
    """Program does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"Program of {size} bytes exceeds {capacity} bytes of program space")
        self.size = size
        self.capacity = capacity


class StackError(Chip8Error):
    """Call stack misuse."""


class StackOverflowError(StackError):
    def __init__(self, depth: int):
        super().__init__(f"Call stack overflow at depth {depth}")
        self.depth = depth


class StackUnderflowError(StackError):
    def __init__(self):
        super().__init__("Return with an empty call stack")


class UnsupportedOpcodeError(Chip8Error):
    """Instruction word with no entry in the active dispatch table."""

    def __init__(self, opcode: int):
        super().__init__(f"Unimplemented opcode 0x{opcode:04X}")
        self.opcode = opcode


class KeyIndexError(Chip8Error, IndexError):
    def __init__(self, index: int):
        super().__init__(f"Key index {index} outside [0, 16)")
        self.index = index
