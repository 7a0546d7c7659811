"""Explicit range checks run before every indexed memory or display access."""

from chip8emu.constants import MEMORY_SIZE, DISPLAY_SIZE, FONT_END
from chip8emu.errors import MemoryAccessError


def check_read(address: int, length: int = 1) -> None:
    """Raise unless memory[address:address + length] lies inside RAM."""
    if length <= 0:
        return
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(f"Read of {length} byte(s) outside memory", address)


def check_write(address: int, length: int = 1) -> None:
    """Like check_read, and additionally refuse writes into the font table."""
    if length <= 0:
        return
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(f"Write of {length} byte(s) outside memory", address)
    if address < FONT_END:
        raise MemoryAccessError("Write into reserved font region", address)


def check_pixel(offset: int) -> None:
    if offset < 0 or offset >= DISPLAY_SIZE:
        raise MemoryAccessError("Pixel offset outside display", offset)
