"""CHIP-8 emulator package."""

from chip8emu.state import EmulatorState, StackState, create_state
from chip8emu.emulator import (
    execute, fetch, tick, tick_timers, press_key, get_display, load_program, load_rom
)
from chip8emu.decode import DecodedInstruction, Opcode, decode
from chip8emu.errors import (
    Chip8Error, MemoryAccessError, ProgramTooLargeError, StackError, StackOverflowError,
    StackUnderflowError, UnsupportedOpcodeError, KeyIndexError
)
from chip8emu.config import Chip8Config, load_config
from chip8emu.machine import Chip8
from chip8emu.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "tick",
    "tick_timers",
    "press_key",
    "get_display",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "Opcode",
    "decode",
    "Chip8",
    "Chip8Config",
    "load_config",
    "Chip8Error",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnsupportedOpcodeError",
    "KeyIndexError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "DISPLAY_SIZE",
    "MEMORY_SIZE",
]
