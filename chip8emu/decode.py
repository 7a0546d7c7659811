"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass


class Opcode(enum.Enum):
    """Every instruction variant the decoder recognises."""
    NOP = "0000"
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_EQ_IMM = "3XNN"
    SKIP_NE_IMM = "4XNN"
    SKIP_EQ_REG = "5XY0"
    SET_IMM = "6XNN"
    ADD_IMM = "7XNN"
    MOVE = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD = "8XY4"
    SUB = "8XY5"
    SHIFT_RIGHT = "8XY6"
    SUBN = "8XY7"
    SHIFT_LEFT = "8XYE"
    SKIP_NE_REG = "9XY0"
    SET_INDEX = "ANNN"
    JUMP_OFFSET = "BNNN"
    RANDOM = "CXNN"
    DRAW = "DXYN"
    SKIP_KEY = "EX9E"
    SKIP_NOT_KEY = "EXA1"
    GET_DELAY = "FX07"
    WAIT_KEY = "FX0A"
    SET_DELAY = "FX15"
    SET_SOUND = "FX18"
    ADD_INDEX = "FX1E"
    FONT = "FX29"
    BCD = "FX33"
    STORE = "FX55"
    LOAD = "FX65"
    UNKNOWN = "????"


# (mask, value, opcode): a word matches when word & mask == value.
# Checked in order, so exact patterns come before wider ones.
_PATTERNS = (
    (0xFFFF, 0x0000, Opcode.NOP),
    (0xFFFF, 0x00E0, Opcode.CLEAR_SCREEN),
    (0xFFFF, 0x00EE, Opcode.RETURN),
    (0xF000, 0x1000, Opcode.JUMP),
    (0xF000, 0x2000, Opcode.CALL),
    (0xF000, 0x3000, Opcode.SKIP_EQ_IMM),
    (0xF000, 0x4000, Opcode.SKIP_NE_IMM),
    (0xF00F, 0x5000, Opcode.SKIP_EQ_REG),
    (0xF000, 0x6000, Opcode.SET_IMM),
    (0xF000, 0x7000, Opcode.ADD_IMM),
    (0xF00F, 0x8000, Opcode.MOVE),
    (0xF00F, 0x8001, Opcode.OR),
    (0xF00F, 0x8002, Opcode.AND),
    (0xF00F, 0x8003, Opcode.XOR),
    (0xF00F, 0x8004, Opcode.ADD),
    (0xF00F, 0x8005, Opcode.SUB),
    (0xF00F, 0x8006, Opcode.SHIFT_RIGHT),
    (0xF00F, 0x8007, Opcode.SUBN),
    (0xF00F, 0x800E, Opcode.SHIFT_LEFT),
    (0xF00F, 0x9000, Opcode.SKIP_NE_REG),
    (0xF000, 0xA000, Opcode.SET_INDEX),
    (0xF000, 0xB000, Opcode.JUMP_OFFSET),
    (0xF000, 0xC000, Opcode.RANDOM),
    (0xF000, 0xD000, Opcode.DRAW),
    (0xF0FF, 0xE09E, Opcode.SKIP_KEY),
    (0xF0FF, 0xE0A1, Opcode.SKIP_NOT_KEY),
    (0xF0FF, 0xF007, Opcode.GET_DELAY),
    (0xF0FF, 0xF00A, Opcode.WAIT_KEY),
    (0xF0FF, 0xF015, Opcode.SET_DELAY),
    (0xF0FF, 0xF018, Opcode.SET_SOUND),
    (0xF0FF, 0xF01E, Opcode.ADD_INDEX),
    (0xF0FF, 0xF029, Opcode.FONT),
    (0xF0FF, 0xF033, Opcode.BCD),
    (0xF0FF, 0xF055, Opcode.STORE),
    (0xF0FF, 0xF065, Opcode.LOAD),
)


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Opcode
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def classify(instruction: int) -> Opcode:
    """Map a 16-bit word onto its instruction variant."""
    for mask, value, op in _PATTERNS:
        if instruction & mask == value:
            return op
    return Opcode.UNKNOWN


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        op=classify(instruction),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
