"""CHIP-8 ALU operations (8xxx).

Each ALU function maps (VX, VY) to (new VX, new VF). A VF of None leaves the
flag register untouched. 8XY4 and 8XY5 write VF before the arithmetic and then
read their operands again, so VF used as an operand sees the fresh flag and a
result targeting VF replaces it. The extended shifts and 8XY7 write VX first
and VF last.
"""

from typing import Optional

from chip8emu.constants import BYTE_MASK, FLAG_REGISTER
from chip8emu.state import EmulatorState
from chip8emu.decode import DecodedInstruction


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > BYTE_MASK)
    return result & BYTE_MASK, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when VX > VY."""
    flag = int(vx > vy)
    return (vx - vy) & BYTE_MASK, flag


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when VY > VX."""
    flag = int(vy > vx)
    return (vy - vx) & BYTE_MASK, flag


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & BYTE_MASK, (vx & 0x80) >> 7


def make_alu_instruction(alu_fn, flag_first: bool = False):
    """Factory binding an ALU function to the VX/VY register operands.

    With ``flag_first`` the flag is computed and stored in VF, then VX and VY
    are read again and the arithmetic runs on those values.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, vf = alu_fn(vx, vy)

        if flag_first:
            new_V = state.V.at[FLAG_REGISTER].set(vf)
            result, _ = alu_fn(int(new_V[instruction.x]), int(new_V[instruction.y]))
            return state.replace(V=new_V.at[instruction.x].set(result))

        new_V = state.V.at[instruction.x].set(result)
        if vf is not None:
            new_V = new_V.at[FLAG_REGISTER].set(vf)
        return state.replace(V=new_V)
    alu_instruction.__doc__ = alu_fn.__doc__
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add, flag_first=True)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy, flag_first=True)
execute_alu_shift_right = make_alu_instruction(alu_shift_right)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_alu_instruction(alu_shift_left)
