"""Main CHIP-8 emulator execution engine.

Every function here is pure: it takes an ``EmulatorState`` and returns a new
one. Bounds are checked before the new state is built, so an instruction that
faults leaves the caller's state exactly as it was.
"""

from types import MappingProxyType

import jax.numpy as jnp
from chip8emu.bounds import check_read
from chip8emu.constants import PROGRAM_START, MAX_PROGRAM_SIZE, NUM_KEYS
from chip8emu.decode import Opcode, decode
from chip8emu.errors import KeyIndexError, ProgramTooLargeError, UnsupportedOpcodeError
from chip8emu.state import EmulatorState
from chip8emu.instructions.system import no_op, execute_clear_screen, execute_return
from chip8emu.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chip8emu.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor, execute_alu_add,
    execute_alu_sub_xy, execute_alu_shift_right, execute_alu_sub_yx, execute_alu_shift_left
)
from chip8emu.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8emu.instructions.display import execute_display
from chip8emu.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

CORE_INSTRUCTIONS = MappingProxyType({
    Opcode.NOP: no_op,
    Opcode.CLEAR_SCREEN: execute_clear_screen,
    Opcode.RETURN: execute_return,
    Opcode.JUMP: execute_jump,
    Opcode.CALL: execute_call,
    Opcode.SKIP_EQ_IMM: execute_skip_if_equal_immediate,
    Opcode.SKIP_NE_IMM: execute_skip_if_not_equal_immediate,
    Opcode.SKIP_EQ_REG: execute_skip_if_equal_register,
    Opcode.SET_IMM: execute_set,
    Opcode.ADD_IMM: execute_add,
    Opcode.MOVE: execute_alu_set,
    Opcode.OR: execute_alu_or,
    Opcode.AND: execute_alu_and,
    Opcode.XOR: execute_alu_xor,
    Opcode.ADD: execute_alu_add,
    Opcode.SUB: execute_alu_sub_xy,
    Opcode.SET_INDEX: execute_set_index,
    Opcode.DRAW: execute_display,
    Opcode.ADD_INDEX: execute_add_to_index,
    Opcode.FONT: execute_font_character,
    Opcode.STORE: execute_store_registers,
    Opcode.LOAD: execute_load_registers,
})

EXTENDED_INSTRUCTIONS = MappingProxyType({
    **CORE_INSTRUCTIONS,
    Opcode.SHIFT_RIGHT: execute_alu_shift_right,
    Opcode.SUBN: execute_alu_sub_yx,
    Opcode.SHIFT_LEFT: execute_alu_shift_left,
    Opcode.SKIP_NE_REG: execute_skip_if_not_equal_register,
    Opcode.JUMP_OFFSET: execute_jump_with_offset,
    Opcode.RANDOM: execute_random,
    Opcode.SKIP_KEY: execute_skip_if_key,
    Opcode.SKIP_NOT_KEY: execute_skip_if_not_key,
    Opcode.GET_DELAY: execute_get_delay_timer,
    Opcode.WAIT_KEY: execute_wait_for_key,
    Opcode.SET_DELAY: execute_set_delay_timer,
    Opcode.SET_SOUND: execute_set_sound_timer,
    Opcode.BCD: execute_bcd_conversion,
})


def instruction_table(state: EmulatorState):
    """Dispatch table active for this state."""
    return EXTENDED_INSTRUCTIONS if state.extended else CORE_INSTRUCTIONS


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    handler = instruction_table(state).get(decoded_instruction.op)
    if handler is None:
        raise UnsupportedOpcodeError(decoded_instruction.raw)
    return handler(state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    check_read(pc, 2)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=jnp.astype(pc + 2, jnp.uint16)), instruction


def tick(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch and execute one instruction; returns the new state and the word executed."""
    state, instruction = fetch(state)
    instruction = int(instruction)
    return execute(state, instruction), instruction


def tick_timers(state: EmulatorState) -> tuple[EmulatorState, bool]:
    """Decrement both timers once.

    Returns the new state and whether the sound timer just went from 1 to 0,
    which is the moment a host should emit its tone.
    """
    delay = int(state.delay_timer)
    sound = int(state.sound_timer)
    sound_expired = sound == 1
    state = state.replace(
        delay_timer=jnp.astype(max(delay - 1, 0), jnp.uint8),
        sound_timer=jnp.astype(max(sound - 1, 0), jnp.uint8),
    )
    return state, sound_expired


def press_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Set or clear one of the 16 keypad flags."""
    if not 0 <= index < NUM_KEYS:
        raise KeyIndexError(index)
    return state.replace(keypad=state.keypad.at[index].set(bool(pressed)))


def get_display(state: EmulatorState) -> jnp.ndarray:
    """Flat row-major 64x32 boolean framebuffer."""
    return state.display


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Copy program bytes into CHIP-8 memory starting at 0x200."""
    if len(data) > MAX_PROGRAM_SIZE:
        raise ProgramTooLargeError(len(data), MAX_PROGRAM_SIZE)
    if not len(data):
        return state
    rom_array = jnp.array(list(data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(data)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
