"""CHIP-8 display operations (DXYN).

Two sprite models are available. The default one treats every sprite byte as
a single pixel switch: only a byte equal to 0xFF toggles the pixel at
``64 * VY + VX + row`` and VF reports a lit pixel being erased on the last
drawn row. The bit-plane model, enabled with ``bitplane_sprites``, decodes each
byte as eight pixel columns the way conventional CHIP-8 programs expect.
"""

import jax.numpy as jnp
from chip8emu.bounds import check_read, check_pixel
from chip8emu.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER, MEMORY_SIZE
from chip8emu.state import EmulatorState
from chip8emu.decode import DecodedInstruction

# Pre-computed coordinate grids for bit-plane drawing, shaped (row, column)
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def execute_draw_bytes(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Toggle one pixel per sprite row whose byte is 0xFF."""
    height = instruction.n
    if height == 0:
        return state

    index = int(state.I)
    origin = SCREEN_WIDTH * int(state.V[instruction.y]) + int(state.V[instruction.x])
    check_read(index, height)
    check_pixel(origin + height - 1)

    offsets = origin + jnp.arange(height)
    hits = state.memory[index:index + height] == 0xFF
    before = state.display[offsets]

    # VF is cleared before every row, so only the last row decides it
    erased = before[-1] & hits[-1]
    return state.replace(
        display=state.display.at[offsets].set(before ^ hits),
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(erased, jnp.uint8))
    )


def execute_draw_bitplane(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw 8-pixel-wide sprite at (VX, VY) with height N, clipped at the edges."""
    index = int(state.I)
    check_read(index, instruction.n)

    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT

    in_sprite = (xx >= sprite_x) & (xx < sprite_x + 8) & (yy >= sprite_y) & (yy < sprite_y + instruction.n)

    row_offset = yy - sprite_y
    col_offset = xx - sprite_x
    sprite_bytes = state.memory[jnp.clip(index + row_offset, 0, MEMORY_SIZE - 1)]
    bits = (sprite_bytes >> jnp.clip(7 - col_offset, 0, 7)) & 1
    sprite = (bits == 1) & in_sprite

    screen = state.display.reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
    collision = jnp.any(screen & sprite)
    return state.replace(
        display=(screen ^ sprite).reshape(-1),
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw using the sprite model selected on the state."""
    if state.bitplane_sprites:
        return execute_draw_bitplane(state, instruction)
    return execute_draw_bytes(state, instruction)
