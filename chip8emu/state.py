"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8emu.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, DISPLAY_SIZE, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, STACK_SIZE
)


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls. `pointer` indexes the next free slot."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is a flat row-major vector: pixel (x, y) lives at y * 64 + x.
    VF (``V[15]``) is both a general register and the carry/borrow/collision
    flag, so opcodes that set the flag overwrite whatever a program kept there.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros(DISPLAY_SIZE, dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    extended: bool = field(pytree_node=False, default=False)
    bitplane_sprites: bool = field(pytree_node=False, default=False)


def create_state(
    rng: jax.Array = jax.random.PRNGKey(0),
    extended: bool = False,
    bitplane_sprites: bool = False,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng, extended=extended, bitplane_sprites=bitplane_sprites)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))
