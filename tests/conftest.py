"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8emu import create_state, Chip8, Chip8Config, SCREEN_WIDTH


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state with the core instruction set."""
    return create_state()


@pytest.fixture
def extended_state():
    """Provide a fresh state with the extended opcodes enabled."""
    return create_state().replace(extended=True)


@pytest.fixture
def bitplane_state():
    """Provide a fresh state drawing sprites bit by bit."""
    return create_state().replace(bitplane_sprites=True)


@pytest.fixture
def machine():
    """Provide a host-facing machine with default configuration."""
    return Chip8(Chip8Config())


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=3, VF=1)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def pixel(state, x, y):
    """Read pixel (x, y) from the flat row-major display."""
    return bool(state.display[y * SCREEN_WIDTH + x])
