"""Tests for memory and register operations."""

import pytest
from chip8emu import execute, UnsupportedOpcodeError
from conftest import set_registers


class TestBasicMemory:
    """Test basic memory operations."""

    def test_set_basic(self, fresh_state):
        """6XNN - Set VX = NN."""
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        assert state.V[0] == 0xA

    def test_add_basic(self, fresh_state):
        """7XNN - Add NN to VX."""
        state = set_registers(fresh_state, V1=0x10)
        state = execute(state, 0x7105)  # V1 += 5
        assert state.V[1] == 0x15

    def test_add_wraps_without_flag(self, fresh_state):
        """7XNN - Overflow wraps mod 256 and leaves VF alone."""
        state = set_registers(fresh_state, V1=0xFF, VF=0x33)
        state = execute(state, 0x7102)
        assert state.V[1] == 0x01
        assert state.V[15] == 0x33

    def test_add_to_vf_is_plain_addition(self, fresh_state):
        state = set_registers(fresh_state, VF=0xF0)
        state = execute(state, 0x7F20)
        assert state.V[15] == 0x10


class TestIndexRegister:
    """Test I register operations."""

    def test_set_index_basic(self, fresh_state):
        """ANNN - Set I register to NNN."""
        state = execute(fresh_state, 0xA123)  # I = 0x123
        assert state.I == 0x123

    def test_set_index_maximum(self, fresh_state):
        """ANNN - Set I register to maximum 12-bit value."""
        state = execute(fresh_state, 0xAFFF)  # I = 0xFFF
        assert state.I == 0xFFF

    def test_set_index_common_values(self, fresh_state):
        """ANNN - Test common memory addresses."""
        test_values = [0x200, 0x300, 0x500, 0x600, 0xA00, 0xEA0]

        for value in test_values:
            state = execute(fresh_state, 0xA000 | value)

            assert state.I == value, f"Failed to set I to 0x{value:03X}"


class TestRandom:
    """Test random number generation."""

    def test_random_core_unsupported(self, fresh_state):
        with pytest.raises(UnsupportedOpcodeError):
            execute(fresh_state, 0xC0FF)

    def test_random_zero_mask(self, extended_state):
        """CXNN - Random AND with 0x00 should always be 0."""
        state = set_registers(extended_state, V0=0x55)
        state = execute(state, 0xC000)
        assert state.V[0] == 0

    def test_random_respects_mask(self, extended_state):
        """CXNN - Result never has bits outside the mask."""
        state = extended_state
        for _ in range(10):
            state = execute(state, 0xC10F)
            assert int(state.V[1]) & 0xF0 == 0

    def test_random_advances_key(self, extended_state):
        state = execute(extended_state, 0xC0FF)
        assert not (state.rng == extended_state.rng).all()
