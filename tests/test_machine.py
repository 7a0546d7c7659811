"""Tests for the host-facing Chip8 machine."""

import io

import pytest
import jax.numpy as jnp
from chip8emu import (
    Chip8, Chip8Config, UnsupportedOpcodeError, KeyIndexError, StackUnderflowError, FONT_DATA
)
from chip8emu.logging import ConsoleLogger


def program(*words):
    """Assemble 16-bit words into big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)


def assert_fresh(machine):
    assert machine.pc == 0x200
    assert machine.registers == [0] * 16
    assert machine.index_register == 0
    assert machine.stack_pointer == 0
    assert machine.delay_timer == 0
    assert machine.sound_timer == 0
    assert not jnp.any(machine.get_display())
    assert not jnp.any(machine.state.keypad)
    assert [int(b) for b in machine.state.memory[:80]] == FONT_DATA
    assert not jnp.any(machine.state.memory[80:])


class TestLifecycle:
    """Construction, reset and loading."""

    def test_new_machine(self, machine):
        assert_fresh(machine)

    def test_reset_restores_fresh_state(self, machine):
        machine.load(program(0x6A05, 0x2300, 0xA123))
        machine.tick()
        machine.tick()
        machine.keypress(3, True)
        machine.state = machine.state.replace(
            display=machine.state.display.at[10].set(True),
            delay_timer=jnp.astype(7, jnp.uint8),
        )

        machine.reset()

        assert_fresh(machine)
        assert machine.instruction_count == 0

    def test_load_keeps_cpu_state(self, machine):
        machine.load(program(0x6A05))
        machine.tick()
        machine.load(program(0x0000))
        assert machine.registers[0xA] == 5
        assert machine.pc == 0x202

    def test_load_file(self, machine, tmp_path):
        rom = tmp_path / "loop.ch8"
        rom.write_bytes(program(0x1200))
        machine.load_file(str(rom))
        machine.tick()
        assert machine.pc == 0x200


class TestExecutionProperties:
    """End-to-end programs run through tick()."""

    def test_set_index(self, machine):
        machine.load(bytes([0xA2, 0x23]))
        machine.tick()
        assert machine.index_register == 0x223
        assert machine.pc == 0x202

    def test_jump_loop(self, machine):
        machine.load(program(0x1204, 0x0000, 0x1200))
        expected = [0x204, 0x200] * 10
        seen = []
        for _ in expected:
            machine.tick()
            seen.append(machine.pc)
        assert seen == expected
        assert machine.registers == [0] * 16
        assert not jnp.any(machine.get_display())

    def test_add_immediate_keeps_vf(self, machine):
        machine.load(program(0x6F77, 0x6A05, 0x7A10))
        for _ in range(3):
            machine.tick()
        assert machine.registers[0xA] == 0x15
        assert machine.registers[0xF] == 0x77

    def test_add_registers_with_carry(self, machine):
        machine.load(program(0x61FA, 0x620A, 0x8124))
        for _ in range(3):
            machine.tick()
        assert machine.registers[1] == 4
        assert machine.registers[0xF] == 1

    def test_clear_after_draws(self, machine):
        machine.load(program(
            0xA300,  # I = 0x300
            0x6005,  # V0 = 5
            0xD013,  # draw 3 rows
            0x6101,  # V1 = 1
            0xD013,
            0x00E0,
        ))
        machine.state = machine.state.replace(
            memory=machine.state.memory.at[0x300:0x303].set(jnp.array([0xFF] * 3, dtype=jnp.uint8))
        )
        for _ in range(5):
            machine.tick()
        assert jnp.any(machine.get_display())

        machine.tick()

        assert not jnp.any(machine.get_display())

    def test_store_load_round_trip(self, machine):
        machine.load(program(0x6011, 0x6122, 0x6233, 0xA400, 0xF355, 0x6000, 0x6100, 0x6200, 0xF365))
        for _ in range(9):
            machine.tick()
        assert machine.registers[:3] == [0x11, 0x22, 0x33]

    def test_call_and_return(self, machine):
        machine.load(program(0x2206, 0x1202, 0x0000, 0x00EE))
        machine.tick()  # call 0x206
        assert machine.pc == 0x206
        assert machine.stack_pointer == 1
        machine.tick()  # return
        assert machine.pc == 0x202
        assert machine.stack_pointer == 0


class TestFaults:
    """Faults abort the tick without committing any state."""

    def test_unsupported_opcode(self, machine):
        machine.load(program(0x9120))
        with pytest.raises(UnsupportedOpcodeError) as excinfo:
            machine.tick()
        assert excinfo.value.opcode == 0x9120
        assert machine.pc == 0x200
        assert machine.instruction_count == 0

    def test_extended_config_accepts_9xy0(self):
        machine = Chip8(Chip8Config(extended=True))
        machine.load(program(0x9120))
        machine.tick()
        assert machine.pc == 0x202

    def test_return_without_call(self, machine):
        machine.load(program(0x00EE))
        with pytest.raises(StackUnderflowError):
            machine.tick()
        assert machine.pc == 0x200

    def test_keypress_out_of_range(self, machine):
        with pytest.raises(KeyIndexError):
            machine.keypress(16, True)


class TestFrames:
    """Timer ticks and frame batching."""

    def test_tick_does_not_touch_timers(self, machine):
        machine.load(program(0x1200))
        machine.state = machine.state.replace(delay_timer=jnp.astype(3, jnp.uint8))
        for _ in range(5):
            machine.tick()
        assert machine.delay_timer == 3

    def test_tick_timers_signals_expiry(self, machine):
        machine.state = machine.state.replace(sound_timer=jnp.astype(1, jnp.uint8))
        assert machine.tick_timers() is True
        assert machine.tick_timers() is False
        assert machine.sound_timer == 0

    def test_run_frame(self):
        machine = Chip8(Chip8Config(ticks_per_frame=4))
        machine.load(program(0x1200))
        machine.state = machine.state.replace(delay_timer=jnp.astype(2, jnp.uint8))

        expired = machine.run_frame()

        assert machine.instruction_count == 4
        assert machine.delay_timer == 1
        assert expired is False

    def test_keypress_updates_keypad(self, machine):
        machine.keypress(0xA, True)
        assert machine.state.keypad[0xA]
        machine.keypress(0xA, False)
        assert not machine.state.keypad[0xA]


def test_trace_logging():
    """With trace enabled every executed instruction is logged."""
    stream = io.StringIO()
    logger = ConsoleLogger(log_level="DEBUG", stream=stream, show_timestamps=False)
    machine = Chip8(Chip8Config(trace=True), logger)
    machine.load(program(0x6A05))

    machine.tick()

    output = stream.getvalue()
    assert "0x200: 6A05 SET_IMM" in output
    assert "[   DEBUG][chip8emu]" in output
