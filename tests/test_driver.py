"""Tests for the pygame driver entry point, run headless."""

import pygame
import pytest
from chip8emu import Chip8
from chip8emu.driver import KEY_MAP, parse_args, handle_key_event, main


def write_rom(tmp_path, *words):
    rom = tmp_path / "program.ch8"
    rom.write_bytes(b"".join(word.to_bytes(2, "big") for word in words))
    return str(rom)


def test_key_map_covers_keypad():
    assert sorted(KEY_MAP.values()) == list(range(16))


def test_parse_args(tmp_path):
    rom_path, config = parse_args(["game.ch8", "ticks_per_frame=20", "headless=true"])
    assert rom_path == "game.ch8"
    assert config.ticks_per_frame == 20
    assert config.headless is True


@pytest.mark.parametrize("argv", [[], ["ticks_per_frame=20"]])
def test_parse_args_requires_path(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_handle_key_event():
    machine = Chip8()
    handle_key_event(machine, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q))
    assert machine.state.keypad[0x4]
    handle_key_event(machine, pygame.event.Event(pygame.KEYUP, key=pygame.K_q))
    assert not machine.state.keypad[0x4]


def test_unmapped_key_is_ignored():
    machine = Chip8()
    handle_key_event(machine, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F12))
    assert not machine.state.keypad.any()


def test_main_headless_runs(tmp_path, capsys):
    rom = write_rom(tmp_path, 0x6A05, 0x1202)
    assert main([rom, "headless=true", "frames=2", "ticks_per_frame=3"]) == 0
    assert "Executed 6 instructions" in capsys.readouterr().out


def test_main_reports_fault(tmp_path, capsys):
    rom = write_rom(tmp_path, 0x9120)
    assert main([rom, "headless=true", "frames=1"]) == 1
    assert "Unimplemented opcode 0x9120" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.ch8"), "headless=true"]) == 1


def test_main_bad_override(tmp_path, capsys):
    rom = write_rom(tmp_path, 0x1200)
    assert main([rom, "bogus=1"]) == 1


def test_main_unknown_color_scheme(tmp_path, capsys):
    rom = write_rom(tmp_path, 0x1200)
    assert main([rom, "color_scheme=nope"]) == 1
    assert "Unknown color scheme 'nope'" in capsys.readouterr().err


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err
