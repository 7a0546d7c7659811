"""
Thin pygame host for the CHIP-8 machine.

Usage: chip8emu path/to/program.ch8 [key=value ...]

Overrides map onto chip8emu.config.Chip8Config, e.g. ``ticks_per_frame=15
extended=true color_scheme=amber`` or ``headless=true frames=300``.
"""

import sys
from typing import Optional, Sequence

import pygame
from omegaconf.errors import OmegaConfBaseException

from chip8emu.config import Chip8Config, load_config, config_to_dict
from chip8emu.errors import Chip8Error
from chip8emu.logging import ConsoleLogger, build_progress_bar
from chip8emu.machine import Chip8
from chip8emu.rendering import chip8_display_to_rgb, create_color_scheme, display_to_text
from chip8emu.constants import SCREEN_WIDTH, SCREEN_HEIGHT

# Hex keypad      Keyboard
#   1 2 3 C       1 2 3 4
#   4 5 6 D       Q W E R
#   7 8 9 E       A S D F
#   A 0 B F       Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

USAGE = "Usage: chip8emu path/to/program [key=value ...]"


def parse_args(argv: Sequence[str]) -> tuple[str, Chip8Config]:
    """Split the program path from the config overrides."""
    if not argv or "=" in argv[0]:
        raise ValueError(USAGE)
    return argv[0], load_config(argv[1:])


def handle_key_event(machine: Chip8, event) -> None:
    """Forward a pygame key event to the keypad if it maps onto one."""
    if event.key in KEY_MAP:
        machine.keypress(KEY_MAP[event.key], event.type == pygame.KEYDOWN)


def run_headless(machine: Chip8, config: Chip8Config, logger: ConsoleLogger) -> None:
    """Run a fixed number of frames without opening a window."""
    beeps = 0
    with build_progress_bar(config.frames, disable=not sys.stderr.isatty()) as bar:
        for _ in range(config.frames):
            beeps += machine.run_frame()
            bar.update(1)

    logger.info(f"Executed {machine.instruction_count} instructions, {beeps} sound cue(s)")
    logger.log_registers(machine.state)
    if logger.is_enabled_for("DEBUG"):
        logger.debug("Display:\n" + display_to_text(machine.get_display()))


def run_window(machine: Chip8, config: Chip8Config, logger: ConsoleLogger) -> None:
    """Main frame loop: input, instructions, timers, present."""
    on_color, off_color = create_color_scheme(config.color_scheme)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
    pygame.display.set_caption("CHIP-8")
    clock = pygame.time.Clock()

    running = True
    try:
        while running:
            clock.tick(config.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    handle_key_event(machine, event)

            if machine.run_frame():
                # No tone generation; the cue is surfaced as a log line only
                logger.debug("Beep")

            frame = chip8_display_to_rgb(machine.get_display(), config.scale, on_color, off_color)
            surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        rom_path, config = parse_args(argv)
    except (ValueError, OmegaConfBaseException) as e:
        print(e, file=sys.stderr)
        return 1

    logger = ConsoleLogger(log_level=config.log_level)
    logger.log_config(config_to_dict(config))

    machine = Chip8(config, logger)
    try:
        machine.load_file(rom_path)
    except (OSError, Chip8Error) as e:
        logger.error(f"Could not load {rom_path}: {e}")
        return 1

    try:
        if config.headless:
            run_headless(machine, config, logger)
        else:
            run_window(machine, config, logger)
    except Chip8Error as e:
        logger.error(f"Program fault after {machine.instruction_count} instructions: {e}")
        logger.log_registers(machine.state, level="ERROR")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
