"""Host-facing CHIP-8 machine.

``Chip8`` wraps the pure functions of ``chip8emu.emulator`` behind the small
mutable interface a frame loop expects: construct, ``load`` a program, call
``tick`` a few times and ``tick_timers`` once per frame, forward key events
with ``keypress`` and present ``get_display()``.
"""

from typing import Optional

import jax
import jax.numpy as jnp

from chip8emu.config import Chip8Config
from chip8emu.decode import decode
from chip8emu.emulator import (
    fetch, execute, load_program, load_rom, tick_timers, press_key, get_display
)
from chip8emu.logging import ConsoleLogger
from chip8emu.state import EmulatorState, create_state


class Chip8:
    """Single CHIP-8 machine instance.

    Not thread-safe: callers serialize access. A state is committed only after
    an instruction has fully executed, so a raised ``Chip8Error`` leaves the
    machine as it was before the faulting ``tick``.
    """

    def __init__(self, config: Optional[Chip8Config] = None, logger: Optional[ConsoleLogger] = None):
        self.config = config if config is not None else Chip8Config()
        self.logger = logger if logger is not None else ConsoleLogger(log_level=self.config.log_level)
        self.instruction_count = 0
        self.state = self._initial_state()

    def _initial_state(self) -> EmulatorState:
        return create_state(
            jax.random.PRNGKey(self.config.seed),
            extended=self.config.extended,
            bitplane_sprites=self.config.bitplane_sprites,
        )

    def reset(self):
        """Restore the exact state of a freshly constructed machine."""
        self.state = self._initial_state()
        self.instruction_count = 0

    def load(self, data: bytes):
        """Copy program bytes to 0x200. Registers, stack and timers are kept."""
        self.state = load_program(self.state, data)
        self.logger.debug(f"Loaded {len(data)} bytes at 0x200")

    def load_file(self, filename: str):
        self.state = load_rom(self.state, filename)
        self.logger.info(f"Loaded: {filename}")

    def tick(self):
        """Fetch, decode and execute one instruction."""
        state, instruction = fetch(self.state)
        instruction = int(instruction)
        if self.config.trace:
            decoded = decode(instruction)
            self.logger.debug(f"0x{int(self.state.pc):03X}: {instruction:04X} {decoded.op.name}")
        self.state = execute(state, instruction)
        self.instruction_count += 1

    def tick_timers(self) -> bool:
        """Decrement the timers; True when the sound timer has just expired."""
        self.state, sound_expired = tick_timers(self.state)
        if sound_expired:
            self.logger.debug("Sound timer expired")
        return sound_expired

    def run_frame(self) -> bool:
        """Run ``ticks_per_frame`` instructions followed by one timer tick."""
        for _ in range(self.config.ticks_per_frame):
            self.tick()
        return self.tick_timers()

    def keypress(self, index: int, pressed: bool):
        self.state = press_key(self.state, index, pressed)

    def get_display(self) -> jnp.ndarray:
        """Read-only flat 64x32 boolean framebuffer (index = y * 64 + x)."""
        return get_display(self.state)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def registers(self) -> list[int]:
        return [int(v) for v in self.state.V]

    @property
    def index_register(self) -> int:
        return int(self.state.I)

    @property
    def stack_pointer(self) -> int:
        return int(self.state.stack.pointer)

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)
