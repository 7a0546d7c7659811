"""Machine and host configuration."""

import dataclasses
from typing import Sequence

from flax.struct import dataclass
from omegaconf import OmegaConf

from chip8emu.logging import ConsoleLogger
from chip8emu.rendering import COLOR_SCHEMES


@dataclass
class Chip8Config:
    """Settings shared by the machine facade and the pygame driver.

    Attributes:
        ticks_per_frame: Instructions executed per timer tick (~600 Hz at 10 x 60 fps)
        fps: Frame and timer rate in Hz
        extended: Enable the opcodes beyond the core set (8XY6/7/E, 9XY0, BNNN, CXNN, EX9E/A1, FX07/0A/15/18/33)
        bitplane_sprites: Decode sprite bytes bit by bit instead of the byte-equality model
        seed: Seed for the CXNN random source
        trace: Log every executed instruction at DEBUG level
        log_level: Console logger threshold
        scale: Window pixels per CHIP-8 pixel
        color_scheme: Rendering palette name, see chip8emu.rendering.create_color_scheme
        headless: Run without a window
        frames: Number of frames to run in headless mode
    """
    ticks_per_frame: int = 10
    fps: int = 60
    extended: bool = False
    bitplane_sprites: bool = False
    seed: int = 0
    trace: bool = False
    log_level: str = "INFO"
    scale: int = 15
    color_scheme: str = "white"
    headless: bool = False
    frames: int = 600

    def __post_init__(self):
        for name in ("ticks_per_frame", "fps", "scale"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.frames < 0:
            raise ValueError(f"frames must be non-negative, got {self.frames}")
        if self.log_level.upper() not in ConsoleLogger.LEVELS:
            raise ValueError(f"Unknown log level '{self.log_level}'. Available: {list(ConsoleLogger.LEVELS)}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(f"Unknown color scheme '{self.color_scheme}'. Available: {list(COLOR_SCHEMES)}")


def load_config(overrides: Sequence[str] = ()) -> Chip8Config:
    """Build a config from ``key=value`` overrides applied on top of the defaults.

    Unknown keys and values of the wrong type raise OmegaConf errors.
    """
    base = OmegaConf.structured(Chip8Config)
    # Frozen dataclasses come back read-only; overrides still have to merge in
    OmegaConf.set_readonly(base, False)
    merged = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))
    return Chip8Config(**OmegaConf.to_container(merged))


def config_to_dict(config: Chip8Config) -> dict:
    return dataclasses.asdict(config)
