"""Console logging utilities for the emulator and its driver.

Provides a small leveled logger with colored, time-stamped output, helpers to
dump configuration and CPU state, and a tqdm progress bar factory for headless
runs.
"""

import sys
import time
from typing import Any, Dict, Optional

from tqdm import tqdm


class ConsoleLogger:
    """Flexible console logger with level filtering and ANSI colors."""

    LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    def __init__(
        self,
        name: str = "chip8emu",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.stream = stream if stream is not None else sys.stdout
        self.log_level = log_level.upper()
        if self.log_level not in self.LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(self.LEVELS)}")
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in self.LEVELS + ("RESET",)}
        )

        self.level_order = {level: i for i, level in enumerate(self.LEVELS)}

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def is_enabled_for(self, level: str) -> bool:
        return self._should_log(level)

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)

    def log_config(self, config: Dict[str, Any]):
        """Log a configuration mapping, one key per line."""
        self.info("=" * 60)
        self.info("Configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_registers(self, state, level: str = "INFO"):
        """Log PC, I, timers and the register file of an emulator state."""
        if not self._should_log(level):
            return
        self.log(
            level,
            f"PC: 0x{int(state.pc):03X}  I: 0x{int(state.I):03X}  "
            f"SP: {int(state.stack.pointer)}  DT: {int(state.delay_timer)}  ST: {int(state.sound_timer)}"
        )
        for row in range(0, 16, 4):
            self.log(level, "  " + " ".join(f"V{j:X}:{int(state.V[j]):02X}" for j in range(row, row + 4)))


def build_progress_bar(n: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """Create a tqdm bar counting emulated frames."""
    if desc is None:
        desc = f"Emulating ({n:,} frames)"

    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)

    return tqdm(total=n, desc=desc, unit="frame", **kwargs)
