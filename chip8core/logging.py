"""Console logging utilities for the CHIP-8 core.

A small levelled logger with optional colours and elapsed-time stamps, plus
formatters that render emulator state in a compact, human-readable way.
"""

import sys
import time
from typing import TextIO, Optional

from chip8core.constants import NUM_REGISTERS


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConsoleLogger:
    """Console logger with level filtering, colours and timestamps."""

    def __init__(
        self,
        name: str = "chip8core",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.stream = stream if stream is not None else sys.stdout
        self.set_level(log_level)
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
            else {k: "" for k in LEVELS + ("RESET",)}
        )

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = level

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LEVELS.index(level.upper()) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            level_str = f"{self.colors[level]}{level_str}{self.colors['RESET']}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if self.is_enabled_for(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

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


def format_registers(state) -> str:
    """One-line dump of the register file, e.g. ``PC=0x202 I=0x050 V0=0C ...``."""
    registers = " ".join(f"V{i:X}={int(state.V[i]):02X}" for i in range(NUM_REGISTERS))
    return (
        f"PC=0x{int(state.pc):03X} I=0x{int(state.I):03X} SP={state.stack.depth} "
        f"DT={int(state.delay_timer)} ST={int(state.sound_timer)} {registers}"
    )
