"""Interpreter: the owning context object for one CHIP-8 machine.

The interpreter is the only thing a front end talks to. Its contract is
``load``, ``advance``, ``framebuffer``, ``submit_key`` and ``tick_timers``;
any graphical, terminal or headless driver can be built on top of it.
"""

import enum
from typing import Optional

import jax
import numpy as np
from flax.struct import dataclass, field

from chip8core.constants import DEFAULT_TICKS_PER_FRAME, PROGRAM_START
from chip8core.display import framebuffer
from chip8core.emulator import step, load_rom, tick_timers, record_key
from chip8core.errors import Chip8Error, ProgramNotLoaded
from chip8core.logging import ConsoleLogger, format_registers
from chip8core.state import EmulatorState, create_state


@dataclass(frozen=True)
class InterpreterConfig:
    """Interpreter settings.

    Attributes:
        ticks_per_frame: Instructions executed by ``advance()`` without an explicit count
        modern_mode: Use modern (CHIP-48/SUPER-CHIP) quirks for BNNN, shifts and FX55/FX65
        seed: Seed of the PRNG key used by CXNN
        log_level: Minimum level printed by the default logger
    """
    ticks_per_frame: int = field(pytree_node=False, default=DEFAULT_TICKS_PER_FRAME)
    modern_mode: bool = field(pytree_node=False, default=True)
    seed: int = field(pytree_node=False, default=0)
    log_level: str = field(pytree_node=False, default="WARNING")


class InterpreterStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of one ``advance`` call.

    Attributes:
        ticks_executed: Cycles that completed before returning
        error: First failure encountered, or None when every tick ran
    """
    ticks_executed: int = field(pytree_node=False, default=0)
    error: Optional[Chip8Error] = field(pytree_node=False, default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


class Interpreter:
    """Single CHIP-8 machine driven by an external frame loop."""

    def __init__(self, config: Optional[InterpreterConfig] = None, logger: Optional[ConsoleLogger] = None):
        self.config = config if config is not None else InterpreterConfig()
        self.logger = logger if logger is not None else ConsoleLogger(log_level=self.config.log_level)
        self.reset()

    def reset(self):
        """Discard all machine state and return to IDLE."""
        self.state: EmulatorState = create_state(
            jax.random.PRNGKey(self.config.seed), modern_mode=self.config.modern_mode
        )
        self.status = InterpreterStatus.IDLE
        self.last_error: Optional[Chip8Error] = None

    def load(self, program: bytes):
        """Copy a program to 0x200 and point the program counter at it.

        Registers, stack, display, timers and keypad are left as they are.
        Raises CapacityExceeded, leaving the machine untouched, when the
        program does not fit.
        """
        try:
            self.state = load_rom(self.state, program)
        except Chip8Error as error:
            self.logger.error(f"Could not load program: {error}")
            raise
        self.status = InterpreterStatus.RUNNING
        self.logger.info(f"Loaded program of {len(program)} bytes at 0x{PROGRAM_START:03X}")

    def advance(self, ticks: Optional[int] = None) -> AdvanceResult:
        """Run up to ``ticks`` fetch-decode-execute cycles.

        Stops at the first failure. Cycles completed before the failure are
        kept; the failing cycle leaves no trace.
        """
        if ticks is None:
            ticks = self.config.ticks_per_frame
        if ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {ticks}")

        if self.status is InterpreterStatus.IDLE:
            result = AdvanceResult(ticks_executed=0, error=ProgramNotLoaded())
            self.last_error = result.error
            self.logger.warning(str(result.error))
            return result

        state = self.state
        executed = 0
        error = None
        for _ in range(ticks):
            try:
                state = step(state)
            except Chip8Error as failure:
                error = failure
                break
            executed += 1
        self.state = state
        self.last_error = error

        if error is not None:
            self.logger.error(
                f"Execution failed after {executed}/{ticks} ticks at PC=0x{int(state.pc):03X}: {error}"
            )
        elif self.logger.is_enabled_for("DEBUG"):
            self.logger.debug(f"Advanced {executed} ticks: {format_registers(state)}")
        return AdvanceResult(ticks_executed=executed, error=error)

    def framebuffer(self) -> np.ndarray:
        """Read-only (32, 64) boolean snapshot of the display."""
        return framebuffer(self.state.display)

    def submit_key(self, key: int, pressed: bool):
        """Record a key transition; the last write before a tick wins."""
        self.state = record_key(self.state, key, pressed)

    def tick_timers(self):
        """Decay delay and sound timers by one step (call at 60 Hz)."""
        self.state = tick_timers(self.state)

    @property
    def sound_active(self) -> bool:
        """Whether an external beeper should currently sound."""
        return int(self.state.sound_timer) > 0
