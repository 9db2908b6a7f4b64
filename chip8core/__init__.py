"""CHIP-8 interpreter core package."""

from chip8core.state import EmulatorState, StackState, create_state
from chip8core.emulator import execute, fetch, step, load_rom, tick_timers, record_key
from chip8core.decode import Instruction, decode
from chip8core.display import framebuffer
from chip8core.errors import (
    Chip8Error, OutOfBounds, CapacityExceeded, StackUnderflow, UnknownOpcode,
    InvalidRegister, ProgramNotLoaded,
)
from chip8core.interpreter import Interpreter, InterpreterConfig, InterpreterStatus, AdvanceResult
from chip8core.constants import *
from chip8core.driver import run_frames
from chip8core.rendering import chip8_display_to_rgb, create_color_scheme, batch_render, save_frame

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_rom",
    "tick_timers",
    "record_key",
    "Instruction",
    "decode",
    "framebuffer",
    "Chip8Error",
    "OutOfBounds",
    "CapacityExceeded",
    "StackUnderflow",
    "UnknownOpcode",
    "InvalidRegister",
    "ProgramNotLoaded",
    "Interpreter",
    "InterpreterConfig",
    "InterpreterStatus",
    "AdvanceResult",
    "run_frames",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "batch_render",
    "save_frame",
]
