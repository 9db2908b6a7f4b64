"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import ClearScreen, Return
from chip8core.display import clear
from chip8core.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: ClearScreen) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: Return) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=jnp.uint16(address))
