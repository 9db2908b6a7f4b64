"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import Jump, Call, JumpOffset, SkipKeyPressed, SkipKeyReleased
from chip8core.constants import ADDRESS_MASK
from chip8core.stack import push


def execute_jump(state: EmulatorState, instruction: Jump) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.uint16(instruction.address))


def execute_call(state: EmulatorState, instruction: Call) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return state.replace(pc=state.pc + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.value
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.value
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def _key_pressed(state: EmulatorState, inst) -> bool:
    return bool(state.keypad[int(state.V[inst.x]) & 0xF])


execute_skip_if_key_pressed = make_skip_instruction(_key_pressed)

execute_skip_if_key_released = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst)
)


def execute_jump_with_offset(state: EmulatorState, instruction: JumpOffset) -> EmulatorState:
    """BNNN - Jump to NNN + V0 (legacy) or XNN + VX (modern)."""
    offset_register = instruction.x if state.modern_mode else 0
    jump_address = (instruction.address + int(state.V[offset_register])) & ADDRESS_MASK
    return state.replace(pc=jnp.uint16(jump_address))
