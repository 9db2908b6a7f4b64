"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import SetRegister, AddRegister, SetIndex, Random
from chip8core.constants import BYTE_MASK


def execute_set(state: EmulatorState, instruction: SetRegister) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.value))


def execute_add(state: EmulatorState, instruction: AddRegister) -> EmulatorState:
    """7XNN - Add NN to VX without touching the carry flag."""
    result = (int(state.V[instruction.x]) + instruction.value) & BYTE_MASK
    return state.replace(V=state.V.at[instruction.x].set(result))


def execute_set_index(state: EmulatorState, instruction: SetIndex) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.uint16(instruction.address))


def execute_random(state: EmulatorState, instruction: Random) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.mask), rng=key)
