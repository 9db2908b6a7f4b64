"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8core.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    NUM_REGISTERS, NUM_KEYS,
)
from chip8core.memory import load


@dataclass(frozen=True)
class StackState:
    """Return addresses pushed by subroutine calls, innermost last."""
    data: tuple = ()

    @property
    def depth(self) -> int:
        return len(self.data)


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is stored flat in row-major order: pixel (x, y) lives at
    index ``x + y * SCREEN_WIDTH``.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.uint16(PROGRAM_START))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros(SCREEN_WIDTH * SCREEN_HEIGHT, dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    modern_mode: bool = field(pytree_node=False, default=True)


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0), modern_mode: bool = True) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng, modern_mode=modern_mode)
    return state.replace(memory=load(state.memory, FONT_START, FONT_DATA))
