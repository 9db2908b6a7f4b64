"""Test configuration and fixtures for CHIP-8 core tests."""

import pytest
import jax.numpy as jnp
from chip8core import create_state, Interpreter, InterpreterConfig, SCREEN_WIDTH
from chip8core.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state in modern mode."""
    return create_state().replace(modern_mode=True)


@pytest.fixture
def legacy_state():
    """Provide a fresh state in legacy mode."""
    return create_state().replace(modern_mode=False)


@pytest.fixture
def quiet_logger():
    """Logger that only reports critical failures."""
    return ConsoleLogger(log_level="CRITICAL", use_colors=False)


@pytest.fixture
def interpreter(quiet_logger):
    """Provide an interpreter with no program loaded."""
    return Interpreter(InterpreterConfig(ticks_per_frame=4), logger=quiet_logger)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def pixel_at(state, x, y):
    """Helper to read pixel (x, y) from the flat display."""
    return bool(state.display[x + y * SCREEN_WIDTH])


def assemble(*words):
    """Helper to turn instruction words into big-endian ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
