"""Tests for system instructions (0xxx) and subroutines."""

import jax.numpy as jnp
import pytest
from chip8core import execute, fetch, StackUnderflow, UnknownOpcode


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0].set(True).at[2047].set(True))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[-1] == initial_pc

    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.depth == 0


def test_return_lands_after_call(fresh_state):
    """A fetched call returns to the instruction after it."""
    state = fresh_state.replace(
        memory=fresh_state.memory.at[0x200].set(0x23).at[0x201].set(0x00)
        .at[0x300].set(0x00).at[0x301].set(0xEE)
    )

    state, instruction = fetch(state)
    state = execute(state, instruction)
    assert state.pc == 0x300

    state, instruction = fetch(state)
    state = execute(state, instruction)
    assert state.pc == 0x202


def test_nested_calls(fresh_state):
    """Returns unwind in reverse call order."""
    state = execute(fresh_state, 0x2300)
    state = execute(state, 0x2400)
    state = execute(state, 0x2500)
    assert state.stack.depth == 3

    state = execute(state, 0x00EE)
    assert state.pc == 0x400
    state = execute(state, 0x00EE)
    assert state.pc == 0x300
    state = execute(state, 0x00EE)
    assert state.pc == 0x200


def test_return_with_empty_stack(fresh_state):
    """00EE with nothing to return to fails."""
    with pytest.raises(StackUnderflow):
        execute(fresh_state, 0x00EE)


def test_deep_call_stack(fresh_state):
    """The stack is not capped at the 16 levels of the original hardware."""
    state = fresh_state
    for _ in range(40):
        state = execute(state, 0x2300)
    assert state.stack.depth == 40


@pytest.mark.parametrize("instruction", [0x0000, 0x0123, 0x00E1, 0x00FF])
def test_machine_code_routines_are_unknown(fresh_state, instruction):
    """0NNN other than 00E0/00EE is rejected."""
    with pytest.raises(UnknownOpcode) as excinfo:
        execute(fresh_state, instruction)
    assert excinfo.value.opcode == instruction
