"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import (
    GetDelay, WaitKey, SetDelay, SetSound, AddIndex, FontCharacter, StoreBCD,
    StoreRegisters, LoadRegisters,
)
from chip8core.constants import FONT_START, FONT_GLYPH_SIZE, ADDRESS_MASK, FLAG_REGISTER
from chip8core.memory import read_bytes, write_bytes


def execute_get_delay_timer(state: EmulatorState, instruction: GetDelay) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: SetDelay) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: SetSound) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: AddIndex) -> EmulatorState:
    """FX1E - Add VX to I register."""
    new_i = int(state.I) + int(state.V[instruction.x])
    overflow_flag = int(new_i > ADDRESS_MASK)
    return state.replace(
        I=jnp.uint16(new_i & ADDRESS_MASK),
        V=state.V.at[FLAG_REGISTER].set(overflow_flag)
    )


def execute_wait_for_key(state: EmulatorState, instruction: WaitKey) -> EmulatorState:
    """FX0A - Wait for key press.

    Rewinds the program counter so the instruction runs again on the next
    tick until some key is held down.
    """
    if not bool(jnp.any(state.keypad)):
        return state.replace(pc=state.pc - 2)
    pressed_key = int(jnp.argmax(state.keypad))
    return state.replace(V=state.V.at[instruction.x].set(pressed_key))


def execute_font_character(state: EmulatorState, instruction: FontCharacter) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return state.replace(I=jnp.uint16(FONT_START + digit * FONT_GLYPH_SIZE))


def execute_bcd_conversion(state: EmulatorState, instruction: StoreBCD) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=write_bytes(state.memory, int(state.I), digits))


def execute_store_registers(state: EmulatorState, instruction: StoreRegisters) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    new_memory = write_bytes(state.memory, int(state.I), state.V[:count])

    if state.modern_mode:
        return state.replace(memory=new_memory)
    else:
        return state.replace(memory=new_memory, I=state.I + count)


def execute_load_registers(state: EmulatorState, instruction: LoadRegisters) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    new_V = state.V.at[:count].set(read_bytes(state.memory, int(state.I), count))

    if state.modern_mode:
        return state.replace(V=new_V)
    else:
        return state.replace(V=new_V, I=state.I + count)
