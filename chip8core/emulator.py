"""Main CHIP-8 emulator execution engine."""

from typing import Union

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import (
    Instruction, INSTRUCTION_TYPES, decode,
    ClearScreen, Return, Jump, Call, JumpOffset,
    SkipEqVal, SkipNeVal, SkipEqReg, SkipNeReg, SkipKeyPressed, SkipKeyReleased,
    SetRegister, AddRegister, SetIndex, Random,
    Move, Or, And, Xor, AddRegisters, SubRegisters, ShiftRight, SubReversed, ShiftLeft,
    Draw,
    GetDelay, WaitKey, SetDelay, SetSound, AddIndex, FontCharacter, StoreBCD,
    StoreRegisters, LoadRegisters,
)
from chip8core.constants import PROGRAM_START, NUM_KEYS
from chip8core.errors import OutOfBounds
from chip8core.memory import read_u16, load
from chip8core.instructions.system import execute_clear_screen, execute_return
from chip8core.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_released
)
from chip8core.instructions.alu import execute_alu_operation
from chip8core.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8core.instructions.display import execute_display
from chip8core.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


EXECUTORS = {
    ClearScreen: execute_clear_screen,
    Return: execute_return,
    Jump: execute_jump,
    Call: execute_call,
    JumpOffset: execute_jump_with_offset,
    SkipEqVal: execute_skip_if_equal_immediate,
    SkipNeVal: execute_skip_if_not_equal_immediate,
    SkipEqReg: execute_skip_if_equal_register,
    SkipNeReg: execute_skip_if_not_equal_register,
    SkipKeyPressed: execute_skip_if_key_pressed,
    SkipKeyReleased: execute_skip_if_key_released,
    SetRegister: execute_set,
    AddRegister: execute_add,
    SetIndex: execute_set_index,
    Random: execute_random,
    Move: execute_alu_operation,
    Or: execute_alu_operation,
    And: execute_alu_operation,
    Xor: execute_alu_operation,
    AddRegisters: execute_alu_operation,
    SubRegisters: execute_alu_operation,
    ShiftRight: execute_alu_operation,
    SubReversed: execute_alu_operation,
    ShiftLeft: execute_alu_operation,
    Draw: execute_display,
    GetDelay: execute_get_delay_timer,
    WaitKey: execute_wait_for_key,
    SetDelay: execute_set_delay_timer,
    SetSound: execute_set_sound_timer,
    AddIndex: execute_add_to_index,
    FontCharacter: execute_font_character,
    StoreBCD: execute_bcd_conversion,
    StoreRegisters: execute_store_registers,
    LoadRegisters: execute_load_registers,
}

_unhandled = set(INSTRUCTION_TYPES) - set(EXECUTORS)
if _unhandled:
    raise TypeError(f"instruction variants without executor: {sorted(t.__name__ for t in _unhandled)}")


def execute(state: EmulatorState, instruction: Union[int, Instruction]) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Accepts either a raw 16-bit word or an already decoded instruction. The
    program counter is not advanced here; that is the job of ``fetch``.
    """
    if not isinstance(instruction, Instruction):
        instruction = decode(instruction)
    return EXECUTORS[type(instruction)](state, instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    instruction = read_u16(state.memory, int(state.pc))
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle.

    A failing cycle raises before anything is returned, so the caller keeps
    the state from before the cycle.
    """
    state, instruction = fetch(state)
    return execute(state, decode(instruction))


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200.

    Only the program region and the program counter change.
    """
    new_memory = load(state.memory, PROGRAM_START, rom_data)
    return state.replace(memory=new_memory, pc=jnp.uint16(PROGRAM_START))


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers once, saturating at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def record_key(state: EmulatorState, key: int, is_down: bool) -> EmulatorState:
    """Set key state from an external event source."""
    if not 0 <= key < NUM_KEYS:
        raise OutOfBounds(f"key {key} is out of range 0-{NUM_KEYS - 1}", address=key)
    return state.replace(keypad=state.keypad.at[key].set(bool(is_down)))
