"""CHIP-8 ALU operations (8xxx)."""

from typing import Optional

from chip8core.state import EmulatorState
from chip8core.decode import (
    Instruction, Move, Or, And, Xor, AddRegisters, SubRegisters, ShiftRight, SubReversed, ShiftLeft,
)
from chip8core.constants import BYTE_MASK, FLAG_REGISTER


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, int]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, 0


def alu_and(vx: int, vy: int) -> tuple[int, int]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, 0


def alu_xor(vx: int, vy: int) -> tuple[int, int]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, 0


def alu_add(vx: int, vy: int) -> tuple[int, int]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & BYTE_MASK, int(result > BYTE_MASK)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int]:
    """8XY5 - Subtract: VX -= VY, set borrow flag."""
    return (vx - vy) & BYTE_MASK, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, int]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int]:
    """8XY7 - Subtract: VX = VY - VX, set borrow flag."""
    return (vy - vx) & BYTE_MASK, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, int]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & BYTE_MASK, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    Move: alu_set,
    Or: alu_or,
    And: alu_and,
    Xor: alu_xor,
    AddRegisters: alu_add,
    SubRegisters: alu_sub_xy,
    ShiftRight: alu_shift_right,
    SubReversed: alu_sub_yx,
    ShiftLeft: alu_shift_left,
}

SHIFTS = (ShiftRight, ShiftLeft)


def execute_alu_operation(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher.

    The flag register is written after VX, so an operation targeting VF
    leaves the flag value behind. 8XY0 leaves VF untouched.
    """
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    # Legacy interpreters shift VY into VX
    if isinstance(instruction, SHIFTS) and not state.modern_mode:
        vx = vy

    result, vf = ALU_OPERATIONS[type(instruction)](vx, vy)

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
