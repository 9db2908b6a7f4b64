"""CHIP-8 instruction decoding.

``decode`` maps a 16-bit word onto one of a closed set of frozen instruction
variants. Register operands are validated here, once, so executors can index
the register file without further checks.
"""

from typing import Callable

from chex import dataclass

from chip8core.constants import NUM_REGISTERS
from chip8core.errors import UnknownOpcode, InvalidRegister


@dataclass(frozen=True)
class OpcodeFields:
    """Raw fields of a 16-bit instruction word."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def split(instruction: int) -> OpcodeFields:
    """Split 16-bit instruction into its nibble fields."""
    return OpcodeFields(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


class Instruction:
    """Base class of every decoded instruction variant."""


# System (0nnn)

@dataclass(frozen=True)
class ClearScreen(Instruction):
    """00E0"""


@dataclass(frozen=True)
class Return(Instruction):
    """00EE"""


# Control flow

@dataclass(frozen=True)
class Jump(Instruction):
    """1NNN"""
    address: int


@dataclass(frozen=True)
class Call(Instruction):
    """2NNN"""
    address: int


@dataclass(frozen=True)
class JumpOffset(Instruction):
    """BNNN"""
    x: int
    address: int


@dataclass(frozen=True)
class SkipEqVal(Instruction):
    """3XNN"""
    x: int
    value: int


@dataclass(frozen=True)
class SkipNeVal(Instruction):
    """4XNN"""
    x: int
    value: int


@dataclass(frozen=True)
class SkipEqReg(Instruction):
    """5XY0"""
    x: int
    y: int


@dataclass(frozen=True)
class SkipNeReg(Instruction):
    """9XY0"""
    x: int
    y: int


@dataclass(frozen=True)
class SkipKeyPressed(Instruction):
    """EX9E"""
    x: int


@dataclass(frozen=True)
class SkipKeyReleased(Instruction):
    """EXA1"""
    x: int


# Registers and memory

@dataclass(frozen=True)
class SetRegister(Instruction):
    """6XNN"""
    x: int
    value: int


@dataclass(frozen=True)
class AddRegister(Instruction):
    """7XNN"""
    x: int
    value: int


@dataclass(frozen=True)
class SetIndex(Instruction):
    """ANNN"""
    address: int


@dataclass(frozen=True)
class Random(Instruction):
    """CXNN"""
    x: int
    mask: int


# ALU (8XYN)

@dataclass(frozen=True)
class Move(Instruction):
    """8XY0"""
    x: int
    y: int


@dataclass(frozen=True)
class Or(Instruction):
    """8XY1"""
    x: int
    y: int


@dataclass(frozen=True)
class And(Instruction):
    """8XY2"""
    x: int
    y: int


@dataclass(frozen=True)
class Xor(Instruction):
    """8XY3"""
    x: int
    y: int


@dataclass(frozen=True)
class AddRegisters(Instruction):
    """8XY4"""
    x: int
    y: int


@dataclass(frozen=True)
class SubRegisters(Instruction):
    """8XY5"""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftRight(Instruction):
    """8XY6"""
    x: int
    y: int


@dataclass(frozen=True)
class SubReversed(Instruction):
    """8XY7"""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftLeft(Instruction):
    """8XYE"""
    x: int
    y: int


# Display

@dataclass(frozen=True)
class Draw(Instruction):
    """DXYN"""
    x: int
    y: int
    height: int


# Timers, input and misc (FXNN)

@dataclass(frozen=True)
class GetDelay(Instruction):
    """FX07"""
    x: int


@dataclass(frozen=True)
class WaitKey(Instruction):
    """FX0A"""
    x: int


@dataclass(frozen=True)
class SetDelay(Instruction):
    """FX15"""
    x: int


@dataclass(frozen=True)
class SetSound(Instruction):
    """FX18"""
    x: int


@dataclass(frozen=True)
class AddIndex(Instruction):
    """FX1E"""
    x: int


@dataclass(frozen=True)
class FontCharacter(Instruction):
    """FX29"""
    x: int


@dataclass(frozen=True)
class StoreBCD(Instruction):
    """FX33"""
    x: int


@dataclass(frozen=True)
class StoreRegisters(Instruction):
    """FX55"""
    x: int


@dataclass(frozen=True)
class LoadRegisters(Instruction):
    """FX65"""
    x: int


INSTRUCTION_TYPES = (
    ClearScreen, Return, Jump, Call, JumpOffset,
    SkipEqVal, SkipNeVal, SkipEqReg, SkipNeReg, SkipKeyPressed, SkipKeyReleased,
    SetRegister, AddRegister, SetIndex, Random,
    Move, Or, And, Xor, AddRegisters, SubRegisters, ShiftRight, SubReversed, ShiftLeft,
    Draw,
    GetDelay, WaitKey, SetDelay, SetSound, AddIndex, FontCharacter, StoreBCD,
    StoreRegisters, LoadRegisters,
)


def register(index: int) -> int:
    """Validate a register operand."""
    if not 0 <= index < NUM_REGISTERS:
        raise InvalidRegister(index)
    return index


def _decode_system(f: OpcodeFields) -> Instruction:
    if f.raw == 0x00E0:
        return ClearScreen()
    if f.raw == 0x00EE:
        return Return()
    raise UnknownOpcode(f.raw)


def _decode_skip_registers(variant) -> Callable[[OpcodeFields], Instruction]:
    def decoder(f: OpcodeFields) -> Instruction:
        if f.n != 0:
            raise UnknownOpcode(f.raw)
        return variant(x=register(f.x), y=register(f.y))
    return decoder


_ALU_VARIANTS = {
    0x0: Move,
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x4: AddRegisters,
    0x5: SubRegisters,
    0x6: ShiftRight,
    0x7: SubReversed,
    0xE: ShiftLeft,
}


def _decode_alu(f: OpcodeFields) -> Instruction:
    variant = _ALU_VARIANTS.get(f.n)
    if variant is None:
        raise UnknownOpcode(f.raw)
    return variant(x=register(f.x), y=register(f.y))


def _decode_keys(f: OpcodeFields) -> Instruction:
    if f.nn == 0x9E:
        return SkipKeyPressed(x=register(f.x))
    if f.nn == 0xA1:
        return SkipKeyReleased(x=register(f.x))
    raise UnknownOpcode(f.raw)


_MISC_VARIANTS = {
    0x07: GetDelay,
    0x0A: WaitKey,
    0x15: SetDelay,
    0x18: SetSound,
    0x1E: AddIndex,
    0x29: FontCharacter,
    0x33: StoreBCD,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}


def _decode_misc(f: OpcodeFields) -> Instruction:
    variant = _MISC_VARIANTS.get(f.nn)
    if variant is None:
        raise UnknownOpcode(f.raw)
    return variant(x=register(f.x))


_FAMILY_DECODERS = [
    _decode_system,
    lambda f: Jump(address=f.nnn),
    lambda f: Call(address=f.nnn),
    lambda f: SkipEqVal(x=register(f.x), value=f.nn),
    lambda f: SkipNeVal(x=register(f.x), value=f.nn),
    _decode_skip_registers(SkipEqReg),
    lambda f: SetRegister(x=register(f.x), value=f.nn),
    lambda f: AddRegister(x=register(f.x), value=f.nn),
    _decode_alu,
    _decode_skip_registers(SkipNeReg),
    lambda f: SetIndex(address=f.nnn),
    lambda f: JumpOffset(x=register(f.x), address=f.nnn),
    lambda f: Random(x=register(f.x), mask=f.nn),
    lambda f: Draw(x=register(f.x), y=register(f.y), height=f.n),
    _decode_keys,
    _decode_misc,
]


def decode(instruction: int) -> Instruction:
    """Decode 16-bit instruction into a tagged instruction variant."""
    instruction = int(instruction)
    if not 0 <= instruction <= 0xFFFF:
        raise UnknownOpcode(instruction)
    fields = split(instruction)
    return _FAMILY_DECODERS[fields.opcode](fields)
