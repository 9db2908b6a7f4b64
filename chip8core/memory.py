"""CHIP-8 memory access with bounds checking."""

from typing import Sequence

import jax.numpy as jnp

from chip8core.constants import PROGRAM_START
from chip8core.errors import OutOfBounds, CapacityExceeded


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a big-endian 16-bit word."""
    return (int(high) << 8) | int(low)


def _check_range(memory: jnp.ndarray, address: int, count: int):
    size = memory.shape[0]
    if address < 0 or address + count > size:
        last = address + count - 1
        raise OutOfBounds(
            f"range 0x{address:03X}-0x{last:03X} is out of bounds, memory size is {size}",
            address=address if address < 0 or address >= size else size,
        )


def read_u16(memory: jnp.ndarray, address: int) -> int:
    """Read big-endian word at address, address + 1."""
    _check_range(memory, address, 2)
    return _pack_u16(memory[address], memory[address + 1])


def read_bytes(memory: jnp.ndarray, address: int, count: int) -> jnp.ndarray:
    """Read count bytes starting at address."""
    _check_range(memory, address, count)
    return memory[address:address + count]


def load(memory: jnp.ndarray, base: int, data: Sequence[int]) -> jnp.ndarray:
    """Copy data into memory at base.

    Raises CapacityExceeded before touching memory when the data does not fit,
    so a failed load never leaves a partial copy behind.
    """
    size = memory.shape[0]
    if base < 0 or base + len(data) > size:
        raise CapacityExceeded(len(data), base, size)
    if len(data) == 0:
        return memory
    values = jnp.array(list(data), dtype=jnp.uint8)
    return memory.at[base:base + len(data)].set(values)


def write_bytes(memory: jnp.ndarray, address: int, data: jnp.ndarray) -> jnp.ndarray:
    """Store bytes on behalf of a running program.

    The reserved interpreter area below PROGRAM_START (holding the font) is
    read-only to programs.
    """
    count = len(data)
    if address < PROGRAM_START:
        raise OutOfBounds(f"write to reserved address 0x{address:03X}", address=address)
    _check_range(memory, address, count)
    return memory.at[address:address + count].set(jnp.asarray(data, dtype=jnp.uint8))
