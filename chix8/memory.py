"""CHIP-8 memory access with address validation.

All reads and writes performed by instructions go through this module, so an
address computed from a corrupt ``pc`` or ``I`` surfaces as
``MemoryOutOfBounds`` instead of being silently clamped by JAX indexing.
"""

from typing import Sequence, Union

import jax.numpy as jnp

from chix8.constants import MEMORY_SIZE, MAX_PROGRAM_SIZE, PROGRAM_START
from chix8.errors import MemoryOutOfBounds
from chix8.state import EmulatorState


def check_address(address: int, length: int = 1) -> int:
    """Ensure ``[address, address + length)`` lies inside memory."""
    address = int(address)
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryOutOfBounds(address, length)
    return address


def read_bytes(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    address = check_address(address, length)
    return memory[address:address + length]


def write_bytes(
    memory: jnp.ndarray, address: int, values: Union[jnp.ndarray, Sequence[int]]
) -> jnp.ndarray:
    values = jnp.asarray(values, dtype=jnp.uint8)
    address = check_address(address, values.shape[0])
    return memory.at[address:address + values.shape[0]].set(values)


def read_word(memory: jnp.ndarray, address: int) -> int:
    """Read a big-endian 16-bit word."""
    high, low = (int(byte) for byte in read_bytes(memory, address, 2))
    return (high << 8) | low


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Copy a program image into memory starting at 0x200."""
    if len(data) > MAX_PROGRAM_SIZE:
        raise MemoryOutOfBounds(PROGRAM_START, len(data))
    if not data:
        return state
    return state.replace(memory=write_bytes(state.memory, PROGRAM_START, list(data)))


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
