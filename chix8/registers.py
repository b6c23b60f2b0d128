"""CHIP-8 register file access."""

import jax.numpy as jnp

from chix8.constants import FLAG_REGISTER
from chix8.state import EmulatorState


def read_register(state: EmulatorState, index: int) -> int:
    return int(state.V[index])


def write_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Write VX, truncating to 8 bits."""
    return state.replace(V=state.V.at[index].set(value & 0xFF))


def set_flag(state: EmulatorState, value: int) -> EmulatorState:
    """Write the VF flag register."""
    return write_register(state, FLAG_REGISTER, value)


def set_index(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(I=jnp.asarray(value & 0xFFFF, dtype=jnp.uint16))


def set_pc(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(pc=jnp.asarray(value & 0xFFFF, dtype=jnp.uint16))
