"""CHIP-8 memory and register operations."""

import jax

from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.registers import read_register, write_register, set_index


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return write_register(state, instruction.x, instruction.nn)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX, carry ignored."""
    return write_register(state, instruction.x, read_register(state, instruction.x) + instruction.nn)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return set_index(state, instruction.nnn)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    state = state.replace(rng=key)
    return write_register(state, instruction.x, random_value & instruction.nn)
