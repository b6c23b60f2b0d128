"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from chix8.state import EmulatorState, NO_KEY_WAIT
from chix8.decode import DecodedInstruction
from chix8.constants import FONT_START, FONT_SPRITE_HEIGHT
from chix8.keypad import first_pressed_key
from chix8.memory import read_bytes, write_bytes
from chix8.registers import read_register, write_register, set_index


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return write_register(state, instruction.x, int(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, VF unaffected."""
    return set_index(state, int(state.I) + read_register(state, instruction.x))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    A key already held is taken immediately. Otherwise the machine is marked as
    waiting and ``resolve_key_wait`` polls the keypad on later steps.

    The fetch has already moved ``pc`` past FX0A, and it stays there for the
    whole wait. Drivers that inspect ``pc`` while ``key_wait`` is armed see
    the instruction that runs once a key is pressed, not FX0A itself.
    """
    pressed_key = first_pressed_key(state)
    if pressed_key >= 0:
        return write_register(state, instruction.x, pressed_key)
    return state.replace(key_wait=jnp.asarray(instruction.x, dtype=jnp.int8))


def resolve_key_wait(state: EmulatorState) -> EmulatorState:
    """Complete a pending FX0A once a key is down."""
    pressed_key = first_pressed_key(state)
    if pressed_key < 0:
        return state
    state = write_register(state, int(state.key_wait), pressed_key)
    return state.replace(key_wait=jnp.asarray(NO_KEY_WAIT, dtype=jnp.int8))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = read_register(state, instruction.x) & 0xF
    return set_index(state, FONT_START + digit * FONT_SPRITE_HEIGHT)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = read_register(state, instruction.x)
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_bytes(state.memory, int(state.I), digits))


def _advance_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    if state.config.load_store_quirk:
        return state
    return set_index(state, int(state.I) + instruction.x + 1)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    new_memory = write_bytes(state.memory, int(state.I), state.V[:instruction.x + 1])
    return _advance_index(state.replace(memory=new_memory), instruction)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_bytes(state.memory, int(state.I), instruction.x + 1)
    new_V = state.V.at[:instruction.x + 1].set(values)
    return _advance_index(state.replace(V=new_V), instruction)
