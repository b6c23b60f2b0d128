"""CHIP-8 hexadecimal keypad input surface."""

import jax.numpy as jnp

from chix8.constants import NUM_KEYS
from chix8.state import EmulatorState


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Press or release one of the keys 0x0-0xF."""
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key index must be in 0-{NUM_KEYS - 1}, got {key}")
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def release_keys(state: EmulatorState) -> EmulatorState:
    return state.replace(keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_))


def first_pressed_key(state: EmulatorState) -> int:
    """Lowest pressed key index, or -1 when no key is down."""
    if not bool(jnp.any(state.keypad)):
        return -1
    return int(jnp.argmax(state.keypad))
