"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chix8 import create_state, make_config


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state with the default (Cowgod) quirks."""
    return create_state()


@pytest.fixture
def cosmac_state():
    """Provide a fresh state with original COSMAC VIP behaviour."""
    return create_state(config=make_config("cosmac"))


@pytest.fixture
def chip48_state():
    """Provide a fresh state with CHIP-48 behaviour."""
    return create_state(config=make_config("chip48"))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)
