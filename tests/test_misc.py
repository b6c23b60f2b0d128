"""Tests for timer, keypad and Fxxx instructions."""

import jax.numpy as jnp
import pytest
from chix8 import execute, step, peek, tick, set_key, release_keys, Op, FONT_START
from chix8.state import NO_KEY_WAIT, is_waiting_for_key
from conftest import set_registers


class TestTimerInstructions:
    """Test delay and sound timer instructions."""

    def test_set_and_get_delay_timer(self, fresh_state):
        """FX15 then FX07 round-trips through the delay timer."""
        state = set_registers(fresh_state, V3=0x2A)
        state = execute(state, 0xF315)  # DT = V3
        assert state.delay_timer == 0x2A

        state = execute(state, 0xF407)  # V4 = DT
        assert state.V[4] == 0x2A

    def test_set_sound_timer(self, fresh_state):
        """FX18 - Set sound timer to VX."""
        state = set_registers(fresh_state, V1=0x10)
        state = execute(state, 0xF118)
        assert state.sound_timer == 0x10
        assert state.delay_timer == 0


class TestIndexInstructions:
    """Test instructions that move I."""

    def test_add_to_index(self, fresh_state):
        """FX1E - I += VX."""
        state = set_registers(fresh_state, V2=0x10)
        state = execute(state, 0xA300)
        state = execute(state, 0xF21E)
        assert state.I == 0x310

    def test_add_to_index_past_address_space(self, fresh_state):
        """FX1E - I grows past 0xFFF without wrapping and VF is untouched."""
        state = set_registers(fresh_state, V1=0xFF, VF=0x05)
        state = execute(state, 0xAF80)
        state = execute(state, 0xF11E)
        assert state.I == 0x107F
        assert state.V[15] == 0x05

    @pytest.mark.parametrize("digit", range(16))
    def test_font_character(self, fresh_state, digit):
        """FX29 - I points at the glyph for the low nibble of VX."""
        state = set_registers(fresh_state, V5=digit)
        state = execute(state, 0xF529)
        assert state.I == FONT_START + 5 * digit

    def test_font_character_uses_low_nibble(self, fresh_state):
        state = set_registers(fresh_state, V5=0xAB)
        state = execute(state, 0xF529)
        assert state.I == FONT_START + 5 * 0xB

    def test_font_glyph_in_memory(self, fresh_state):
        """The '0' glyph sits at the start of the font."""
        assert list(fresh_state.memory[FONT_START:FONT_START + 5]) == [0xF0, 0x90, 0x90, 0x90, 0xF0]


class TestBCD:
    """Test FX33."""

    @pytest.mark.parametrize("value,digits", [(0, [0, 0, 0]), (7, [0, 0, 7]), (42, [0, 4, 2]), (255, [2, 5, 5])])
    def test_bcd_conversion(self, fresh_state, value, digits):
        state = set_registers(fresh_state, V6=value)
        state = execute(state, 0xA400)
        state = execute(state, 0xF633)

        assert list(state.memory[0x400:0x403]) == digits
        assert state.I == 0x400


class TestRegisterStoreLoad:
    """Test FX55 and FX65 under both settings of the load/store quirk."""

    def test_store_registers(self, fresh_state):
        """FX55 - Store V0 through VX, I unchanged."""
        state = set_registers(fresh_state, V0=1, V1=2, V2=3, V3=4)
        state = execute(state, 0xA500)
        state = execute(state, 0xF255)

        assert list(state.memory[0x500:0x504]) == [1, 2, 3, 0]
        assert state.I == 0x500

    def test_load_registers(self, fresh_state):
        """FX65 - Load V0 through VX, I unchanged."""
        state = fresh_state.replace(memory=fresh_state.memory.at[0x500:0x503].set(jnp.array([9, 8, 7], dtype=jnp.uint8)))
        state = set_registers(state, V2=0x55)
        state = execute(state, 0xA500)
        state = execute(state, 0xF165)

        assert list(state.V[:3]) == [9, 8, 0x55]
        assert state.I == 0x500

    def test_store_advances_index(self, cosmac_state):
        """FX55 - I += X + 1 without the load/store quirk."""
        state = set_registers(cosmac_state, V0=1, V1=2, V2=3)
        state = execute(state, 0xA500)
        state = execute(state, 0xF255)

        assert list(state.memory[0x500:0x503]) == [1, 2, 3]
        assert state.I == 0x503

    def test_load_advances_index(self, cosmac_state):
        state = execute(cosmac_state, 0xA500)
        state = execute(state, 0xF065)
        assert state.I == 0x501

    def test_store_then_load(self, fresh_state):
        state = set_registers(fresh_state, **{f"V{i:X}": i * 3 for i in range(16)})
        state = execute(state, 0xA600)
        state = execute(state, 0xFF55)
        state = state.replace(V=jnp.zeros_like(state.V))
        state = execute(state, 0xFF65)

        assert list(state.V) == [i * 3 for i in range(16)]


class TestKeySkips:
    """Test EX9E and EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        state = set_key(set_registers(fresh_state, V1=0xA), 0xA, True)
        assert execute(state, 0xE19E).pc == fresh_state.pc + 2
        assert execute(state, 0xE1A1).pc == fresh_state.pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        state = set_registers(fresh_state, V1=0xA)
        assert execute(state, 0xE19E).pc == fresh_state.pc
        assert execute(state, 0xE1A1).pc == fresh_state.pc + 2

    def test_key_uses_low_nibble(self, fresh_state):
        state = set_key(set_registers(fresh_state, V1=0x1A), 0xA, True)
        assert execute(state, 0xE19E).pc == fresh_state.pc + 2

    def test_release_keys(self, fresh_state):
        state = set_key(set_key(fresh_state, 1, True), 2, True)
        assert not jnp.any(release_keys(state).keypad)


class TestWaitForKey:
    """Test FX0A blocking semantics."""

    def test_key_already_down(self, fresh_state):
        """A held key is taken immediately, lowest index first."""
        state = set_key(set_key(fresh_state, 0xC, True), 0x7, True)
        state = execute(state, 0xF30A)

        assert state.V[3] == 0x7
        assert not is_waiting_for_key(state)

    def test_wait_is_armed(self, fresh_state):
        state = execute(fresh_state, 0xF30A)

        assert state.key_wait == 3
        assert is_waiting_for_key(state)
        assert state.V[3] == 0

    def test_step_blocks_until_key(self, fresh_state):
        """Steps only poll the keypad while waiting, then resume after FX0A."""
        state = fresh_state.replace(
            memory=fresh_state.memory.at[0x200:0x204].set(jnp.array([0xF3, 0x0A, 0x71, 0x01], dtype=jnp.uint8))
        )
        state = step(state)  # FX0A, no key down
        assert state.pc == 0x202
        assert is_waiting_for_key(state)

        for _ in range(3):
            state = step(state)
        assert state.pc == 0x202
        assert state.V[1] == 0

        state = set_key(state, 0x9, True)
        state = step(state)
        assert state.V[3] == 0x9
        assert state.key_wait == NO_KEY_WAIT
        assert state.pc == 0x202

        state = step(state)  # 7101
        assert state.V[1] == 1
        assert state.pc == 0x204

    def test_pc_points_past_wait_instruction(self, fresh_state):
        """While waiting, pc holds the instruction that runs after the key press."""
        state = fresh_state.replace(
            memory=fresh_state.memory.at[0x200:0x204].set(jnp.array([0xF3, 0x0A, 0x71, 0x01], dtype=jnp.uint8))
        )
        state = step(state)

        assert is_waiting_for_key(state)
        assert peek(state).op is Op.ADD_IMMEDIATE

    def test_timers_run_while_waiting(self, fresh_state):
        state = fresh_state.replace(delay_timer=jnp.asarray(3, dtype=jnp.uint8))
        state = execute(state, 0xF00A)
        state = tick(state)
        assert state.delay_timer == 2
        assert is_waiting_for_key(state)


def test_set_key_rejects_bad_index(fresh_state):
    with pytest.raises(ValueError):
        set_key(fresh_state, 16, True)
    with pytest.raises(ValueError):
        set_key(fresh_state, -1, True)
