"""Tests for quirk configuration."""

import pytest
from chix8 import Chip8Config, PRESETS, make_config, create_state


def test_default_is_cowgod():
    config = make_config()
    assert config == PRESETS["cowgod"] == Chip8Config()
    assert config.shift_quirk
    assert config.load_store_quirk
    assert not config.jump_quirk
    assert not config.clip_sprites


def test_presets():
    cosmac = make_config("cosmac")
    assert not cosmac.shift_quirk
    assert not cosmac.load_store_quirk
    assert cosmac.vf_reset_quirk

    chip48 = make_config("chip48")
    assert chip48.jump_quirk
    assert chip48.clip_sprites


def test_overrides():
    config = make_config("cosmac", clip_sprites=False, instruction_frequency=1000)
    assert not config.clip_sprites
    assert config.instruction_frequency == 1000
    assert not config.shift_quirk


def test_none_overrides_fall_back_to_preset():
    config = make_config("chip48", jump_quirk=None, shift_quirk=None)
    assert config == PRESETS["chip48"]


def test_unknown_preset():
    with pytest.raises(ValueError):
        make_config("superchip")


def test_config_travels_with_state():
    state = create_state(config=make_config("cosmac"))
    state = state.replace(V=state.V.at[0].set(1))
    assert state.config == PRESETS["cosmac"]
