"""CHIP-8 machine configuration and quirk presets."""

from typing import Any, Dict, Optional

from flax.struct import dataclass

from chix8.constants import DEFAULT_INSTRUCTION_FREQUENCY


@dataclass(frozen=True)
class Chip8Config:
    """Behavioural switches for the interpreter.

    Attributes:
        shift_quirk: 8XY6/8XYE shift VX in place. When off, VX = VY shifted.
        load_store_quirk: FX55/FX65 leave I unchanged. When off, I += X + 1.
        jump_quirk: BNNN adds VX (X = top nibble of NNN). When off, adds V0.
        clip_sprites: Sprites are clipped at the screen edges instead of wrapping.
        vf_reset_quirk: 8XY1/8XY2/8XY3 reset VF to 0.
        instruction_frequency: Instructions executed per second by drivers.
    """
    shift_quirk: bool = True
    load_store_quirk: bool = True
    jump_quirk: bool = False
    clip_sprites: bool = False
    vf_reset_quirk: bool = False
    instruction_frequency: int = DEFAULT_INSTRUCTION_FREQUENCY


PRESETS: Dict[str, Chip8Config] = {
    "cowgod": Chip8Config(),
    "cosmac": Chip8Config(
        shift_quirk=False,
        load_store_quirk=False,
        jump_quirk=False,
        clip_sprites=True,
        vf_reset_quirk=True,
    ),
    "chip48": Chip8Config(
        shift_quirk=True,
        load_store_quirk=True,
        jump_quirk=True,
        clip_sprites=True,
    ),
}


def make_config(preset: str = "cowgod", **overrides: Optional[Any]) -> Chip8Config:
    """Build a configuration from a named preset.

    Overrides set to ``None`` are ignored so that unset command-line options
    fall back to the preset.
    """
    if preset not in PRESETS:
        raise ValueError(
            f"Unknown quirk preset '{preset}'. Available: {list(PRESETS.keys())}"
        )
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return PRESETS[preset].replace(**overrides)
