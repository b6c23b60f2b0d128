"""CHIP-8 display operations."""

from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.display import draw_sprite
from chix8.memory import read_bytes
from chix8.registers import read_register, set_flag


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite = read_bytes(state.memory, int(state.I), instruction.n)
    display, collision = draw_sprite(
        state.display,
        read_register(state, instruction.x),
        read_register(state, instruction.y),
        sprite,
        clip=state.config.clip_sprites,
    )
    return set_flag(state.replace(display=display), int(collision))
