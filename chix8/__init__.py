"""CHIP-8 emulator package."""

from chix8.state import EmulatorState, StackState, create_state
from chix8.config import Chip8Config, make_config, PRESETS
from chix8.emulator import execute, fetch, step, peek, framebuffer, HANDLERS
from chix8.decode import DecodedInstruction, Op, decode, disassemble
from chix8.errors import Chip8Error, InvalidOpcode, StackOverflow, StackUnderflow, MemoryOutOfBounds
from chix8.memory import load_program, load_rom
from chix8.keypad import set_key, release_keys
from chix8.timers import tick, sound_active
from chix8.constants import *
from chix8.rendering import chip8_display_to_rgb, create_color_scheme, display_to_ascii

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "Chip8Config",
    "make_config",
    "PRESETS",
    "fetch",
    "execute",
    "step",
    "peek",
    "framebuffer",
    "HANDLERS",
    "load_program",
    "load_rom",
    "set_key",
    "release_keys",
    "tick",
    "sound_active",
    "DecodedInstruction",
    "Op",
    "decode",
    "disassemble",
    "Chip8Error",
    "InvalidOpcode",
    "StackOverflow",
    "StackUnderflow",
    "MemoryOutOfBounds",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "display_to_ascii",
]
