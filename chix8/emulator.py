"""Main CHIP-8 emulator execution engine."""

from typing import Callable, Dict

import numpy as np

from chix8.state import EmulatorState, is_waiting_for_key
from chix8.decode import DecodedInstruction, Op, decode
from chix8.display import snapshot
from chix8.memory import read_word
from chix8.registers import set_pc
from chix8.instructions.system import no_op, execute_clear_screen, execute_return
from chix8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chix8.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor,
    execute_alu_add, execute_alu_sub_xy, execute_alu_shift_right,
    execute_alu_sub_yx, execute_alu_shift_left
)
from chix8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chix8.instructions.display import execute_display
from chix8.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
    resolve_key_wait
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]

HANDLERS: Dict[Op, Handler] = {
    Op.SYSTEM: no_op,
    Op.CLEAR_SCREEN: execute_clear_screen,
    Op.RETURN: execute_return,
    Op.JUMP: execute_jump,
    Op.CALL: execute_call,
    Op.SKIP_IF_EQUAL_IMMEDIATE: execute_skip_if_equal_immediate,
    Op.SKIP_IF_NOT_EQUAL_IMMEDIATE: execute_skip_if_not_equal_immediate,
    Op.SKIP_IF_EQUAL_REGISTER: execute_skip_if_equal_register,
    Op.SET_IMMEDIATE: execute_set,
    Op.ADD_IMMEDIATE: execute_add,
    Op.SET_REGISTER: execute_alu_set,
    Op.OR: execute_alu_or,
    Op.AND: execute_alu_and,
    Op.XOR: execute_alu_xor,
    Op.ADD_REGISTER: execute_alu_add,
    Op.SUBTRACT: execute_alu_sub_xy,
    Op.SHIFT_RIGHT: execute_alu_shift_right,
    Op.SUBTRACT_REVERSED: execute_alu_sub_yx,
    Op.SHIFT_LEFT: execute_alu_shift_left,
    Op.SKIP_IF_NOT_EQUAL_REGISTER: execute_skip_if_not_equal_register,
    Op.SET_INDEX: execute_set_index,
    Op.JUMP_WITH_OFFSET: execute_jump_with_offset,
    Op.RANDOM: execute_random,
    Op.DRAW: execute_display,
    Op.SKIP_IF_KEY: execute_skip_if_key,
    Op.SKIP_IF_NOT_KEY: execute_skip_if_not_key,
    Op.GET_DELAY_TIMER: execute_get_delay_timer,
    Op.WAIT_FOR_KEY: execute_wait_for_key,
    Op.SET_DELAY_TIMER: execute_set_delay_timer,
    Op.SET_SOUND_TIMER: execute_set_sound_timer,
    Op.ADD_TO_INDEX: execute_add_to_index,
    Op.FONT_CHARACTER: execute_font_character,
    Op.BCD: execute_bcd_conversion,
    Op.STORE_REGISTERS: execute_store_registers,
    Op.LOAD_REGISTERS: execute_load_registers,
}


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return HANDLERS[decoded_instruction.op](state, decoded_instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    instruction = read_word(state.memory, pc)
    return set_pc(state, pc + 2), instruction


def peek(state: EmulatorState) -> DecodedInstruction:
    """Decode the instruction at the program counter without executing it."""
    return decode(read_word(state.memory, int(state.pc)))


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle.

    While an FX0A wait is pending the cycle only polls the keypad. On a fault
    the exception propagates and the given state is left untouched.
    """
    if is_waiting_for_key(state):
        return resolve_key_wait(state)
    state, instruction = fetch(state)
    return execute(state, instruction)


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Read-only ``(32, 64)`` view of the display for renderers."""
    return snapshot(state.display)
