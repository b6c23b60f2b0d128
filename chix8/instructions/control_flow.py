"""CHIP-8 control flow instructions."""

from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.memory import check_address
from chix8.registers import read_register, set_pc
from chix8.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return set_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return set_pc(state, int(state.pc) + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) == read_register(state, inst.y)
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) != read_register(state, inst.y)
)


def _key_pressed(state: EmulatorState, inst: DecodedInstruction) -> bool:
    return bool(state.keypad[read_register(state, inst.x) & 0xF])


execute_skip_if_key = make_skip_instruction(_key_pressed)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst)
)


def execute_jump_with_offset_vx(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BXNN - Jump to address XNN + VX (CHIP-48 behavior)."""
    jump_address = instruction.nnn + read_register(state, instruction.x)
    return set_pc(state, check_address(jump_address))


def execute_jump_with_offset_v0(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.nnn + read_register(state, 0)
    return set_pc(state, check_address(jump_address))


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    if state.config.jump_quirk:
        return execute_jump_with_offset_vx(state, instruction)
    return execute_jump_with_offset_v0(state, instruction)
