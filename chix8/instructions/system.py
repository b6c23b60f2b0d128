"""CHIP-8 system instructions (0x0xxx)."""

from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.display import clear
from chix8.registers import set_pc
from chix8.stack import pop


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Machine code routine, ignored."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return set_pc(state.replace(stack=stack), address)
