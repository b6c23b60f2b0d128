"""CHIP-8 ALU operations (8xxx).

Each ``alu_*`` function maps the original operand values to ``(result, flag)``
where ``flag`` is ``None`` for operations that leave VF alone. The result is
written to VX before the flag is written to VF, so VF holds the flag even when
it is also the destination register.
"""

from typing import Optional

from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.registers import read_register, write_register, set_flag


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > 0xFF)
    return result & 0xFF, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    not_borrow = int(vx >= vy)
    return (vx - vy) & 0xFF, not_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 1
    return vx >> 1, shifted_bit


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    not_borrow = int(vy >= vx)
    return (vy - vx) & 0xFF, not_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = (vx & 0x80) >> 7
    return (vx << 1) & 0xFF, shifted_bit


def make_alu_instruction(alu_fn, resets_flag: bool = False, shifts: bool = False):
    """Factory binding an ALU function to register reads and writes.

    ``resets_flag`` marks the logic operations affected by the VF reset quirk,
    ``shifts`` the operations affected by the shift quirk.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = read_register(state, instruction.x)
        vy = read_register(state, instruction.y)
        if shifts and not state.config.shift_quirk:
            vx = vy

        result, vf = alu_fn(vx, vy)
        if resets_flag and state.config.vf_reset_quirk:
            vf = 0

        state = write_register(state, instruction.x, result)
        if vf is not None:
            state = set_flag(state, vf)
        return state
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or, resets_flag=True)
execute_alu_and = make_alu_instruction(alu_and, resets_flag=True)
execute_alu_xor = make_alu_instruction(alu_xor, resets_flag=True)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_alu_instruction(alu_shift_right, shifts=True)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_alu_instruction(alu_shift_left, shifts=True)
