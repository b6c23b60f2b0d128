"""CHIP-8 instruction decoding.

Raw words are decoded into a member of the closed ``Op`` enumeration plus the
operand fields. Words that match no operation raise ``InvalidOpcode`` here, so
the executor only ever sees valid operations.
"""

from enum import Enum
from typing import Optional

from chex import dataclass

from chix8.errors import InvalidOpcode


class Op(Enum):
    """CHIP-8 operations, valued by their Cowgod mnemonic template."""
    SYSTEM = "SYS {nnn}"
    CLEAR_SCREEN = "CLS"
    RETURN = "RET"
    JUMP = "JP {nnn}"
    CALL = "CALL {nnn}"
    SKIP_IF_EQUAL_IMMEDIATE = "SE V{x}, {nn}"
    SKIP_IF_NOT_EQUAL_IMMEDIATE = "SNE V{x}, {nn}"
    SKIP_IF_EQUAL_REGISTER = "SE V{x}, V{y}"
    SET_IMMEDIATE = "LD V{x}, {nn}"
    ADD_IMMEDIATE = "ADD V{x}, {nn}"
    SET_REGISTER = "LD V{x}, V{y}"
    OR = "OR V{x}, V{y}"
    AND = "AND V{x}, V{y}"
    XOR = "XOR V{x}, V{y}"
    ADD_REGISTER = "ADD V{x}, V{y}"
    SUBTRACT = "SUB V{x}, V{y}"
    SHIFT_RIGHT = "SHR V{x}, V{y}"
    SUBTRACT_REVERSED = "SUBN V{x}, V{y}"
    SHIFT_LEFT = "SHL V{x}, V{y}"
    SKIP_IF_NOT_EQUAL_REGISTER = "SNE V{x}, V{y}"
    SET_INDEX = "LD I, {nnn}"
    JUMP_WITH_OFFSET = "JP V0, {nnn}"
    RANDOM = "RND V{x}, {nn}"
    DRAW = "DRW V{x}, V{y}, {n}"
    SKIP_IF_KEY = "SKP V{x}"
    SKIP_IF_NOT_KEY = "SKNP V{x}"
    GET_DELAY_TIMER = "LD V{x}, DT"
    WAIT_FOR_KEY = "LD V{x}, K"
    SET_DELAY_TIMER = "LD DT, V{x}"
    SET_SOUND_TIMER = "LD ST, V{x}"
    ADD_TO_INDEX = "ADD I, V{x}"
    FONT_CHARACTER = "LD F, V{x}"
    BCD = "LD B, V{x}"
    STORE_REGISTERS = "LD [I], V{x}"
    LOAD_REGISTERS = "LD V{x}, [I]"


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


# Operations fully determined by the first nibble
_FIXED_OPERATIONS = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_IF_EQUAL_IMMEDIATE,
    0x4: Op.SKIP_IF_NOT_EQUAL_IMMEDIATE,
    0x6: Op.SET_IMMEDIATE,
    0x7: Op.ADD_IMMEDIATE,
    0xA: Op.SET_INDEX,
    0xB: Op.JUMP_WITH_OFFSET,
    0xC: Op.RANDOM,
    0xD: Op.DRAW,
}

# 8XYN, keyed by N
_ALU_OPERATIONS = {
    0x0: Op.SET_REGISTER,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REGISTER,
    0x5: Op.SUBTRACT,
    0x6: Op.SHIFT_RIGHT,
    0x7: Op.SUBTRACT_REVERSED,
    0xE: Op.SHIFT_LEFT,
}

# EXNN, keyed by NN
_KEY_OPERATIONS = {
    0x9E: Op.SKIP_IF_KEY,
    0xA1: Op.SKIP_IF_NOT_KEY,
}

# FXNN, keyed by NN
_MISC_OPERATIONS = {
    0x07: Op.GET_DELAY_TIMER,
    0x0A: Op.WAIT_FOR_KEY,
    0x15: Op.SET_DELAY_TIMER,
    0x18: Op.SET_SOUND_TIMER,
    0x1E: Op.ADD_TO_INDEX,
    0x29: Op.FONT_CHARACTER,
    0x33: Op.BCD,
    0x55: Op.STORE_REGISTERS,
    0x65: Op.LOAD_REGISTERS,
}


def _select_operation(instruction: int, opcode: int, n: int, nn: int) -> Optional[Op]:
    if opcode in _FIXED_OPERATIONS:
        return _FIXED_OPERATIONS[opcode]
    if opcode == 0x0:
        if instruction == 0x00E0:
            return Op.CLEAR_SCREEN
        if instruction == 0x00EE:
            return Op.RETURN
        return Op.SYSTEM
    if opcode == 0x5:
        return Op.SKIP_IF_EQUAL_REGISTER if n == 0 else None
    if opcode == 0x9:
        return Op.SKIP_IF_NOT_EQUAL_REGISTER if n == 0 else None
    if opcode == 0x8:
        return _ALU_OPERATIONS.get(n)
    if opcode == 0xE:
        return _KEY_OPERATIONS.get(nn)
    return _MISC_OPERATIONS.get(nn)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction)
    if not 0 <= instruction <= 0xFFFF:
        raise InvalidOpcode(instruction)

    opcode = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF
    op = _select_operation(instruction, opcode, n, nn)
    if op is None:
        raise InvalidOpcode(instruction)

    return DecodedInstruction(
        raw=instruction,
        op=op,
        opcode=opcode,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=n,
        nn=nn,
        nnn=instruction & 0x0FFF
    )


# BNNN as executed with the jump quirk, where X is the top nibble of NNN
_JUMP_WITH_OFFSET_VX = "JP V{x}, {nnn}"


def disassemble(instruction: DecodedInstruction, jump_quirk: bool = False) -> str:
    """Format a decoded instruction as a Cowgod-style mnemonic."""
    template = instruction.op.value
    if jump_quirk and instruction.op is Op.JUMP_WITH_OFFSET:
        template = _JUMP_WITH_OFFSET_VX
    return template.format(
        x=f"{instruction.x:X}",
        y=f"{instruction.y:X}",
        n=instruction.n,
        nn=f"0x{instruction.nn:02X}",
        nnn=f"0x{instruction.nnn:03X}",
    )
