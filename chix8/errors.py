"""Faults raised by the CHIP-8 core.

Every fault is fatal for the cycle that raised it. States are immutable, so the
state passed to ``step`` is left exactly as it was; the driver decides whether
to stop, pause or report.
"""

from chix8.constants import MEMORY_SIZE, STACK_SIZE


class Chip8Error(Exception):
    """Base class for CHIP-8 execution faults."""


class InvalidOpcode(Chip8Error):
    """Instruction word does not match any CHIP-8 operation."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"Invalid instruction 0x{word:04X}")


class StackOverflow(Chip8Error):
    """Subroutine call with a full stack."""

    def __init__(self, capacity: int = STACK_SIZE):
        self.capacity = capacity
        super().__init__(f"Stack overflow: more than {capacity} nested calls")


class StackUnderflow(Chip8Error):
    """Return with an empty stack."""

    def __init__(self):
        super().__init__("Stack underflow: return without matching call")


class MemoryOutOfBounds(Chip8Error):
    """Computed address falls outside 0x000-0xFFF."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"Memory access of {length} byte(s) at 0x{address:X} "
            f"outside 0x000-0x{MEMORY_SIZE - 1:03X}"
        )
