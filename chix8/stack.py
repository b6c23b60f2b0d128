"""CHIP-8 stack operations."""

from chix8.constants import STACK_SIZE
from chix8.errors import StackOverflow, StackUnderflow
from chix8.memory import check_address
from chix8.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push a return address onto the stack.

    A return address past 0xFFF (a call fetched from 0xFFE) raises
    ``MemoryOutOfBounds``.
    """
    pointer = int(stack.pointer)
    if pointer >= STACK_SIZE:
        raise StackOverflow(STACK_SIZE)
    new_data = stack.data.at[pointer].set(check_address(address))
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    pointer = int(stack.pointer)
    if pointer == 0:
        raise StackUnderflow()
    new_pointer = pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def depth(stack: StackState) -> int:
    return int(stack.pointer)
