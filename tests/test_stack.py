"""Tests for the subroutine stack and fault types."""

import pytest
from chix8 import StackState, StackOverflow, StackUnderflow, MemoryOutOfBounds, InvalidOpcode, Chip8Error
from chix8.stack import push, pop, depth


def test_push_pop():
    stack = push(push(StackState(), 0x202), 0x304)
    assert depth(stack) == 2

    stack, address = pop(stack)
    assert address == 0x304
    stack, address = pop(stack)
    assert address == 0x202
    assert depth(stack) == 0


def test_push_rejects_address_past_memory():
    with pytest.raises(MemoryOutOfBounds) as excinfo:
        push(StackState(), 0x1000)
    assert excinfo.value.address == 0x1000


def test_push_accepts_last_address():
    stack, address = pop(push(StackState(), 0xFFF))
    assert address == 0xFFF


def test_overflow_keeps_capacity():
    stack = StackState()
    for i in range(16):
        stack = push(stack, 0x200 + i)
    with pytest.raises(StackOverflow) as excinfo:
        push(stack, 0x300)
    assert excinfo.value.capacity == 16


def test_underflow():
    with pytest.raises(StackUnderflow):
        pop(StackState())


@pytest.mark.parametrize("error", [
    InvalidOpcode(0x8AB8), StackOverflow(), StackUnderflow(), MemoryOutOfBounds(0x1000),
])
def test_faults_share_base_class(error):
    assert isinstance(error, Chip8Error)


def test_memory_fault_message():
    assert "0x1000" in str(MemoryOutOfBounds(0x1000))
