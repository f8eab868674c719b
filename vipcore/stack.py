"""Call stack operations."""

from vipcore.constants import STACK_SIZE, WORD_MASK
from vipcore.errors import StackOverflow, StackUnderflow
from vipcore.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack, low byte first."""
    if stack.pointer > STACK_SIZE - 2:
        raise StackOverflow(f"Call stack full ({stack.depth} return addresses)")
    address &= WORD_MASK
    new_data = stack.data.at[stack.pointer].set(address & 0xFF)
    new_data = new_data.at[stack.pointer + 1].set(address >> 8)
    return stack.replace(data=new_data, pointer=stack.pointer + 2)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack, high byte first."""
    if stack.pointer < 2:
        raise StackUnderflow()
    new_pointer = stack.pointer - 2
    high = int(stack.data[new_pointer + 1])
    low = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer:new_pointer + 2].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), (high << 8) | low
