"""CHIP-8 stack operations."""

from chip8core.errors import StackUnderflow
from chip8core.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push return address onto stack."""
    return stack.replace(data=stack.data + (int(address),))


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop return address from stack."""
    if not stack.data:
        raise StackUnderflow()
    return stack.replace(data=stack.data[:-1]), stack.data[-1]
