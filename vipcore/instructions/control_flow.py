"""Control flow instructions: jumps, calls and conditional skips."""

from typing import Callable

from vipcore.constants import WORD_MASK, KEY_COUNT
from vipcore.state import EmulatorState
from vipcore.decode import DecodedInstruction
from vipcore.stack import push

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=instruction.addr)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    return state.replace(pc=(instruction.addr + int(state.V[0])) & WORD_MASK)


def skip_next(state: EmulatorState) -> EmulatorState:
    return state.replace(pc=(state.pc + 2) & WORD_MASK)


def make_skip_instruction(condition_fn: Callable[[EmulatorState, DecodedInstruction], bool]) -> Handler:
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return skip_next(state)
        return state
    return skip_instruction


def is_key_down(state: EmulatorState, key: int) -> bool:
    """Level state of a key; values outside the keypad read as released."""
    return key < KEY_COUNT and bool(state.keypad[key])


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.k
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.k
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)

execute_skip_if_key = make_skip_instruction(
    lambda state, inst: is_key_down(state, int(state.V[inst.x]))
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not is_key_down(state, int(state.V[inst.x]))
)
