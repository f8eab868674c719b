"""Register and index instructions (6XNN, 7XNN, ANNN, CXNN)."""

from vipcore.state import EmulatorState
from vipcore.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.k))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping, VF untouched."""
    value = (int(state.V[instruction.x]) + instruction.k) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(value))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=instruction.addr)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random byte & NN."""
    random_value = int(state.random_source()) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.k))
