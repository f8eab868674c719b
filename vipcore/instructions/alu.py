"""ALU operations (8XYN).

Each operation maps ``(vx, vy)`` to ``(result, flag)``; a flag of ``None``
leaves VF untouched.
"""

from typing import Callable, Optional

from vipcore.constants import FLAG_REGISTER
from vipcore.state import EmulatorState
from vipcore.decode import DecodedInstruction

AluResult = tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX = VY >> 1, VF = old bit 0 of VY."""
    return vy >> 1, vy & 0x01


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX = VY << 1, VF = old bit 7 of VY."""
    return (vy << 1) & 0xFF, (vy & 0x80) >> 7


def make_alu_instruction(operation: Callable[[int, int], AluResult], flag_first: bool = False):
    """Wrap an ALU operation into an instruction handler.

    With ``flag_first`` VF is written before VX, so ``8FY6``/``8FYE`` leave
    the shifted value in VF. Otherwise the flag wins.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        result, flag = operation(int(state.V[instruction.x]), int(state.V[instruction.y]))
        V = state.V
        if flag is None:
            V = V.at[instruction.x].set(result)
        elif flag_first:
            V = V.at[FLAG_REGISTER].set(flag).at[instruction.x].set(result)
        else:
            V = V.at[instruction.x].set(result).at[FLAG_REGISTER].set(flag)
        return state.replace(V=V)
    alu_instruction.__name__ = f"execute_{operation.__name__}"
    alu_instruction.__doc__ = operation.__doc__
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_alu_instruction(alu_shift_right, flag_first=True)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_alu_instruction(alu_shift_left, flag_first=True)
