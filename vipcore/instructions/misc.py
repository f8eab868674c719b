"""Timer, input, index and bulk memory instructions (FXNN)."""

import jax.numpy as jnp

from vipcore.constants import FONT_START, GLYPH_SIZE, WORD_MASK
from vipcore.state import EmulatorState, check_range
from vipcore.decode import DecodedInstruction


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Block until a key is released, then store it in VX.

    Only arms the wait; the release is picked up by
    :func:`vipcore.keypad.set_keydown`.
    """
    return state.replace(awaiting_input=True, awaiter_index=instruction.x)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=int(state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=int(state.V[instruction.x]))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I, wrapping at 16 bits. VF is not affected."""
    return state.replace(I=(state.I + int(state.V[instruction.x])) & WORD_MASK)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to the glyph for the low nibble of VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return state.replace(I=FONT_START + digit * GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    check_range(state.I, 3)
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[state.I:state.I + 3].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I; I ends past the last byte."""
    count = instruction.x + 1
    check_range(state.I, count)
    new_memory = state.memory.at[state.I:state.I + count].set(state.V[:count])
    return state.replace(memory=new_memory, I=(state.I + count) & WORD_MASK)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I; I ends past the last byte."""
    count = instruction.x + 1
    check_range(state.I, count)
    new_V = state.V.at[:count].set(state.memory[state.I:state.I + count])
    return state.replace(V=new_V, I=(state.I + count) & WORD_MASK)
