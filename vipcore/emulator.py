"""Fetch, decode and dispatch."""

from typing import Callable

from vipcore.constants import WORD_MASK
from vipcore.state import EmulatorState, check_range
from vipcore.decode import DecodedInstruction, decode, join_word
from vipcore.errors import UnknownInstruction
from vipcore.instructions.system import execute_clear_screen, execute_return
from vipcore.instructions.control_flow import (
    execute_jump, execute_call, execute_jump_with_offset,
    execute_skip_if_equal_immediate, execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register, execute_skip_if_not_equal_register,
    execute_skip_if_key, execute_skip_if_not_key,
)
from vipcore.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor, execute_alu_add,
    execute_alu_sub_xy, execute_alu_shift_right, execute_alu_sub_yx, execute_alu_shift_left,
)
from vipcore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from vipcore.instructions.display import execute_display
from vipcore.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]

# (mask, value, handler). Patterns are disjoint, so at most one entry matches.
OPCODE_TABLE: tuple[tuple[int, int, Handler], ...] = (
    (0xFFFF, 0x00E0, execute_clear_screen),
    (0xFFFF, 0x00EE, execute_return),
    (0xF000, 0x1000, execute_jump),
    (0xF000, 0x2000, execute_call),
    (0xF000, 0x3000, execute_skip_if_equal_immediate),
    (0xF000, 0x4000, execute_skip_if_not_equal_immediate),
    (0xF00F, 0x5000, execute_skip_if_equal_register),
    (0xF000, 0x6000, execute_set),
    (0xF000, 0x7000, execute_add),
    (0xF00F, 0x8000, execute_alu_set),
    (0xF00F, 0x8001, execute_alu_or),
    (0xF00F, 0x8002, execute_alu_and),
    (0xF00F, 0x8003, execute_alu_xor),
    (0xF00F, 0x8004, execute_alu_add),
    (0xF00F, 0x8005, execute_alu_sub_xy),
    (0xF00F, 0x8006, execute_alu_shift_right),
    (0xF00F, 0x8007, execute_alu_sub_yx),
    (0xF00F, 0x800E, execute_alu_shift_left),
    (0xF00F, 0x9000, execute_skip_if_not_equal_register),
    (0xF000, 0xA000, execute_set_index),
    (0xF000, 0xB000, execute_jump_with_offset),
    (0xF000, 0xC000, execute_random),
    (0xF000, 0xD000, execute_display),
    (0xF0FF, 0xE09E, execute_skip_if_key),
    (0xF0FF, 0xE0A1, execute_skip_if_not_key),
    (0xF0FF, 0xF007, execute_get_delay_timer),
    (0xF0FF, 0xF00A, execute_wait_for_key),
    (0xF0FF, 0xF015, execute_set_delay_timer),
    (0xF0FF, 0xF018, execute_set_sound_timer),
    (0xF0FF, 0xF01E, execute_add_to_index),
    (0xF0FF, 0xF029, execute_font_character),
    (0xF0FF, 0xF033, execute_bcd_conversion),
    (0xF0FF, 0xF055, execute_store_registers),
    (0xF0FF, 0xF065, execute_load_registers),
)


def lookup(instruction: int) -> Handler:
    """Find the handler for an instruction word, or raise UnknownInstruction."""
    for mask, value, handler in OPCODE_TABLE:
        if instruction & mask == value:
            return handler
    raise UnknownInstruction(instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single instruction. PC must already point past it."""
    instruction = int(instruction)
    return lookup(instruction)(state, decode(instruction))


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC."""
    check_range(state.pc, 2)
    instruction = join_word(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=(state.pc + 2) & WORD_MASK), instruction
