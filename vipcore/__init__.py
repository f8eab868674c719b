"""Interpreter for the VIP-style 8-bit virtual machine."""

from vipcore.state import EmulatorState, create_state, create_state_from_image, create_state_from_rom
from vipcore.emulator import execute, fetch, lookup, OPCODE_TABLE
from vipcore.decode import DecodedInstruction, decode
from vipcore.interpreter import Interpreter
from vipcore.entropy import PRNGRandomSource, constant_source, sequence_source
from vipcore.errors import (
    VipcoreError, ConfigurationError, MachineFault,
    StackOverflow, StackUnderflow, UnknownInstruction, MemoryFault,
)
from vipcore.constants import *

__all__ = [
    "EmulatorState",
    "create_state",
    "create_state_from_image",
    "create_state_from_rom",
    "fetch",
    "execute",
    "lookup",
    "OPCODE_TABLE",
    "DecodedInstruction",
    "decode",
    "Interpreter",
    "PRNGRandomSource",
    "constant_source",
    "sequence_source",
    "VipcoreError",
    "ConfigurationError",
    "MachineFault",
    "StackOverflow",
    "StackUnderflow",
    "UnknownInstruction",
    "MemoryFault",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_DEPTH",
    "KEY_COUNT",
    "TICK_DURATION",
]
