"""Test configuration and fixtures for interpreter tests."""

import pytest
import jax.numpy as jnp
from vipcore import create_state, constant_source, Interpreter
from vipcore.logging import MachineLogger


def quiet_logger():
    return MachineLogger(log_level="CRITICAL", use_colors=False)


@pytest.fixture
def fresh_state():
    """Provide a fresh state with the font loaded and a zero random source."""
    return create_state(constant_source(0))


@pytest.fixture
def logger():
    return quiet_logger()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def interpreter_with_rom(rom, random_source=None):
    """Interpreter with ``rom`` at 0x200 and a zero random source."""
    return Interpreter.from_rom(
        bytes(rom), random_source=random_source or constant_source(0), logger=quiet_logger()
    )


def run(interpreter, limit=10_000):
    """Step with no elapsed time until the machine halts."""
    for _ in range(limit):
        if not interpreter.step(0.0):
            return interpreter
    raise AssertionError(f"Program did not halt within {limit} steps")


def run_rom(rom, random_source=None):
    return run(interpreter_with_rom(rom, random_source))


def rom_with_trailing_data(code, data):
    """Prefix ``code`` with ANNN pointing I at ``data`` appended after it.

    Returns the ROM and the address just past the code, where the
    unknown instruction in ``code`` halts.
    """
    code = list(code)
    data_address = 0x200 + len(code) + 2
    rom = [0xA0 | (data_address >> 8), data_address & 0xFF] + code + list(data)
    return rom, data_address
