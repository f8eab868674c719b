"""Interpreter state structures and constructors."""

from typing import Optional

import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from vipcore.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, FILLER_BYTE, REGISTER_SENTINEL,
    NUM_REGISTERS, DISPLAY_SIZE, KEY_COUNT, STACK_SIZE,
)
from vipcore.entropy import RandomSource, PRNGRandomSource
from vipcore.errors import ConfigurationError, MemoryFault


class StackState(PyTreeNode):
    """Return address stack, two bytes per entry."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint8))
    pointer: int = 0

    @property
    def depth(self) -> int:
        return self.pointer // 2


class EmulatorState(PyTreeNode):
    """Complete machine state.

    Scalar registers are plain ints, the rest are uint8/bool arrays. The
    display is packed: byte ``y * 8 + x // 8`` holds pixel ``(x, y)`` at bit
    ``7 - x % 8``.
    """
    memory: jnp.ndarray = field(default_factory=lambda: jnp.full(MEMORY_SIZE, FILLER_BYTE, dtype=jnp.uint8))
    pc: int = PROGRAM_START
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8))
    stack: StackState = field(default_factory=StackState)
    delay_timer: int = 0
    sound_timer: int = 0
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(KEY_COUNT, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.full(NUM_REGISTERS, REGISTER_SENTINEL, dtype=jnp.uint8))
    I: int = REGISTER_SENTINEL
    awaiting_input: bool = False
    awaiter_index: int = 0
    elapsed: float = 0.0
    random_source: RandomSource = field(pytree_node=False, default_factory=PRNGRandomSource)
    # Accepted for compatibility with S-CHIP style hosts, no handler reads it
    modern_mode: bool = field(pytree_node=False, default=False)


def create_state_from_image(
    image: bytes,
    start_address: int = PROGRAM_START,
    random_source: Optional[RandomSource] = None,
    modern_mode: bool = False,
) -> EmulatorState:
    """Create a state whose memory is exactly ``image``."""
    if len(image) != MEMORY_SIZE:
        raise ConfigurationError(
            f"Memory image must be exactly {MEMORY_SIZE} bytes, got {len(image)}"
        )
    if not 0 <= start_address < MEMORY_SIZE:
        raise ConfigurationError(f"Start address {start_address:#x} is outside memory")

    return EmulatorState(
        memory=jnp.array(list(image), dtype=jnp.uint8),
        pc=start_address,
        random_source=random_source if random_source is not None else PRNGRandomSource(),
        modern_mode=modern_mode,
    )


def build_image(rom: bytes, load_address: int = PROGRAM_START) -> bytes:
    """Lay out font, filler and ``rom`` into a full memory image."""
    if load_address < PROGRAM_START:
        raise ConfigurationError(
            f"Load address {load_address:#x} overlaps the reserved region below {PROGRAM_START:#x}"
        )
    if len(rom) > MEMORY_SIZE - load_address:
        raise ConfigurationError(
            f"ROM of {len(rom)} bytes does not fit at {load_address:#x} "
            f"({max(MEMORY_SIZE - load_address, 0)} bytes available)"
        )

    image = bytearray([FILLER_BYTE]) * MEMORY_SIZE
    font = bytes(FONT_DATA.tolist())
    image[FONT_START:FONT_START + len(font)] = font
    image[load_address:load_address + len(rom)] = rom
    return bytes(image)


def create_state_from_rom(
    rom: bytes,
    load_address: int = PROGRAM_START,
    random_source: Optional[RandomSource] = None,
    modern_mode: bool = False,
) -> EmulatorState:
    """Create a state with ``rom`` placed at ``load_address`` and PC pointing at it."""
    return create_state_from_image(
        build_image(rom, load_address), load_address, random_source, modern_mode
    )


def create_state(random_source: Optional[RandomSource] = None) -> EmulatorState:
    """Create a state with the font loaded and no program."""
    return create_state_from_rom(b"", PROGRAM_START, random_source)


def check_range(address: int, length: int = 1) -> None:
    """Raise MemoryFault unless ``length`` bytes from ``address`` lie in memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryFault(address, length)
