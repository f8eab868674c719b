"""Layout constants for the VIP-style 8-bit interpreter."""

import jax.numpy as jnp

MEMORY_SIZE = 0x1000
WORD_MASK = 0xFFFF
PROGRAM_START = 0x200

# Unused memory and uninitialised registers read as 0xFF
FILLER_BYTE = 0xFF
REGISTER_SENTINEL = 0xFF

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF

# Return addresses are stored as two bytes each
STACK_DEPTH = 32
STACK_SIZE = STACK_DEPTH * 2

KEY_COUNT = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
ROW_BYTES = SCREEN_WIDTH // 8
DISPLAY_SIZE = SCREEN_WIDTH * SCREEN_HEIGHT // 8

TIMER_FREQUENCY = 60
TICK_DURATION = 1.0 / TIMER_FREQUENCY

FONT_START = 0x000
GLYPH_SIZE = 5
FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)
