"""Display operations on the packed framebuffer (DXYN)."""

import jax.numpy as jnp
from vipcore.state import EmulatorState, check_range
from vipcore.decode import DecodedInstruction
from vipcore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, ROW_BYTES, FLAG_REGISTER


def get_pixel(display: jnp.ndarray, x: int, y: int) -> bool:
    """Pixel at ``(x, y)``; coordinates off screen read as unset."""
    if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
        return False
    byte = int(display[y * ROW_BYTES + x // 8])
    return bool((byte >> (7 - x % 8)) & 0x01)


def _xor_bytes(display: jnp.ndarray, offsets: jnp.ndarray, values: jnp.ndarray) -> tuple[jnp.ndarray, bool]:
    current = display[offsets]
    collision = bool(jnp.any((current & values) != 0))
    return display.at[offsets].set(current ^ values), collision


def draw_sprite(display: jnp.ndarray, sprite: jnp.ndarray, x: int, y: int) -> tuple[jnp.ndarray, bool]:
    """XOR ``sprite`` rows into ``display`` with the top-left corner at ``(x, y)``.

    Pixels past the right or bottom edge are clipped. A sprite byte that is
    not byte aligned spills into the next storage byte of the same row only;
    nothing wraps. Returns the new display and whether any set pixel was
    cleared.
    """
    visible_rows = max(0, min(sprite.shape[0], SCREEN_HEIGHT - y))
    if x >= SCREEN_WIDTH or visible_rows == 0:
        return display, False

    sprite = sprite[:visible_rows].astype(jnp.uint16)
    column, shift = divmod(x, 8)
    offsets = (y + jnp.arange(visible_rows)) * ROW_BYTES + column

    display, collision = _xor_bytes(display, offsets, (sprite >> shift).astype(jnp.uint8))
    if shift and column < ROW_BYTES - 1:
        spill = ((sprite << (8 - shift)) & 0xFF).astype(jnp.uint8)
        display, spilled_collision = _xor_bytes(display, offsets + 1, spill)
        collision = collision or spilled_collision
    return display, collision


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw N sprite rows from memory at I to (VX, VY), VF = collision."""
    height = instruction.n
    if height:
        check_range(state.I, height)
    sprite = state.memory[state.I:state.I + height]
    display, collision = draw_sprite(
        state.display, sprite, int(state.V[instruction.x]), int(state.V[instruction.y])
    )
    return state.replace(display=display, V=state.V.at[FLAG_REGISTER].set(int(collision)))
