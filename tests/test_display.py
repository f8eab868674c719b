"""Tests for display operations (DXYN)."""

import pytest
import jax.numpy as jnp
from vipcore import execute, MemoryFault
from vipcore.instructions.display import get_pixel, draw_sprite
from vipcore.rendering import unpack_framebuffer
from conftest import setup_sprite_in_memory

CHECKERBOARD = [0xAA, 0x55, 0xAA, 0x55, 0xAA, 0x55, 0xAA, 0x55]


def lit_pixels(display):
    """Set of (x, y) pixels that are on."""
    ys, xs = unpack_framebuffer(display).nonzero()
    return {(int(x), int(y)) for x, y in zip(xs, ys)}


def draw_at(state, x, y, sprite, address=0x300):
    state = setup_sprite_in_memory(state, address, sprite)
    state = state.replace(V=state.V.at[0].set(x).at[1].set(y), I=address)
    return execute(state, 0xD010 | len(sprite))


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = draw_at(fresh_state, 10, 5, [0xC0, 0xC0])

        assert lit_pixels(state.display) == {(10, 5), (11, 5), (10, 6), (11, 6)}
        assert state.V[15] == 0

    def test_checkerboard_at_origin(self, fresh_state):
        """8x8 checkerboard at (0, 0) on a clear screen."""
        state = draw_at(fresh_state, 0, 0, CHECKERBOARD)

        expected = {(x, y) for x in range(8) for y in range(8) if x % 2 == y % 2}
        assert lit_pixels(state.display) == expected
        assert state.V[15] == 0

    def test_checkerboard_twice_clears_and_collides(self, fresh_state):
        """Second identical draw erases everything and sets VF."""
        state = draw_at(fresh_state, 0, 0, CHECKERBOARD)
        state = execute(state, 0xD018)

        assert lit_pixels(state.display) == set()
        assert state.V[15] == 1

    def test_checkerboard_offset(self, fresh_state):
        """Unaligned draw spreads each row over two storage bytes."""
        state = draw_at(fresh_state, 1, 1, CHECKERBOARD)

        expected = {(x, y) for x in range(1, 9) for y in range(1, 9) if x % 2 == y % 2}
        assert lit_pixels(state.display) == expected

    def test_vf_cleared_without_collision(self, fresh_state):
        """VF is reset to 0 when nothing is erased."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(1))
        state = draw_at(state, 5, 5, [0x80])

        assert state.V[15] == 0

    def test_font_glyph(self, fresh_state):
        """Draw the built-in zero glyph."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0))
        state = execute(state, 0xF029)
        state = execute(state, 0xD005)

        zero = {(0, 0), (1, 0), (2, 0), (3, 0),
                (0, 1), (3, 1), (0, 2), (3, 2), (0, 3), (3, 3),
                (0, 4), (1, 4), (2, 4), (3, 4)}
        assert lit_pixels(state.display) == zero


class TestCollision:
    """Collision flag semantics."""

    def test_single_pixel_collision(self, fresh_state):
        state = draw_at(fresh_state, 20, 10, [0x80])
        assert get_pixel(state.display, 20, 10)
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert not get_pixel(state.display, 20, 10)
        assert state.V[15] == 1

    def test_overlap_without_erasing_is_no_collision(self, fresh_state):
        """Adding pixels next to lit ones is not a collision."""
        state = draw_at(fresh_state, 0, 0, [0xF0])
        state = draw_at(state, 0, 0, [0x0F], address=0x310)

        assert lit_pixels(state.display) == {(x, 0) for x in range(8)}
        assert state.V[15] == 0

    def test_collision_in_spilled_byte(self, fresh_state):
        """A collision detected only in the second storage byte still counts."""
        state = draw_at(fresh_state, 8, 0, [0x80])
        state = draw_at(state, 7, 0, [0x40], address=0x310)

        assert lit_pixels(state.display) == set()
        assert state.V[15] == 1

    def test_self_inverse(self, fresh_state):
        """Drawing the same sprite twice restores any prior content."""
        state = draw_at(fresh_state, 3, 2, [0x3C, 0x42, 0x81])
        before = state.display

        state = draw_at(state, 13, 6, [0xFF, 0x81, 0xFF], address=0x320)
        state = execute(state, 0xD013)

        assert jnp.array_equal(state.display, before)


class TestScreenBoundaries:
    """Sprites are clipped, never wrapped."""

    def test_right_edge_clipping(self, fresh_state):
        state = draw_at(fresh_state, 60, 0, [0xFF])

        assert lit_pixels(state.display) == {(60, 0), (61, 0), (62, 0), (63, 0)}

    def test_bottom_edge_clipping(self, fresh_state):
        state = draw_at(fresh_state, 0, 30, [0x80, 0x80, 0x80])

        assert lit_pixels(state.display) == {(0, 30), (0, 31)}

    def test_bottom_right_corner(self, fresh_state):
        """8x8 block at (57, 25) keeps only the on-screen part."""
        state = draw_at(fresh_state, 0x39, 0x19, [0xFF] * 8)

        expected = {(x, y) for x in range(57, 64) for y in range(25, 32)}
        assert lit_pixels(state.display) == expected

    def test_no_wrap_into_next_row(self, fresh_state):
        """Pixels past column 63 do not appear at the start of the next row."""
        state = draw_at(fresh_state, 62, 0, [0xFF])

        assert not get_pixel(state.display, 0, 1)
        assert lit_pixels(state.display) == {(62, 0), (63, 0)}

    def test_off_screen_coordinates_draw_nothing(self, fresh_state):
        """VX >= 64 or VY >= 32 draws nothing and clears VF."""
        state = draw_at(fresh_state, 70, 5, [0xFF])
        assert lit_pixels(state.display) == set()
        assert state.V[15] == 0

        state = draw_at(fresh_state, 5, 40, [0xFF])
        assert lit_pixels(state.display) == set()

    def test_zero_height(self, fresh_state):
        state = fresh_state.replace(V=fresh_state.V.at[15].set(1))
        state = execute(state, 0xD000)

        assert lit_pixels(state.display) == set()
        assert state.V[15] == 0

    def test_sprite_past_end_of_memory(self, fresh_state):
        state = fresh_state.replace(I=0xFFE, V=fresh_state.V.at[0].set(0).at[1].set(0))
        with pytest.raises(MemoryFault):
            execute(state, 0xD013)


class TestFramebufferHelpers:
    """Packed layout helpers."""

    def test_get_pixel_bit_order(self, fresh_state):
        display = fresh_state.display.at[0].set(0x80).at[9].set(0x01)

        assert get_pixel(display, 0, 0)
        assert not get_pixel(display, 1, 0)
        assert get_pixel(display, 15, 1)

    def test_get_pixel_out_of_bounds(self, fresh_state):
        display = jnp.full_like(fresh_state.display, 0xFF)

        assert not get_pixel(display, 64, 0)
        assert not get_pixel(display, 0, 32)
        assert not get_pixel(display, -1, 0)

    def test_draw_sprite_direct(self, fresh_state):
        sprite = jnp.array([0xFF], dtype=jnp.uint8)
        display, collision = draw_sprite(fresh_state.display, sprite, 4, 0)

        assert not collision
        assert int(display[0]) == 0x0F
        assert int(display[1]) == 0xF0
