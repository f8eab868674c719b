"""Tests for the 60 Hz timer accumulator."""

import pytest
from vipcore.timers import advance_timers, is_tone_on


@pytest.fixture
def armed_state(fresh_state):
    return fresh_state.replace(delay_timer=0xFF, sound_timer=0xFF)


def advance(state, steps, seconds):
    for _ in range(steps):
        state = advance_timers(state, seconds)
    return state


@pytest.mark.parametrize("steps,seconds,ticks", [
    (1, 1.0, 60),
    (60, 1 / 60, 60),
    (540, 1 / 540, 60),
    (9, 1 / 540, 1),
    (3, 1 / 180, 1),
    (2160, 1 / 540, 240),
    (1000, 1 / 1000, 60),
])
def test_whole_ticks_of_cumulative_time(armed_state, steps, seconds, ticks):
    state = advance(armed_state, steps, seconds)

    assert state.delay_timer == 0xFF - ticks
    assert state.sound_timer == 0xFF - ticks
    assert 0.0 <= state.elapsed < 1 / 60


def test_just_short_of_a_tick(armed_state):
    state = advance_timers(armed_state, 1 / 60 - 1e-4)

    assert state.delay_timer == 0xFF
    assert state.elapsed == pytest.approx(1 / 60 - 1e-4)


def test_remainder_carries_over(armed_state):
    state = advance_timers(armed_state, 0.025)
    assert state.delay_timer == 0xFE
    assert state.elapsed == pytest.approx(0.025 - 1 / 60)

    state = advance_timers(state, 0.01)
    assert state.delay_timer == 0xFD


def test_timers_decay_independently(fresh_state):
    state = fresh_state.replace(delay_timer=5, sound_timer=2)
    state = advance_timers(state, 3 / 60)

    assert state.delay_timer == 2
    assert state.sound_timer == 0
    assert not is_tone_on(state)


def test_zero_elapsed_is_a_no_op(armed_state):
    state = advance_timers(armed_state, 0.0)

    assert state.delay_timer == 0xFF
    assert state.elapsed == 0.0
    assert is_tone_on(state)
