"""Delay and sound timers, decaying at 60 Hz of supplied elapsed time."""

from vipcore.constants import TICK_DURATION
from vipcore.state import EmulatorState

# Absorbs float rounding when many short steps add up to a whole tick
TICK_TOLERANCE = 1e-9


def advance_timers(state: EmulatorState, elapsed_seconds: float) -> EmulatorState:
    """Add ``elapsed_seconds`` to the accumulator and apply every whole tick.

    Each tick lowers both timers by one, stopping at zero. The leftover
    fraction of a tick is kept for the next call, so splitting a stretch of
    time into more or fewer steps does not change the number of ticks.
    """
    total = state.elapsed + elapsed_seconds
    ticks = int((total + TICK_TOLERANCE) // TICK_DURATION)
    remainder = max(total - ticks * TICK_DURATION, 0.0)
    if ticks < 1:
        return state.replace(elapsed=remainder)
    return state.replace(
        delay_timer=max(state.delay_timer - ticks, 0),
        sound_timer=max(state.sound_timer - ticks, 0),
        elapsed=remainder,
    )


def is_tone_on(state: EmulatorState) -> bool:
    return state.sound_timer != 0
