"""Host timing disciplines for driving an Interpreter.

Two ways of feeding the interpreter are supported:

* fixed frequency: once per display refresh, run the whole number of
  instruction cycles that became due since the previous refresh;
* real time: sleep towards the target instruction period and step once per
  iteration with the measured elapsed time.

Timers only depend on the elapsed time handed to ``step``, so both give the
same 60 Hz timer decay.
"""

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from vipcore.interpreter import Interpreter
from vipcore.logging import RunCallback


class FixedFrequencyPacer:
    """Runs ``frequency / refresh_rate`` instruction cycles per frame.

    The fractional part of the cycle budget carries over between frames.
    Frame time is handed to the first step of a frame, or held until a
    frame that actually steps.
    """

    def __init__(self, frequency: int, refresh_rate: float = 60.0):
        if frequency <= 0 or refresh_rate <= 0:
            raise ValueError("frequency and refresh_rate must be positive")
        self.frequency = frequency
        self.refresh_rate = refresh_rate
        self.cycles_per_frame = frequency / refresh_rate
        self.cycles_due = 0.0
        self.pending_elapsed = 0.0

    def run_frame(self, interpreter: Interpreter, frame_seconds: Optional[float] = None) -> bool:
        """Run the cycles due for one frame. Returns False if the machine halted."""
        if frame_seconds is None:
            frame_seconds = 1.0 / self.refresh_rate
        self.pending_elapsed += frame_seconds
        self.cycles_due += self.cycles_per_frame

        while self.cycles_due >= 1.0:
            self.cycles_due -= 1.0
            elapsed, self.pending_elapsed = self.pending_elapsed, 0.0
            if not interpreter.step(elapsed):
                return False
        return True


class RealTimePacer:
    """Steps once per iteration with the measured wall-clock delta."""

    def __init__(
        self,
        frequency: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if frequency <= 0:
            raise ValueError("frequency must be positive")
        self.period = 1.0 / frequency
        self.clock = clock
        self.sleep = sleep
        self.last_time: Optional[float] = None

    def tick(self, interpreter: Interpreter) -> bool:
        """Sleep towards the next instruction slot, then step once."""
        now = self.clock()
        if self.last_time is not None:
            remaining = self.period - (now - self.last_time)
            if remaining > 0:
                self.sleep(remaining)
                now = self.clock()
            elapsed = now - self.last_time
        else:
            elapsed = 0.0
        self.last_time = now
        return interpreter.step(elapsed)


def run_headless(
    interpreter: Interpreter,
    frequency: int = 540,
    refresh_rate: float = 60.0,
    max_frames: int = 600,
    callbacks: Optional[Sequence[RunCallback]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Run in fixed-frequency mode with simulated frame time, without a window.

    Stops after ``max_frames`` frames or when the machine halts.
    """
    callbacks: List[RunCallback] = list(callbacks or [])
    pacer = FixedFrequencyPacer(frequency, refresh_rate)

    run_config = {"frequency": frequency, "refresh_rate": refresh_rate, "max_frames": max_frames}
    run_config.update(config or {})
    for callback in callbacks:
        callback.on_run_start(run_config)

    frames = 0
    running = True
    while running and frames < max_frames:
        running = pacer.run_frame(interpreter)
        frames += 1
        for callback in callbacks:
            callback.on_frame(frames, interpreter)

    summary = {
        "frames": frames,
        "instructions": interpreter.instruction_count,
        "halted": interpreter.halted,
        "fault": str(interpreter.fault) if interpreter.fault else None,
        "pc": f"{interpreter.state.pc:#06x}",
    }
    for callback in callbacks:
        callback.on_run_end(summary)
    return summary
