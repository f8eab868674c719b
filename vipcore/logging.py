"""Console logging utilities for vipcore.

A small print-based logger with levels, colours and elapsed-time stamps,
run callbacks invoked by the headless pacing loop, and a tqdm progress bar
for runs with a known frame budget.
"""

import sys
import time
from typing import Any, Dict, List, Optional, TextIO

from tqdm import tqdm

from vipcore.keypad import pressed_keys


class ConsoleLogger:
    """Print-based logger with levels, ANSI colours and elapsed-time stamps.

    Colours are only used when the output stream is a terminal.
    """

    LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        name: str = "vipcore",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        level = log_level.upper()
        if level not in self.LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(self.LEVELS)}")
        self.name = name
        self.log_level = level
        self.threshold = self.LEVELS.index(level)
        self.stream = stream if stream is not None else sys.stdout
        isatty = getattr(self.stream, "isatty", None)
        self.use_colors = use_colors and callable(isatty) and isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        level = level.upper()
        rank = self.LEVELS.index(level) if level in self.LEVELS else 1
        return rank >= self.threshold

    def _format_message(self, level: str, message: str) -> str:
        parts = []
        if self.show_timestamps:
            parts.append(f"[{time.time() - self.start_time:8.2f}s]")
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = self.COLORS.get(level.upper(), "") + tag + self.RESET
        parts.append(tag)
        parts.append(f"[{self.name}]")
        return "".join(parts) + " " + message

    def log(self, level: str, message: str):
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class MachineLogger(ConsoleLogger):
    """Logger for interpreter lifecycle events."""

    def __init__(self, name: str = "vipcore", **kwargs):
        super().__init__(name, **kwargs)

    def log_program_loaded(self, source: str, size: int, address: int, image: bool = False):
        kind = "image" if image else "ROM"
        self.info(f"Loaded {kind} {source} ({size} bytes), starting at {address:#05x}")

    def log_halt(self, fault: Exception, pc: int, instruction_count: int):
        self.warning(
            f"Machine halted after {instruction_count} instructions "
            f"(PC={pc:#06x}): {fault}"
        )

    def log_run_summary(self, summary: Dict[str, Any]):
        self.info("=" * 60)
        self.info("Run finished:")
        for key, value in summary.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.3f}")
            else:
                self.info(f"  {key}: {value}")
        self.info("=" * 60)


class RunCallback:
    """Base class for run callbacks."""

    def on_run_start(self, config: Dict[str, Any]):
        """Called before the first frame."""
        pass

    def on_frame(self, frame: int, interpreter: Any):
        """Called after every frame."""
        pass

    def on_run_end(self, summary: Dict[str, Any]):
        """Called once the run stops, for any reason."""
        pass


class ConsoleCallback(RunCallback):
    """Reports run progress through a MachineLogger."""

    def __init__(self, log_interval: int = 60, logger: Optional[MachineLogger] = None):
        self.log_interval = log_interval
        self.logger = logger or MachineLogger()

    def on_run_start(self, config: Dict[str, Any]):
        self.logger.info("Starting run:")
        for key, value in config.items():
            self.logger.info(f"  {key}: {value}")

    def on_frame(self, frame: int, interpreter: Any):
        if self.log_interval and frame % self.log_interval == 0:
            state = interpreter.state
            self.logger.debug(
                f"Frame {frame:6d} PC={state.pc:#06x} I={state.I:#06x} "
                f"DT={state.delay_timer:3d} ST={state.sound_timer:3d} "
                f"keys={pressed_keys(state)} instructions={interpreter.instruction_count}"
            )

    def on_run_end(self, summary: Dict[str, Any]):
        self.logger.log_run_summary(summary)


class FrameStatsCallback(RunCallback):
    """Collects per-frame statistics of a run."""

    def __init__(self):
        self.instructions_per_frame: List[int] = []
        self.tone_frames = 0
        self._last_count = 0

    def on_run_start(self, config: Dict[str, Any]):
        self.instructions_per_frame = []
        self.tone_frames = 0
        self._last_count = 0

    def on_frame(self, frame: int, interpreter: Any):
        count = interpreter.instruction_count
        self.instructions_per_frame.append(count - self._last_count)
        self._last_count = count
        if interpreter.is_tone_on():
            self.tone_frames += 1

    def get_statistics(self) -> Dict[str, float]:
        frames = len(self.instructions_per_frame)
        if frames == 0:
            return {"frames": 0, "mean_instructions_per_frame": 0.0, "tone_frames": 0}
        return {
            "frames": frames,
            "mean_instructions_per_frame": sum(self.instructions_per_frame) / frames,
            "tone_frames": self.tone_frames,
        }


class ProgressCallback(RunCallback):
    """tqdm progress bar over a fixed frame budget."""

    def __init__(self, total_frames: int, desc: Optional[str] = None, **kwargs):
        self.total_frames = total_frames
        self.desc = desc or f"Running ({total_frames:,} frames)"
        for kwarg in ("total", "unit"):
            kwargs.pop(kwarg, None)
        self.kwargs = kwargs
        self.bar = None

    def on_run_start(self, config: Dict[str, Any]):
        self.bar = tqdm(total=self.total_frames, desc=self.desc, unit="frame", **self.kwargs)

    def on_frame(self, frame: int, interpreter: Any):
        if self.bar is not None:
            self.bar.update(1)
            self.bar.set_postfix(pc=f"{interpreter.state.pc:#06x}", refresh=False)

    def on_run_end(self, summary: Dict[str, Any]):
        if self.bar is not None:
            self.bar.close()
            self.bar = None


def get_logger(name: str = "vipcore", log_level: str = "INFO", **kwargs) -> MachineLogger:
    return MachineLogger(name, log_level=log_level, **kwargs)
