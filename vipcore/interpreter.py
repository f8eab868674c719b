"""Stateful interpreter driven one step at a time by a host loop."""

import math
from typing import Optional

from vipcore.constants import PROGRAM_START
from vipcore.emulator import fetch, execute
from vipcore.entropy import RandomSource
from vipcore.errors import MachineFault
from vipcore.instructions.display import get_pixel
from vipcore.keypad import set_keydown
from vipcore.logging import MachineLogger, get_logger
from vipcore.state import EmulatorState, create_state_from_image, create_state_from_rom
from vipcore.timers import advance_timers, is_tone_on


class Interpreter:
    """Owns one machine state and advances it on request.

    Runtime faults (stack overflow or underflow, unknown instructions,
    memory access out of range) make :meth:`step` return ``False``. The
    state is left as it was when the fault hit and the interpreter stays
    halted from then on.
    """

    def __init__(self, state: EmulatorState, logger: Optional[MachineLogger] = None):
        self.state = state
        self.logger = logger or get_logger()
        self.fault: Optional[MachineFault] = None
        self.instruction_count = 0
        if state.modern_mode:
            self.logger.warning("modern_mode is accepted but not applied; running base semantics")

    @classmethod
    def from_image(
        cls,
        image: bytes,
        start_address: int = PROGRAM_START,
        random_source: Optional[RandomSource] = None,
        modern_mode: bool = False,
        logger: Optional[MachineLogger] = None,
    ) -> "Interpreter":
        """Build from a complete 4096-byte memory image."""
        state = create_state_from_image(image, start_address, random_source, modern_mode)
        return cls(state, logger)

    @classmethod
    def from_rom(
        cls,
        rom: bytes,
        load_address: int = PROGRAM_START,
        random_source: Optional[RandomSource] = None,
        modern_mode: bool = False,
        logger: Optional[MachineLogger] = None,
    ) -> "Interpreter":
        """Build with the font in low memory and ``rom`` at ``load_address``."""
        state = create_state_from_rom(rom, load_address, random_source, modern_mode)
        return cls(state, logger)

    @property
    def halted(self) -> bool:
        return self.fault is not None

    def step(self, elapsed_seconds: float) -> bool:
        """Advance timers by ``elapsed_seconds`` and run at most one instruction.

        Returns ``False`` once the machine has faulted.
        """
        if not math.isfinite(elapsed_seconds) or elapsed_seconds < 0:
            raise ValueError(f"elapsed_seconds must be finite and non-negative, got {elapsed_seconds}")
        if self.halted:
            return False

        self.state = advance_timers(self.state, elapsed_seconds)
        if self.state.awaiting_input:
            return True

        try:
            self.state, instruction = fetch(self.state)
            self.state = execute(self.state, instruction)
        except MachineFault as fault:
            self.fault = fault
            self.logger.log_halt(fault, self.state.pc, self.instruction_count)
            return False

        self.instruction_count += 1
        return True

    def set_keydown(self, key: int, pressed: bool) -> None:
        self.state = set_keydown(self.state, key, pressed)

    def get_display_spot(self, x: int, y: int) -> bool:
        return get_pixel(self.state.display, x, y)

    def is_tone_on(self) -> bool:
        return is_tone_on(self.state)

    def __repr__(self) -> str:
        status = "halted" if self.halted else ("waiting" if self.state.awaiting_input else "running")
        return f"Interpreter(pc={self.state.pc:#06x}, {status})"
