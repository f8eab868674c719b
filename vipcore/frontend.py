"""pygame window, keyboard mapping and buzzer."""

import time
from typing import Optional

import numpy as np
import pygame

from vipcore.config import VipcoreConfig
from vipcore.interpreter import Interpreter
from vipcore.logging import MachineLogger, get_logger
from vipcore.pacing import FixedFrequencyPacer, RealTimePacer
from vipcore.rendering import display_to_rgb, create_color_scheme

# Logical key -> physical key on the left of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = (
    pygame.K_x,
    pygame.K_1, pygame.K_2, pygame.K_3,
    pygame.K_q, pygame.K_w, pygame.K_e,
    pygame.K_a, pygame.K_s, pygame.K_d,
    pygame.K_z, pygame.K_c,
    pygame.K_4, pygame.K_r, pygame.K_f, pygame.K_v,
)

SAMPLE_RATE = 44100


def square_wave(tone_hz: float, volume: float, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """One second of a mono int16 square wave, a whole number of periods long."""
    periods = max(1, int(round(tone_hz)))
    samples = int(sample_rate * periods / tone_hz)
    phase = (np.arange(samples) * tone_hz / sample_rate) % 1.0
    wave = np.where(phase <= 0.5, volume, -volume)
    return (wave * 32767).astype(np.int16)


class Buzzer:
    """Looping square wave switched on and off with the sound timer."""

    def __init__(self, tone_hz: float = 440.0, volume: float = 0.25):
        pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        # The mixer may open with another rate or channel count than asked
        sample_rate, _, channels = pygame.mixer.get_init()
        wave = square_wave(tone_hz, volume, sample_rate)
        if channels > 1:
            wave = np.repeat(wave[:, None], channels, axis=1)
        self.sound = pygame.sndarray.make_sound(wave)
        self.channel: Optional[pygame.mixer.Channel] = None

    def is_on(self) -> bool:
        return self.channel is not None and self.channel.get_busy()

    def start(self):
        self.channel = self.sound.play(loops=-1)

    def stop(self):
        self.sound.stop()
        self.channel = None

    def follow(self, tone_on: bool):
        if tone_on and not self.is_on():
            self.start()
        elif not tone_on and self.is_on():
            self.stop()


class Frontend:
    """Window that shows the framebuffer and feeds the keyboard to the machine."""

    def __init__(self, interpreter: Interpreter, config: VipcoreConfig,
                 logger: Optional[MachineLogger] = None):
        self.interpreter = interpreter
        self.config = config
        self.logger = logger or get_logger()
        self.on_color, self.off_color = create_color_scheme(config.color_scheme)

        pygame.init()
        self.screen = pygame.display.set_mode((config.width, config.height))
        pygame.display.set_caption("vipcore")
        self.clock = pygame.time.Clock()
        try:
            self.buzzer: Optional[Buzzer] = Buzzer(config.tone_hz, config.volume)
        except pygame.error as e:
            self.logger.warning(f"Audio unavailable, running without sound: {e}")
            self.buzzer = None

    def poll_events(self) -> bool:
        """Handle window events. Returns False when the user asked to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def push_keys(self):
        pressed = pygame.key.get_pressed()
        for key, physical in enumerate(KEY_MAP):
            self.interpreter.set_keydown(key, bool(pressed[physical]))

    def render(self):
        frame = display_to_rgb(self.interpreter.state.display, 1, self.on_color, self.off_color)
        # pygame surfaces are indexed [x, y]
        surface = pygame.surfarray.make_surface(frame.transpose(1, 0, 2))
        pygame.transform.scale(surface, self.screen.get_size(), self.screen)
        pygame.display.flip()

    def run(self) -> None:
        """Main loop until quit, halt or the frame budget runs out."""
        config = self.config
        fixed = FixedFrequencyPacer(config.frequency, config.refresh_rate)
        realtime = RealTimePacer(config.frequency)
        frames = 0
        running = True
        last_frame = time.monotonic()

        try:
            while running:
                running = self.poll_events()
                self.push_keys()

                if config.realtime:
                    # Step until the next refresh is due
                    frame_end = last_frame + 1.0 / config.refresh_rate
                    while running and time.monotonic() < frame_end:
                        running = realtime.tick(self.interpreter)
                    now = time.monotonic()
                else:
                    self.clock.tick(config.refresh_rate)
                    now = time.monotonic()
                    running = running and fixed.run_frame(self.interpreter, now - last_frame)
                last_frame = now

                if self.buzzer is not None:
                    self.buzzer.follow(self.interpreter.is_tone_on())
                self.render()

                frames += 1
                if config.max_frames is not None and frames >= config.max_frames:
                    running = False
        finally:
            if self.buzzer is not None:
                self.buzzer.stop()
            pygame.quit()

        if self.interpreter.halted:
            self.logger.info("Program halted; window closed")
