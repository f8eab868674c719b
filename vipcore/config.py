"""Host configuration, shared by the command line and the front end."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from hydra.core.config_store import ConfigStore
from omegaconf import MISSING, DictConfig, OmegaConf

from vipcore.constants import MEMORY_SIZE, PROGRAM_START
from vipcore.errors import ConfigurationError
from vipcore.logging import ConsoleLogger
from vipcore.rendering import create_color_scheme


@dataclass
class VipcoreConfig:
    """Settings for loading and running a program.

    Attributes:
        rom: Path to the program file
        image: Treat the file as a complete 4096-byte memory image
        address: Load address of a ROM, or start address of an image
        frequency: Target instructions per second
        refresh_rate: Display refreshes per second
        realtime: Pace by measured wall-clock time instead of per-frame cycle budgets
        modern_mode: Alternate shift/store semantics; accepted but not applied
        width: Window width in pixels
        height: Window height in pixels
        color_scheme: Name of a rendering colour preset
        tone_hz: Buzzer frequency
        volume: Buzzer volume between 0 and 1
        seed: Seed of the random byte source
        log_level: Console log level
        headless: Run without a window or audio
        max_frames: Stop after this many frames (required when headless)
    """
    rom: str = MISSING
    image: bool = False
    address: int = PROGRAM_START
    frequency: int = 540
    refresh_rate: float = 60.0
    realtime: bool = False
    modern_mode: bool = False
    width: int = 800
    height: int = 400
    color_scheme: str = "classic"
    tone_hz: float = 440.0
    volume: float = 0.25
    seed: int = 0
    log_level: str = "INFO"
    headless: bool = False
    max_frames: Optional[int] = None


cs = ConfigStore.instance()
cs.store(name="vipcore_schema", node=VipcoreConfig)


def validate_config(config: VipcoreConfig) -> VipcoreConfig:
    """Check a configuration, raising ConfigurationError on the first problem."""
    if not config.rom:
        raise ConfigurationError("No program file given")
    if not 0 <= config.address < MEMORY_SIZE:
        raise ConfigurationError(f"Address {config.address:#x} is outside memory")
    if not config.image and config.address < PROGRAM_START:
        raise ConfigurationError(
            f"ROM load address must be at least {PROGRAM_START:#x}, got {config.address:#x}"
        )
    if config.frequency <= 0:
        raise ConfigurationError(f"frequency must be positive, got {config.frequency}")
    if config.refresh_rate <= 0:
        raise ConfigurationError(f"refresh_rate must be positive, got {config.refresh_rate}")
    if config.width <= 0 or config.height <= 0:
        raise ConfigurationError(f"Invalid window size {config.width}x{config.height}")
    if config.tone_hz <= 0:
        raise ConfigurationError(f"tone_hz must be positive, got {config.tone_hz}")
    if not 0.0 <= config.volume <= 1.0:
        raise ConfigurationError(f"volume must be between 0 and 1, got {config.volume}")
    if config.log_level.upper() not in ConsoleLogger.LEVELS:
        raise ConfigurationError(f"Unknown log level '{config.log_level}'")
    if config.max_frames is not None and config.max_frames <= 0:
        raise ConfigurationError(f"max_frames must be positive, got {config.max_frames}")
    if config.headless and config.max_frames is None:
        raise ConfigurationError("Headless runs need max_frames")
    try:
        create_color_scheme(config.color_scheme)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    return config


def has_stretched_aspect(config: VipcoreConfig) -> bool:
    """True when the window is not 2:1 like the display."""
    return config.width != config.height * 2


def to_config(cfg: DictConfig) -> VipcoreConfig:
    """Turn a composed Hydra config into a validated VipcoreConfig."""
    if OmegaConf.is_missing(cfg, "rom"):
        raise ConfigurationError("No program file given (set rom=PATH)")
    config = OmegaConf.to_object(cfg)
    if not isinstance(config, VipcoreConfig):
        config = VipcoreConfig(**config)
    return validate_config(config)


def config_summary(config: VipcoreConfig) -> Dict[str, Any]:
    summary = asdict(config)
    summary["address"] = f"{config.address:#05x}"
    return summary
