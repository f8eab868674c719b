"""Command line entry point.

Examples:
    vipcore rom=games/pong.ch8
    vipcore rom=dump.bin image=true address=768
    vipcore rom=games/pong.ch8 headless=true max_frames=600
"""

import sys

import hydra
from omegaconf import DictConfig

from vipcore.config import VipcoreConfig, to_config, has_stretched_aspect, config_summary
from vipcore.entropy import PRNGRandomSource
from vipcore.errors import ConfigurationError
from vipcore.loader import load_program
from vipcore.logging import ConsoleCallback, ProgressCallback, get_logger
from vipcore.pacing import run_headless
from vipcore.rendering import render_ascii


def run(config: VipcoreConfig) -> int:
    """Load the program and run it. Returns a process exit code."""
    logger = get_logger(log_level=config.log_level)

    if has_stretched_aspect(config) and not config.headless:
        logger.warning("Running in an aspect ratio other than 2:1, display may look stretched!")

    interpreter = load_program(
        config.rom,
        image=config.image,
        address=config.address,
        random_source=PRNGRandomSource(config.seed),
        modern_mode=config.modern_mode,
        logger=logger,
    )

    if config.headless:
        callbacks = [ConsoleCallback(logger=logger), ProgressCallback(config.max_frames)]
        run_headless(
            interpreter,
            frequency=config.frequency,
            refresh_rate=config.refresh_rate,
            max_frames=config.max_frames,
            callbacks=callbacks,
            config=config_summary(config),
        )
        logger.debug("Final display:\n" + render_ascii(interpreter.state.display))
    else:
        from vipcore.frontend import Frontend
        Frontend(interpreter, config, logger).run()

    return 1 if interpreter.halted else 0


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    try:
        config = to_config(cfg)
        code = run(config)
    except ConfigurationError as e:
        get_logger().error(f"{e}, aborting!")
        sys.exit(2)
    sys.exit(code)


if __name__ == "__main__":
    main()
