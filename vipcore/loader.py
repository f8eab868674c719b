"""Reading programs from storage."""

from pathlib import Path
from typing import Optional, Union

from vipcore.constants import PROGRAM_START
from vipcore.entropy import RandomSource
from vipcore.errors import ConfigurationError
from vipcore.interpreter import Interpreter
from vipcore.logging import MachineLogger, get_logger


def read_program(path: Union[str, Path]) -> bytes:
    """Read a ROM or image file, raising ConfigurationError if it cannot be opened."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ConfigurationError(f"Could not open file {path}: {e.strerror or e}") from e


def load_program(
    path: Union[str, Path],
    image: bool = False,
    address: int = PROGRAM_START,
    random_source: Optional[RandomSource] = None,
    modern_mode: bool = False,
    logger: Optional[MachineLogger] = None,
) -> Interpreter:
    """Create an interpreter from a file.

    With ``image`` the file must hold all 4096 bytes of memory and execution
    starts at ``address``; otherwise the file is a ROM placed at ``address``.
    """
    logger = logger or get_logger()
    data = read_program(path)
    factory = Interpreter.from_image if image else Interpreter.from_rom
    interpreter = factory(data, address, random_source, modern_mode, logger)
    logger.log_program_loaded(str(path), len(data), address, image=image)
    return interpreter
