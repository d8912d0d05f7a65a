import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = "<level>{level:<8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} - {message}"


def setup_logging(
    *,
    console_level: str | None = "WARNING",
    log_file: str | None = "chat.log",
    file_level: str = "INFO",
) -> list[str]:
    """Route chat logs to stderr and a rotating file.

    The prompt shares the terminal with stderr, so the console sink defaults
    to warnings only. Pass None (or "") for either sink to leave it out.
    Returns a short description of each active sink for the startup banner.
    """
    logger.remove()
    descriptions: list[str] = []

    if console_level:
        logger.add(sys.stderr, level=console_level, format=_CONSOLE_FORMAT)
        descriptions.append(f"console ({console_level})")

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=file_level,
            format=_FILE_FORMAT,
            rotation="10 MB",
            retention=3,
        )
        descriptions.append(f"file ({log_file}, {file_level})")

    return descriptions
