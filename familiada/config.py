"""
Configuration - Environment settings and logging setup.
"""

import logging
import os

# Environment configuration
FAMILIADA_DATA_PATH = os.getenv("FAMILIADA_DATA_PATH", None)
FAMILIADA_RANDOM = os.getenv("FAMILIADA_RANDOM", None)
FAMILIADA_LOG_LEVEL = os.getenv("FAMILIADA_LOG_LEVEL", "WARNING")
FAMILIADA_HOST = os.getenv("FAMILIADA_HOST", "127.0.0.1")
FAMILIADA_PORT = int(os.getenv("FAMILIADA_PORT", "8000"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_flag(value: str | None) -> bool | None:
    """Parse an on/off environment value. None or unrecognized -> None."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def random_override() -> bool | None:
    """Question order override from FAMILIADA_RANDOM, if set."""
    return parse_flag(FAMILIADA_RANDOM)


def configure_logging(level: str | int | None = None):
    """Set up root logging once for the CLI and the server."""
    level = level or FAMILIADA_LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
