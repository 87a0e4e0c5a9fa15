"""Configuration settings for tcx-codec."""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logger for this module
logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_bool_setting(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or unreadable

    Returns:
        Parsed boolean value
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False

    logger.warning(f"Ignoring unreadable boolean {name}={raw!r}, using {default}")
    return default


# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Serializer output
PRETTY_PRINT = get_bool_setting("TCX_PRETTY_PRINT", True)
EXTENSION_PREFIX = os.getenv("TCX_EXTENSION_PREFIX", "ns3")
OUTPUT_ENCODING = "UTF-8"

# Parser limits
HUGE_TREE = get_bool_setting("TCX_HUGE_TREE", False)


def setup_logging(level: Optional[str] = None):
    """Set up logging configuration.

    The package never calls this on import; applications opt in.

    Args:
        level: Log level name, defaults to LOG_LEVEL
    """
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
