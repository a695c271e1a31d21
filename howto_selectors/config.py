import os
import logging
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def _get_int_env(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        return int(raw_value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: '{raw_value}', falling back to {default}")
        return default


LOG_LEVEL = os.getenv("HOWTO_LOG_LEVEL", "INFO")
SELECTOR_STRICT = os.getenv("HOWTO_SELECTOR_STRICT", "false").strip().lower() in ("1", "true", "yes")
LOCATOR_TIMEOUT_MS = _get_int_env("HOWTO_LOCATOR_TIMEOUT_MS", 10000)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level(value: Optional[str] = None) -> int:
    level_name = (value if value is not None else LOG_LEVEL).strip().upper()
    if level_name not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown log level '{level_name}', falling back to INFO")
        return logging.INFO
    return getattr(logging, level_name)
