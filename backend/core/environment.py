"""Environment configuration management for the sizing engine.

This module handles loading environment variables from .env files
with proper priority handling for local development vs production.

File Priority (highest to lowest):
1. .env.local (local overrides, gitignored)
2. .env (base configuration, committed)
3. Environment variables set by the host
"""

import os
import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_environment(env_dir: Optional[Union[str, Path]] = None) -> None:
    """Load environment variables from .env files.

    Args:
        env_dir: Directory containing .env files. Defaults to current directory.
    """
    if env_dir is None:
        env_dir = Path.cwd()
    else:
        env_dir = Path(env_dir)

    # Load files in reverse priority order (last loaded wins)
    env_files = [
        env_dir / ".env",          # Base configuration
        env_dir / ".env.local",    # Local overrides
    ]

    loaded_files = []
    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file, override=True)
            loaded_files.append(env_file.name)
            logger.debug(f"Loaded environment from {env_file}")

    if loaded_files:
        logger.info(f"Environment loaded from: {', '.join(loaded_files)}")


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable.

    Args:
        key: Environment variable name
        default: Default value if not set or invalid

    Returns:
        Boolean value
    """
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    elif value in ("false", "0", "no", "off"):
        return False
    else:
        return default


def get_env_path(key: str, default: str) -> str:
    """Get a file path from the environment, expanding ~ and variables.

    Args:
        key: Environment variable name
        default: Path used when the variable is unset or blank

    Returns:
        Path string
    """
    value = os.getenv(key, "").strip()
    if not value:
        return default
    return os.path.expandvars(os.path.expanduser(value))


def get_log_level(default: str = "INFO") -> str:
    """Get the configured log level name.

    LOG_LEVEL wins over DEBUG; unknown names fall back to the default.
    """
    level = os.getenv("LOG_LEVEL", "").strip().upper()
    if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return level
    if level:
        logger.warning(f"Invalid LOG_LEVEL {level!r}, using default")
    return "DEBUG" if get_env_bool("DEBUG") else default


# Load environment on import
load_environment()
