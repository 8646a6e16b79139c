"""Utility modules for tagger options"""

from .config import (
    ConfigError,
    ENV_PREFIX,
    apply_env_overrides,
    detect_format,
    load_options,
    load_yaml,
    save_options,
    save_yaml,
)
from .logging_utils import (
    setup_logger,
    LoggingError,
    ColoredFormatter,
)

__all__ = [
    "ConfigError",
    "ENV_PREFIX",
    "apply_env_overrides",
    "detect_format",
    "load_options",
    "load_yaml",
    "save_options",
    "save_yaml",
    "setup_logger",
    "LoggingError",
    "ColoredFormatter",
]
