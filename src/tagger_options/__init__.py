"""Hyperparameter options for a sequence tagger."""

from .options import (
    Estimator,
    Inference,
    Regularization,
    TaggerOptions,
    TaggerOptionsError,
    TextFormatError,
    OptionsSyntaxError,
    NumericalRangeError,
    ReadFailedError,
    BadBinaryError,
    format_text,
    parse_text,
    read_binary,
    write_binary,
)
from .utils.config import ConfigError, load_options, save_options

__version__ = "0.1.0"

__all__ = [
    "Estimator",
    "Inference",
    "Regularization",
    "TaggerOptions",
    "TaggerOptionsError",
    "TextFormatError",
    "OptionsSyntaxError",
    "NumericalRangeError",
    "ReadFailedError",
    "BadBinaryError",
    "format_text",
    "parse_text",
    "read_binary",
    "write_binary",
    "ConfigError",
    "load_options",
    "save_options",
]
