"""Tagger option record and its text and binary formats."""

from .enums import Estimator, Inference, Regularization
from .errors import (
    TaggerOptionsError,
    TextFormatError,
    OptionsSyntaxError,
    NumericalRangeError,
    ReadFailedError,
    BadBinaryError,
)
from .tagger_options import FIELD_ORDER, UNSET, TaggerOptions, float_eq
from .text_format import format_text, parse_text
from .binary_format import read_binary, write_binary

__all__ = [
    "Estimator",
    "Inference",
    "Regularization",
    "TaggerOptionsError",
    "TextFormatError",
    "OptionsSyntaxError",
    "NumericalRangeError",
    "ReadFailedError",
    "BadBinaryError",
    "FIELD_ORDER",
    "UNSET",
    "TaggerOptions",
    "float_eq",
    "format_text",
    "parse_text",
    "read_binary",
    "write_binary",
]
