"""Reader and writer for `key=value` option files.

One option per line, in any order. Whitespace is ignored anywhere on a line,
lines starting with `#` are comments, and options that are not mentioned keep
their defaults:

    estimator=AVG_PERC|ML
    inference=MAP|MARGINAL
    suffix_length=<uint>
    degree=<uint>
    max_train_passes=<uint>
    max_lemmatizer_passes=<uint>
    max_useless_passes=<uint>
    guess_mass=<float >= 0>
    beam=<int>
    beam_mass=<float >= 0>
    regularization=NONE|L1|L2
    delta=<float >= 0>
    sigma=<float >= 0>
    use_label_dictionary=0|1

Numbers are read leniently the way C's atoi/atof read them: the longest
numeric prefix is used and text without one reads as 0.
"""

import logging
import re
from enum import IntEnum
from functools import partial
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Type, TypeVar

from .enums import Estimator, Inference, Regularization
from .errors import NumericalRangeError, OptionsSyntaxError, TextFormatError
from .tagger_options import FIELD_ORDER, UNSET, TaggerOptions

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=IntEnum)

_IGNORED_CHARS = re.compile(r"[ \t\r]")
_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def despace(line: str) -> str:
    """Remove every space, tab and carriage return from the line."""
    return _IGNORED_CHARS.sub("", line)


def strip_id(line: str, option_id: str) -> str:
    """Return the text after the first occurrence of `option_id`."""
    return line[line.index(option_id) + len(option_id) :]


def leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group()) if match else 0


def leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def get_enum(text: str, enum_cls: Type[E]) -> E:
    """Decode a symbolic value by prefix, trying members in declaration order."""
    for member in enum_cls:
        if text.startswith(member.name):
            return member

    names = "|".join(member.name for member in enum_cls)
    raise OptionsSyntaxError(detail=f"expected {names}, got '{text}'")


get_estimator = partial(get_enum, enum_cls=Estimator)
get_inference = partial(get_enum, enum_cls=Inference)
get_regularization = partial(get_enum, enum_cls=Regularization)


def get_uint(text: str) -> int:
    value = leading_int(text)
    if value < 0:
        raise NumericalRangeError(detail=f"{value} is negative")
    return value


def get_int(text: str) -> int:
    return leading_int(text)


def get_float(text: str) -> float:
    value = leading_float(text)
    if value < 0:
        raise NumericalRangeError(detail=f"{value} is negative")
    return value


def get_flag(text: str) -> bool:
    return get_uint(text) != 0


# Checked in this order; the first id found anywhere on the line wins.
COERCERS: Dict[str, Callable[[str], Any]] = {
    "estimator": get_estimator,
    "inference": get_inference,
    "suffix_length": get_uint,
    "degree": get_uint,
    "max_train_passes": get_uint,
    "max_lemmatizer_passes": get_uint,
    "max_useless_passes": get_uint,
    "guess_mass": get_float,
    "beam": get_int,
    "beam_mass": get_float,
    "regularization": get_regularization,
    "delta": get_float,
    "sigma": get_float,
    "use_label_dictionary": get_flag,
}


def find_option(line: str) -> Optional[str]:
    """Name of the first option whose `name=` id occurs in the line."""
    for name in COERCERS:
        if f"{name}=" in line:
            return name
    return None


def read_overrides(lines: Iterable[str]) -> Tuple[Dict[str, Any], int]:
    """Coerce every option line and count the lines read.

    Returns the assigned values keyed by option name, later lines overriding
    earlier ones, and the number of lines consumed. A `TextFormatError`
    raised on a bad line carries the 1-based number of that line, counting
    blank and comment lines too.
    """
    overrides: Dict[str, Any] = {}
    line_number = 0

    for raw_line in lines:
        line = despace(raw_line.rstrip("\n"))
        line_number += 1

        if not line or line.startswith("#"):
            continue

        name = find_option(line)
        if name is None:
            raise OptionsSyntaxError(line_number, f"unknown option '{line}'")

        try:
            overrides[name] = COERCERS[name](strip_id(line, f"{name}="))
        except TextFormatError as e:
            e.at_line(line_number)
            raise

    return overrides, line_number


def parse_text(lines: Iterable[str]) -> Tuple[TaggerOptions, int]:
    """Parse an option file.

    Args:
        lines: A text stream or any iterable of lines.

    Returns:
        The options, defaults filled in, and the number of lines read.

    Raises:
        OptionsSyntaxError: A line names no known option, or a symbolic
            value is not recognized.
        NumericalRangeError: A negative value for an option that must be
            non-negative.
    """
    overrides, line_count = read_overrides(lines)
    logger.debug(f"Parsed {len(overrides)} options from {line_count} lines")
    return TaggerOptions.assemble(overrides), line_count


def _format_value(value: Any) -> str:
    if isinstance(value, IntEnum):
        return value.name
    if isinstance(value, bool):
        return str(int(value))
    return str(value)


def format_text(options: TaggerOptions) -> str:
    """Render options in the text format, one line per field.

    Unset float fields are left out since their sentinel cannot be written
    as a float value; an unset beam is written as `beam=-1`.
    """
    lines = []
    for name in FIELD_ORDER:
        value = getattr(options, name)
        if value is None:
            if name != "beam":
                continue
            value = UNSET
        lines.append(f"{name}={_format_value(value)}")
    return "\n".join(lines) + "\n"
