"""Name-tagged binary encoding of tagger options.

Options are stored as two vectors of equal length: the field names and the
field values as float32. Readers skip names they do not know, so files
written by newer versions with extra fields still load.
"""

import logging
from typing import Any, BinaryIO, Callable, Dict, Optional, TextIO, Type

from ..codec.vector_codec import (
    VectorReadError,
    read_float_vector,
    read_string_vector,
    write_float_vector,
    write_string_vector,
)
from .enums import Estimator, Inference, Regularization
from .errors import BadBinaryError, ReadFailedError
from .tagger_options import UNSET, TaggerOptions

logger = logging.getLogger(__name__)

UNKNOWN_FIELD_MESSAGE = (
    "Found unknown parameter name {name}. Please, update your tagger version."
)


def write_binary(options: TaggerOptions, stream: BinaryIO) -> None:
    """Write all fields, in fixed order, without validation."""
    fields = options.to_wire_fields()
    write_string_vector(stream, list(fields))
    write_float_vector(stream, list(fields.values()))
    logger.debug(f"Stored {len(fields)} option fields")


def _to_enum(enum_cls: Type) -> Callable[[float], Any]:
    def narrow(value: float):
        tag = int(value)
        try:
            return enum_cls(tag)
        except ValueError:
            raise BadBinaryError(f"Invalid {enum_cls.__name__} tag {tag}")

    return narrow


def _to_optional_int(value: float) -> Optional[int]:
    number = int(value)
    return None if number == UNSET else number


def _to_optional_float(value: float) -> Optional[float]:
    return None if value == UNSET else value


def _to_flag(value: float) -> bool:
    return int(value) != 0


NARROWERS: Dict[str, Callable[[float], Any]] = {
    "estimator": _to_enum(Estimator),
    "inference": _to_enum(Inference),
    "suffix_length": int,
    "degree": int,
    "max_train_passes": int,
    "max_lemmatizer_passes": int,
    "max_useless_passes": int,
    "guess_mass": float,
    "beam": _to_optional_int,
    "beam_mass": _to_optional_float,
    "regularization": _to_enum(Regularization),
    "delta": _to_optional_float,
    "sigma": _to_optional_float,
    "use_label_dictionary": _to_flag,
}


def read_binary(
    stream: BinaryIO,
    msg_out: Optional[TextIO] = None,
    reverse_bytes: bool = False,
) -> TaggerOptions:
    """Read options written by `write_binary`.

    Known fields are narrowed to their native type without range checks;
    fields missing from the stream keep their defaults. Unknown field names
    are logged and, when `msg_out` is given, reported there as well.

    Args:
        stream: Binary stream positioned at the option vectors.
        msg_out: Optional text sink for non-fatal diagnostics.
        reverse_bytes: Byte-swap numbers written on the other endianness.

    Raises:
        ReadFailedError: The stream failed or ended early.
        BadBinaryError: The name and value vectors differ in length, or a
            value cannot be narrowed to its field type.
    """
    try:
        field_names = read_string_vector(stream, reverse_bytes)
        fields = read_float_vector(stream, reverse_bytes)
    except VectorReadError as e:
        raise ReadFailedError(f"Failed to read option vectors: {e}")

    if len(field_names) != len(fields):
        raise BadBinaryError(
            f"Got {len(field_names)} field names but {len(fields)} values"
        )

    overrides: Dict[str, Any] = {}
    for name, value in zip(field_names, fields):
        narrow = NARROWERS.get(name)
        if narrow is None:
            message = UNKNOWN_FIELD_MESSAGE.format(name=name)
            logger.warning(message)
            if msg_out is not None:
                msg_out.write(message + "\n")
            continue

        try:
            overrides[name] = narrow(value)
        except (ValueError, OverflowError) as e:
            raise BadBinaryError(f"Cannot read {name}={value}: {e}")

    logger.debug(f"Loaded {len(overrides)} option fields")
    return TaggerOptions.assemble(overrides)
