"""Low-level binary encoding helpers."""

from .vector_codec import (
    VectorReadError,
    read_float_vector,
    read_string_vector,
    write_float_vector,
    write_string_vector,
)

__all__ = [
    "VectorReadError",
    "read_float_vector",
    "read_string_vector",
    "write_float_vector",
    "write_string_vector",
]
