"""Length-prefixed vectors for binary model files.

A vector is a uint32 element count followed by the elements. Float elements
are float32. String elements are a uint32 byte length followed by the UTF-8
bytes. Everything is written in native byte order; readers pass
`reverse_bytes=True` to load a file written on a machine of the other
endianness.
"""

from typing import BinaryIO, List, Sequence

import numpy as np

COUNT_DTYPE = np.dtype(np.uint32)
FLOAT_DTYPE = np.dtype(np.float32)


class VectorReadError(IOError):
    """Stream failed or ended before a vector was complete"""
    pass


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    try:
        data = stream.read(size)
    except (OSError, ValueError) as e:
        raise VectorReadError(f"Stream read failed: {e}")

    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise VectorReadError(f"Expected {size} bytes, got {got}")

    return data


def _read_array(
    stream: BinaryIO, dtype: np.dtype, count: int, reverse_bytes: bool
) -> np.ndarray:
    array = np.frombuffer(_read_exact(stream, dtype.itemsize * count), dtype=dtype)
    if reverse_bytes:
        array = array.byteswap()
    return array


def _read_count(stream: BinaryIO, reverse_bytes: bool) -> int:
    return int(_read_array(stream, COUNT_DTYPE, 1, reverse_bytes)[0])


def _write_count(stream: BinaryIO, count: int) -> None:
    stream.write(np.array([count], dtype=COUNT_DTYPE).tobytes())


def write_float_vector(stream: BinaryIO, values: Sequence[float]) -> None:
    _write_count(stream, len(values))
    stream.write(np.asarray(values, dtype=FLOAT_DTYPE).tobytes())


def read_float_vector(stream: BinaryIO, reverse_bytes: bool = False) -> List[float]:
    count = _read_count(stream, reverse_bytes)
    return _read_array(stream, FLOAT_DTYPE, count, reverse_bytes).tolist()


def write_string_vector(stream: BinaryIO, values: Sequence[str]) -> None:
    _write_count(stream, len(values))
    for value in values:
        encoded = value.encode("utf-8")
        _write_count(stream, len(encoded))
        stream.write(encoded)


def read_string_vector(stream: BinaryIO, reverse_bytes: bool = False) -> List[str]:
    count = _read_count(stream, reverse_bytes)

    values = []
    for _ in range(count):
        data = _read_exact(stream, _read_count(stream, reverse_bytes))
        try:
            values.append(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise VectorReadError(f"String element is not valid UTF-8: {e}")

    return values
