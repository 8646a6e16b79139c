import io
import logging

import numpy as np
import pytest

from tagger_options.codec import read_string_vector, write_float_vector, write_string_vector
from tagger_options.options import (
    FIELD_ORDER,
    BadBinaryError,
    Estimator,
    Inference,
    ReadFailedError,
    Regularization,
    TaggerOptions,
    float_eq,
    parse_text,
    read_binary,
    write_binary,
)


def encode(names, values):
    stream = io.BytesIO()
    write_string_vector(stream, names)
    write_float_vector(stream, values)
    stream.seek(0)
    return stream


def round_trip(options, **kwargs):
    stream = io.BytesIO()
    write_binary(options, stream)
    stream.seek(0)
    return read_binary(stream, **kwargs)


@pytest.mark.parametrize(
    "options",
    [
        TaggerOptions(),
        TaggerOptions(
            estimator=Estimator.ML,
            inference=Inference.MARGINAL,
            suffix_length=0,
            degree=3,
            max_train_passes=100,
            max_lemmatizer_passes=7,
            max_useless_passes=0,
            guess_mass=0.9999,
            beam=20,
            beam_mass=0.95,
            regularization=Regularization.L2,
            delta=0.001,
            sigma=4.5,
            use_label_dictionary=False,
        ),
        TaggerOptions(beam=-1, regularization=Regularization.L1, delta=0.5),
    ],
)
def test_round_trip(options):
    assert round_trip(options) == options


def test_round_trip_of_parsed_file():
    text = "sigma = 1\ndelta = 2\nregularization=L1\nbeam=3\nestimator=ML\n"
    options, _ = parse_text(io.StringIO(text))

    loaded = round_trip(options)

    assert loaded == options
    assert loaded.estimator == Estimator.ML
    assert loaded.beam == 3
    assert loaded.beam_mass is None


def test_written_names_follow_field_order():
    stream = io.BytesIO()
    write_binary(TaggerOptions(), stream)
    stream.seek(0)

    assert read_string_vector(stream) == list(FIELD_ORDER)


def test_sentinels_are_written_as_minus_one():
    stream = io.BytesIO()
    write_binary(TaggerOptions(), stream)
    data = stream.getvalue()

    values = np.frombuffer(data[-14 * 4 :], dtype=np.float32)
    assert values[FIELD_ORDER.index("beam")] == -1
    assert values[FIELD_ORDER.index("sigma")] == -1


def test_mismatched_lengths_raise_bad_binary():
    stream = encode(["degree", "beam"], [3.0])

    with pytest.raises(BadBinaryError):
        read_binary(stream)


def test_truncated_stream_raises_read_failed():
    stream = io.BytesIO()
    write_binary(TaggerOptions(), stream)

    with pytest.raises(ReadFailedError):
        read_binary(io.BytesIO(stream.getvalue()[:-3]))

    with pytest.raises(ReadFailedError):
        read_binary(io.BytesIO(b""))


def test_failed_stream_raises_read_failed():
    stream = io.BytesIO()
    write_binary(TaggerOptions(), stream)
    stream.close()

    with pytest.raises(ReadFailedError):
        read_binary(stream)


def test_unknown_field_is_reported_not_raised():
    messages = io.StringIO()
    stream = encode(["degree", "frobnication", "beam"], [4.0, 1.0, 7.0])

    options = read_binary(stream, msg_out=messages)

    assert options.degree == 4
    assert options.beam == 7
    assert options.suffix_length == 10
    assert messages.getvalue() == (
        "Found unknown parameter name frobnication. "
        "Please, update your tagger version.\n"
    )


def test_unknown_field_is_logged(caplog):
    stream = encode(["frobnication"], [1.0])

    with caplog.at_level(logging.WARNING):
        options = read_binary(stream)

    assert options == TaggerOptions()
    assert "frobnication" in caplog.text


def test_missing_fields_keep_defaults_and_duplicates_overwrite():
    options = read_binary(encode(["degree", "sigma", "degree"], [3.0, 2.0, 9.0]))

    assert options.degree == 9
    assert options.sigma == 2.0
    assert options.max_train_passes == 50
    assert options.beam is None


def test_values_are_narrowed_without_range_checks():
    options = read_binary(
        encode(
            ["suffix_length", "degree", "use_label_dictionary", "guess_mass", "beam"],
            [7.9, -3.0, 0.5, 0.75, -2.0],
        )
    )

    assert options.suffix_length == 7
    assert options.degree == -3
    assert options.use_label_dictionary is False
    assert float_eq(options.guess_mass, 0.75)
    assert options.beam == -2


def test_out_of_range_enum_tag_raises_bad_binary():
    with pytest.raises(BadBinaryError):
        read_binary(encode(["estimator"], [5.0]))

    with pytest.raises(BadBinaryError):
        read_binary(encode(["regularization"], [float("nan")]))


def test_reverse_bytes():
    names = ["estimator", "degree", "sigma"]
    data = io.BytesIO()
    data.write(np.array([len(names)], dtype=np.uint32).byteswap().tobytes())
    for name in names:
        encoded = name.encode("utf-8")
        data.write(np.array([len(encoded)], dtype=np.uint32).byteswap().tobytes())
        data.write(encoded)
    data.write(np.array([3], dtype=np.uint32).byteswap().tobytes())
    data.write(np.array([1.0, 4.0, 0.25], dtype=np.float32).byteswap().tobytes())
    data.seek(0)

    options = read_binary(data, reverse_bytes=True)

    assert options.estimator == Estimator.ML
    assert options.degree == 4
    assert options.sigma == 0.25
