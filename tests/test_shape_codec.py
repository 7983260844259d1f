import dataclasses

import numpy as np
import pytest

from lifestamp.errors import ErrorKind
from lifestamp.shape_codec import (
    DecodedShape,
    HeightMismatch,
    InvalidRepetitionCount,
    InvalidStateChar,
    ShapeDecodeError,
    WidthMismatch,
    decode,
    derive_width,
)


def test_decode_glider(glider_data):
    shape = decode(glider_data)
    assert (shape.width, shape.height) == (5, 6)
    assert shape.matrix.shape == (6, 5)
    assert shape.rows()[1] == [False, False, True, False, False]
    assert shape.rows()[3] == [False, True, True, True, False]
    assert shape.rows()[5] == [False] * 5
    assert shape.live_cells() == [(2, 1), (3, 2), (1, 3), (2, 3), (3, 3)]


def test_height_is_line_count_plus_one():
    assert decode("L1").height == 2
    assert decode("D2\nL2").height == 3
    assert decode("\n".join(["D1"] * 9)).height == 10


def test_multi_digit_counts():
    shape = decode("D12\nL12\nD3L6D3")
    assert shape.width == 12
    assert shape.rows()[1] == [True] * 12
    assert shape.rows()[2] == [False] * 3 + [True] * 6 + [False] * 3


def test_width_comes_from_first_line_only():
    assert derive_width("D2 L3,X4") == 9
    assert derive_width("D2L1D2") == 5
    assert derive_width("DL") == 0
    assert decode("D2L1D2\nD5").width == 5


@pytest.mark.parametrize("data, actual", [("D3\nL5", 5), ("D3\nL2", 2), ("D3\nD1L1D1L1", 4)])
def test_width_mismatch(data, actual):
    with pytest.raises(WidthMismatch) as exc:
        decode(data)
    err = exc.value
    assert err.kind is ErrorKind.WIDTH_MISMATCH
    assert (err.expected, err.actual, err.row) == (3, actual, 1)


def test_trailing_newline_is_an_empty_row():
    with pytest.raises(WidthMismatch) as exc:
        decode("D5\n")
    assert (exc.value.row, exc.value.actual) == (1, 0)


@pytest.mark.parametrize("data", ["", "DL", "\nD3"])
def test_first_line_without_cells(data):
    with pytest.raises(WidthMismatch) as exc:
        decode(data)
    assert exc.value.row == 0
    assert exc.value.expected == 0


def test_invalid_state_char():
    with pytest.raises(InvalidStateChar) as exc:
        decode("D5\nD2X1D2")
    err = exc.value
    assert err.kind is ErrorKind.INVALID_STATE_CHAR
    assert err.char == "X"
    assert (err.row, err.column) == (1, 2)
    assert err.line == "D2X1D2"
    assert "'X'" in str(err)


@pytest.mark.parametrize("data, char", [("D3\nl3", "l"), ("3D\nD3", "3"), ("D3\r\nL3", "\r"), ("D1 D2", " ")])
def test_only_upper_case_d_and_l_are_states(data, char):
    with pytest.raises(InvalidStateChar) as exc:
        decode(data)
    assert exc.value.char == char


def test_missing_repetition_count():
    with pytest.raises(InvalidRepetitionCount) as exc:
        decode("D3\nLD3")
    err = exc.value
    assert err.kind is ErrorKind.INVALID_REPETITION_COUNT
    assert (err.row, err.column, err.count_text) == (1, 1, "")


def test_zero_repetition_count():
    with pytest.raises(InvalidRepetitionCount) as exc:
        decode("D3\nL0D3")
    assert exc.value.count_text == "0"


def test_state_at_end_of_line_without_count():
    with pytest.raises(InvalidRepetitionCount):
        decode("D3\nD3L")


def test_decode_errors_share_a_base():
    for data in ("D3\nL5", "D3\nX3", "D3\nL"):
        with pytest.raises(ShapeDecodeError):
            decode(data)


def test_height_mismatch_error_fields():
    err = HeightMismatch(6, 5, line="D5")
    assert err.kind is ErrorKind.HEIGHT_MISMATCH
    assert (err.expected, err.actual) == (6, 5)
    assert str(err).startswith("HeightMismatch:")


def test_decode_rejects_non_strings():
    with pytest.raises(TypeError):
        decode(b"D5")


def test_decoded_shape_is_immutable(glider_data):
    shape = decode(glider_data)
    with pytest.raises(ValueError):
        shape.matrix[0, 0] = True
    with pytest.raises(dataclasses.FrozenInstanceError):
        shape.width = 3


def test_decoded_shape_equality(glider_data):
    assert decode(glider_data) == decode(glider_data)
    assert decode(glider_data) != decode("D5\nD5\nD5\nD5\nD5")


def test_decoded_shape_checks_matrix_shape():
    with pytest.raises(ValueError):
        DecodedShape(width=3, height=2, matrix=np.zeros((3, 2), dtype=bool))


HUGE = "99999999999999999999"


@pytest.mark.parametrize("data, actual", [
    ("D99999999999999\nL1", 1),
    (f"D{HUGE}\nL1", 1),
    (f"L{HUGE}\nD3L2", 5),
])
def test_oversized_width_with_short_line(data, actual):
    with pytest.raises(WidthMismatch) as exc:
        decode(data)
    assert exc.value.row == 1
    assert exc.value.actual == actual
    assert exc.value.expected == int(data.split("\n")[0][1:])


def test_oversized_width_with_bad_state_char():
    with pytest.raises(InvalidStateChar) as exc:
        decode(f"D{HUGE}\nX{HUGE}")
    assert exc.value.char == "X"


@pytest.mark.parametrize("count", [HUGE, "4611686018427387904"])
def test_consistent_but_unallocatable_shape(count):
    with pytest.raises(InvalidRepetitionCount) as exc:
        decode(f"D{count}\nL{count}")
    err = exc.value
    assert err.kind is ErrorKind.INVALID_REPETITION_COUNT
    assert err.count_text == count
    assert err.row == 0
    assert "too large" in str(err)


def test_decoded_shape_copies_the_callers_matrix():
    source = np.zeros((2, 3), dtype=bool)
    shape = DecodedShape(width=3, height=2, matrix=source)

    source[0, 0] = True

    assert source.flags.writeable
    assert not shape.matrix.flags.writeable
    assert shape.live_count == 0
