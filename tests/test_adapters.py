import numpy as np
import pytest

from triearray import from_numpy, from_sequence, to_numpy, to_sequence


def test_from_sequence_accepts_iterables():
    array = from_sequence(value * value for value in range(5))

    assert to_sequence(array) == [0, 1, 4, 9, 16]
    assert array.offset == 0


def test_empty_round_trip():
    assert to_sequence(from_sequence([])) == []


def test_to_sequence_returns_fresh_list():
    array = from_sequence([1, 2])
    plain = to_sequence(array)
    plain.append(3)

    assert to_sequence(array) == [1, 2]


def test_numpy_round_trip():
    source = np.arange(70, dtype=np.int64)

    array = from_numpy(source, bits=3)
    result = to_numpy(array.prepend(-1))

    assert len(array) == 70
    assert result.dtype.kind == "i"
    assert np.array_equal(result, np.concatenate([[-1], source]))


def test_to_numpy_dtype_and_empty():
    array = from_sequence([1, 2, 3])

    assert to_numpy(array, dtype=np.float32).dtype == np.float32
    empty = to_numpy(from_sequence([]))
    assert empty.shape == (0,)


def test_from_numpy_rejects_multidimensional():
    with pytest.raises(ValueError):
        from_numpy(np.zeros((2, 2)))
