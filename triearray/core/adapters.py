from __future__ import annotations

from typing import Any, Iterable, List

import numpy as np

from triearray.core.array import PersistentArray, resolve_bits
from triearray.core.persistence import build_trie


def from_sequence(plain: Iterable[Any], *, bits: int | None = None) -> PersistentArray:
    """Build an array holding `plain` at logical indices ``0..n-1`` with offset 0."""

    values = list(plain)
    resolved = resolve_bits(bits)
    root, depth = build_trie(values, bits=resolved)
    return PersistentArray(
        root=root, depth=depth, origin=0, length=len(values), offset=0, bits=resolved
    )


def to_sequence(seq: PersistentArray) -> List[Any]:
    """Return the elements of `seq` as a list, in logical index order."""

    def _collect(acc: List[Any], value: Any) -> List[Any]:
        acc.append(value)
        return acc

    return seq.fold(_collect, [])


def from_numpy(array: Any, *, bits: int | None = None) -> PersistentArray:
    """Build an array from a 1-D numpy array; elements become numpy scalars."""

    values = np.asarray(array)
    if values.ndim != 1:
        raise ValueError(f"from_numpy expects a 1-D array, got shape {values.shape}.")
    return from_sequence(list(values), bits=bits)


def to_numpy(seq: PersistentArray, *, dtype: Any = None) -> np.ndarray:
    items = to_sequence(seq)
    if not items:
        return np.empty((0,), dtype=dtype if dtype is not None else np.float64)
    return np.asarray(items, dtype=dtype)


__all__ = ["from_sequence", "to_sequence", "from_numpy", "to_numpy"]
