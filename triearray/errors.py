"""Exception hierarchy shared across the trie array modules."""

from __future__ import annotations


class TrieArrayError(Exception):
    """Base class for errors raised by `triearray`."""


class IndexOutOfRange(TrieArrayError, IndexError):
    """A logical index fell outside ``[0, length)``."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for array of length {length}")
        self.index = index
        self.length = length


class NotFound(TrieArrayError, LookupError):
    """Trie traversal reached an empty slot.

    Valid length/offset bookkeeping never produces this; seeing it means the
    trie and the array metadata disagree.
    """

    def __init__(self, key: int, depth: int) -> None:
        super().__init__(f"empty slot for trie key {key} at depth {depth}")
        self.key = key
        self.depth = depth


class TrieInvariantError(TrieArrayError, AssertionError):
    """Raised by `PersistentArray.validate` when the array shape is inconsistent."""


__all__ = ["TrieArrayError", "IndexOutOfRange", "NotFound", "TrieInvariantError"]
