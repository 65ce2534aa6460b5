"""triearray: persistent arrays backed by a bit-partitioned trie.

Quick Start
-----------
>>> from triearray import from_sequence, to_sequence
>>>
>>> s0 = from_sequence([1, 2, 3, 4, 5])
>>> s1 = s0.prepend(0)
>>> to_sequence(s1)
[0, 1, 2, 3, 4, 5]
>>> to_sequence(s0)
[1, 2, 3, 4, 5]

Every update returns a new array; the original keeps its contents and shares
all untouched trie nodes with the result.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("triearray")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.1.0"

from .core import (
    PersistentArray,
    SlotUpdate,
    from_numpy,
    from_sequence,
    to_numpy,
    to_sequence,
)
from .errors import IndexOutOfRange, NotFound, TrieArrayError, TrieInvariantError

__all__ = [
    "__version__",
    "PersistentArray",
    "SlotUpdate",
    "from_sequence",
    "to_sequence",
    "from_numpy",
    "to_numpy",
    "TrieArrayError",
    "IndexOutOfRange",
    "NotFound",
    "TrieInvariantError",
]
