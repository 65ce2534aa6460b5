"""Core data structures and persistence primitives for the trie array."""

from .adapters import from_numpy, from_sequence, to_numpy, to_sequence
from .array import PersistentArray
from .persistence import SlotUpdate, apply_slot_updates, build_trie, with_slot
from .trie import EMPTY, Branch, Leaf, NodeKind, lookup

__all__ = [
    "PersistentArray",
    "SlotUpdate",
    "apply_slot_updates",
    "build_trie",
    "with_slot",
    "EMPTY",
    "Branch",
    "Leaf",
    "NodeKind",
    "lookup",
    "from_sequence",
    "to_sequence",
    "from_numpy",
    "to_numpy",
]
