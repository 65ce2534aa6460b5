"""Trie node variants for the bit-partitioned persistent array.

A trie of depth ``d`` stores values in `Leaf` nodes at depth 0 and routes
through `Branch` nodes above them. Nodes are addressed by a non-negative
*key*, the physical index minus the origin of the root window; the slot used
at depth ``k`` is ``(key >> (k * bits)) & mask``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar, List, Tuple, Union

from triearray.errors import NotFound


class NodeKind(enum.Enum):
    EMPTY = "empty"
    LEAF = "leaf"
    BRANCH = "branch"


@dataclass(frozen=True, eq=False)
class Empty:
    """Marker for a vacant slot or a subtree that was never materialised."""

    kind: ClassVar[NodeKind] = NodeKind.EMPTY

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty()


@dataclass(frozen=True, eq=False)
class Leaf:
    """Depth-0 node; each slot holds a stored value or `EMPTY`."""

    slots: Tuple[Any, ...]
    kind: ClassVar[NodeKind] = NodeKind.LEAF


@dataclass(frozen=True, eq=False)
class Branch:
    """Interior node; each slot holds a child node or `EMPTY`."""

    children: Tuple[TrieNode, ...]
    kind: ClassVar[NodeKind] = NodeKind.BRANCH


TrieNode = Union[Empty, Leaf, Branch]


def slot_index(key: int, depth: int, bits: int) -> int:
    return (key >> (depth * bits)) & ((1 << bits) - 1)


def capacity(depth: int, bits: int) -> int:
    """Number of keys covered by a node at `depth`."""

    return 1 << (bits * (depth + 1))


def empty_slots(bits: int) -> Tuple[Any, ...]:
    return (EMPTY,) * (1 << bits)


def lookup(node: TrieNode, depth: int, key: int, bits: int) -> Any:
    """Return the value stored under `key` below `node`.

    Raises `NotFound` if `key` lies outside the node or an empty slot or
    subtree is reached first.
    """

    if not 0 <= key < capacity(depth, bits):
        raise NotFound(key, depth)
    level = depth
    while level > 0:
        if node.kind is not NodeKind.BRANCH:
            raise NotFound(key, level)
        node = node.children[slot_index(key, level, bits)]
        level -= 1
    if node.kind is not NodeKind.LEAF:
        raise NotFound(key, 0)
    value = node.slots[slot_index(key, 0, bits)]
    if value is EMPTY:
        raise NotFound(key, 0)
    return value


def path_to(node: TrieNode, depth: int, key: int, bits: int) -> List[TrieNode]:
    """Nodes visited from `node` down to the leaf holding `key`.

    The list stops early at the first `EMPTY` subtree.
    """

    path: List[TrieNode] = []
    level = depth
    while node is not EMPTY:
        path.append(node)
        if level == 0:
            break
        node = node.children[slot_index(key, level, bits)]
        level -= 1
    return path


def count_nodes(node: TrieNode) -> int:
    """Number of materialised (non-empty) nodes reachable from `node`."""

    total = 0
    stack = [node]
    while stack:
        current = stack.pop()
        if current.kind is NodeKind.EMPTY:
            continue
        total += 1
        if current.kind is NodeKind.BRANCH:
            stack.extend(current.children)
    return total


__all__ = [
    "NodeKind",
    "Empty",
    "EMPTY",
    "Leaf",
    "Branch",
    "TrieNode",
    "slot_index",
    "capacity",
    "empty_slots",
    "lookup",
    "path_to",
    "count_nodes",
]
