from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

from triearray.core.trie import (
    EMPTY,
    Branch,
    Leaf,
    NodeKind,
    TrieNode,
    capacity,
    empty_slots,
    slot_index,
)
from triearray.logging import get_logger

LOGGER = get_logger("core.persistence")


@dataclass(frozen=True)
class SlotUpdate:
    """Descriptor for a copy-on-write write of `value` at `index`."""

    index: int
    value: Any


def _all_empty(slots: Sequence[Any]) -> bool:
    return all(slot is EMPTY for slot in slots)


def with_slot(node: TrieNode, depth: int, key: int, value: Any, bits: int) -> TrieNode:
    """Return a copy of `node` with `key` set to `value`.

    Only the nodes on the path to `key` are copied; every other slot of the
    result references the original children. Writing `EMPTY` clears the slot
    and prunes nodes left with no occupied slots.
    """

    if not 0 <= key < capacity(depth, bits):
        raise ValueError(f"key {key} outside a depth-{depth} trie")

    spine: List[Tuple[Any, ...]] = []
    current = node
    for level in range(depth, 0, -1):
        children = current.children if current.kind is NodeKind.BRANCH else empty_slots(bits)
        spine.append(children)
        current = children[slot_index(key, level, bits)]

    slots = list(current.slots if current.kind is NodeKind.LEAF else empty_slots(bits))
    slots[slot_index(key, 0, bits)] = value
    rebuilt: TrieNode = EMPTY if _all_empty(slots) else Leaf(tuple(slots))

    for level, children in enumerate(reversed(spine), start=1):
        updated = list(children)
        updated[slot_index(key, level, bits)] = rebuilt
        rebuilt = EMPTY if _all_empty(updated) else Branch(tuple(updated))
    return rebuilt


def clear_slot(node: TrieNode, depth: int, key: int, bits: int) -> TrieNode:
    return with_slot(node, depth, key, EMPTY, bits)


def apply_slot_updates(
    node: TrieNode, depth: int, updates: Iterable[SlotUpdate], *, bits: int
) -> TrieNode:
    """Apply `updates` (indexed by trie key) in order without mutating `node`."""

    target = node
    for update in updates:
        target = with_slot(target, depth, update.index, update.value, bits)
    return target


def grow_to_cover(
    root: TrieNode, depth: int, origin: int, index: int, *, bits: int
) -> Tuple[TrieNode, int, int]:
    """Return ``(root, depth, origin)`` whose window contains physical `index`.

    The root window is ``[origin, origin + capacity)``. Growing to the right
    puts the old root in the first slot of a new root; growing to the left
    puts it in the last slot, leaving the remaining slots free for prepends.
    Either way the old root is shared whole and its keys keep their low digits.
    """

    span = capacity(depth, bits)
    if origin <= index < origin + span:
        return root, depth, origin
    if root is EMPTY:
        return root, depth, index

    last_slot = (1 << bits) - 1
    while not origin <= index < origin + span:
        slot = last_slot if index < origin else 0
        children = list(empty_slots(bits))
        children[slot] = root
        root = Branch(tuple(children))
        origin -= slot * span
        depth += 1
        span <<= bits
        LOGGER.debug("Grew trie root to depth %d covering [%d, %d)", depth, origin, origin + span)
    return root, depth, origin


def build_trie(values: Sequence[Any], *, bits: int) -> Tuple[TrieNode, int]:
    """Bulk-build a trie holding `values` under keys ``0..n-1``.

    Returns ``(root, depth)``. The result has the same content as appending the
    values one at a time, without the intermediate path copies.
    """

    count = len(values)
    if count == 0:
        return EMPTY, 0

    width = 1 << bits
    padding = (EMPTY,) * width
    nodes: List[TrieNode] = []
    for start in range(0, count, width):
        chunk = tuple(values[start : start + width])
        nodes.append(Leaf(chunk + padding[len(chunk) :]))

    depth = 0
    while len(nodes) > 1:
        grouped: List[TrieNode] = []
        for start in range(0, len(nodes), width):
            chunk = tuple(nodes[start : start + width])
            grouped.append(Branch(chunk + padding[len(chunk) :]))
        nodes = grouped
        depth += 1

    LOGGER.debug("Built trie for %d values at depth %d", count, depth)
    return nodes[0], depth


__all__ = [
    "SlotUpdate",
    "with_slot",
    "clear_slot",
    "apply_slot_updates",
    "grow_to_cover",
    "build_trie",
]
