from __future__ import annotations

from typing import Any, Callable, Iterator, List, Tuple, TypeVar

from triearray.core.trie import EMPTY, NodeKind, TrieNode, capacity
from triearray.errors import NotFound

T = TypeVar("T")


def _slot_bounds(node_origin: int, span: int, lo: int, hi: int, width: int) -> Tuple[int, int]:
    first = max(0, (lo - node_origin) // span)
    last = min(width - 1, (hi - 1 - node_origin) // span)
    return first, last


def iter_range(
    root: TrieNode,
    depth: int,
    lo: int,
    hi: int,
    *,
    bits: int,
    reverse: bool = False,
) -> Iterator[Any]:
    """Yield the values stored under trie keys ``lo..hi-1``.

    Uses an explicit work list, so stack use does not depend on the trie size.
    Every index in the range must be occupied; an empty slot raises `NotFound`.
    """

    if hi <= lo:
        return
    if lo < 0 or hi > capacity(depth, bits):
        raise NotFound(lo if lo < 0 else hi - 1, depth)
    width = 1 << bits
    stack: List[Tuple[TrieNode, int, int]] = [(root, depth, 0)]
    while stack:
        node, level, node_origin = stack.pop()
        if node is EMPTY:
            raise NotFound(max(lo, node_origin), level)
        if level == 0:
            if node.kind is not NodeKind.LEAF:
                raise NotFound(max(lo, node_origin), level)
            first, last = _slot_bounds(node_origin, 1, lo, hi, width)
            positions = range(last, first - 1, -1) if reverse else range(first, last + 1)
            for position in positions:
                value = node.slots[position]
                if value is EMPTY:
                    raise NotFound(node_origin + position, 0)
                yield value
            continue
        if node.kind is not NodeKind.BRANCH:
            raise NotFound(max(lo, node_origin), level)

        span = capacity(level - 1, bits)
        first, last = _slot_bounds(node_origin, span, lo, hi, width)
        # Pushed so the next child in iteration order is popped first.
        positions = range(first, last + 1) if reverse else range(last, first - 1, -1)
        for position in positions:
            stack.append((node.children[position], level - 1, node_origin + position * span))


def fold_left(
    values: Iterator[Any], combine: Callable[[T, Any], T], initial: T
) -> T:
    accumulated = initial
    for value in values:
        accumulated = combine(accumulated, value)
    return accumulated


def fold_right(
    values: Iterator[Any], combine: Callable[[Any, T], T], initial: T
) -> T:
    """Right fold over `values`, which must already be in reverse order."""

    accumulated = initial
    for value in values:
        accumulated = combine(value, accumulated)
    return accumulated


__all__ = ["iter_range", "fold_left", "fold_right"]
