from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Tuple, TypeVar

from triearray import config as ta_config
from triearray.algo.traverse import fold_left, fold_right, iter_range
from triearray.core.persistence import (
    SlotUpdate,
    apply_slot_updates,
    build_trie,
    clear_slot,
    grow_to_cover,
    with_slot,
)
from triearray.core.trie import EMPTY, NodeKind, TrieNode, capacity, count_nodes, lookup
from triearray.errors import IndexOutOfRange, NotFound, TrieInvariantError
from triearray.logging import get_logger

LOGGER = get_logger("core.array")

T = TypeVar("T")


def resolve_bits(bits: int | None) -> int:
    if bits is None:
        return ta_config.runtime_config().branch_bits
    return ta_config.normalise_branch_bits(bits)


@dataclass(frozen=True, eq=False)
class PersistentArray:
    """Immutable indexed sequence stored in a bit-partitioned trie.

    Logical index ``i`` lives at physical index ``i + offset``, stored under
    trie key ``i + offset - origin``. The root covers the physical window
    ``[origin, origin + capacity)``; writes outside it grow the root upwards
    instead of renumbering, so `prepend` and `append` both cost O(depth).
    Every operation returns a new array sharing all untouched nodes with its
    source.
    """

    root: TrieNode
    depth: int
    origin: int
    length: int
    offset: int
    bits: int

    def __post_init__(self) -> None:
        if ta_config.runtime_config().check_invariants:
            self.validate()

    @classmethod
    def empty(cls, bits: int | None = None) -> "PersistentArray":
        return cls(root=EMPTY, depth=0, origin=0, length=0, offset=0, bits=resolve_bits(bits))

    @property
    def capacity(self) -> int:
        return capacity(self.depth, self.bits)

    def replace(self, **kwargs: Any) -> "PersistentArray":
        return dataclasses.replace(self, **kwargs)

    def is_empty(self) -> bool:
        return self.length == 0

    # ------------------------------------------------------------------
    # Element access

    @property
    def _lo_key(self) -> int:
        return self.offset - self.origin

    def _check_index(self, index: int) -> int:
        if index < 0 or index >= self.length:
            raise IndexOutOfRange(index, self.length)
        return self._lo_key + index

    def get(self, index: int) -> Any:
        key = self._check_index(index)
        return lookup(self.root, self.depth, key, self.bits)

    def first(self) -> Any:
        return self.get(0)

    def last(self) -> Any:
        return self.get(self.length - 1)

    # ------------------------------------------------------------------
    # Copy-on-write updates

    def _write(self, physical: int, value: Any) -> Tuple[TrieNode, int, int]:
        root, depth, origin = grow_to_cover(
            self.root, self.depth, self.origin, physical, bits=self.bits
        )
        return with_slot(root, depth, physical - origin, value, self.bits), depth, origin

    def set(self, index: int, value: Any) -> "PersistentArray":
        key = self._check_index(index)
        return self.replace(root=with_slot(self.root, self.depth, key, value, self.bits))

    def update_many(self, updates: Iterable[SlotUpdate]) -> "PersistentArray":
        """Apply logical-index `updates` in order as a single new version."""

        keyed = [
            SlotUpdate(index=self._check_index(update.index), value=update.value)
            for update in updates
        ]
        if not keyed:
            return self
        root = apply_slot_updates(self.root, self.depth, keyed, bits=self.bits)
        return self.replace(root=root)

    def prepend(self, value: Any) -> "PersistentArray":
        physical = self.offset - 1
        root, depth, origin = self._write(physical, value)
        return self.replace(
            root=root, depth=depth, origin=origin, offset=physical, length=self.length + 1
        )

    def append(self, value: Any) -> "PersistentArray":
        root, depth, origin = self._write(self.offset + self.length, value)
        return self.replace(root=root, depth=depth, origin=origin, length=self.length + 1)

    def extend(self, values: Iterable[Any]) -> "PersistentArray":
        root, depth, origin = self.root, self.depth, self.origin
        length = self.length
        for value in values:
            physical = self.offset + length
            root, depth, origin = grow_to_cover(root, depth, origin, physical, bits=self.bits)
            root = with_slot(root, depth, physical - origin, value, self.bits)
            length += 1
        if length == self.length:
            return self
        return self.replace(root=root, depth=depth, origin=origin, length=length)

    def uncons(self) -> Tuple[Any, "PersistentArray"]:
        """Split into the first element and the remaining array."""

        head = self.first()
        if self.length == 1:
            return head, self.empty(self.bits)
        root = clear_slot(self.root, self.depth, self._lo_key, self.bits)
        return head, self.replace(root=root, offset=self.offset + 1, length=self.length - 1)

    def unsnoc(self) -> Tuple["PersistentArray", Any]:
        """Split into all but the last element and the last element."""

        tail = self.last()
        if self.length == 1:
            return self.empty(self.bits), tail
        key = self._lo_key + self.length - 1
        root = clear_slot(self.root, self.depth, key, self.bits)
        return self.replace(root=root, length=self.length - 1), tail

    def remove(self, index: int) -> "PersistentArray":
        """Drop logical `index`, shifting whichever side of it is shorter."""

        key = self._check_index(index)
        if self.length == 1:
            return self.empty(self.bits)

        lo = self._lo_key
        if index < self.length - 1 - index:
            moved = list(iter_range(self.root, self.depth, lo, key, bits=self.bits))
            updates = [
                SlotUpdate(index=lo + position + 1, value=value)
                for position, value in enumerate(moved)
            ]
            vacated = lo
            new_offset = self.offset + 1
        else:
            end = lo + self.length
            moved = list(iter_range(self.root, self.depth, key + 1, end, bits=self.bits))
            updates = [
                SlotUpdate(index=key + position, value=value)
                for position, value in enumerate(moved)
            ]
            vacated = end - 1
            new_offset = self.offset

        LOGGER.debug("Removing index %d by shifting %d slots", index, len(updates))
        root = apply_slot_updates(self.root, self.depth, updates, bits=self.bits)
        root = clear_slot(root, self.depth, vacated, self.bits)
        return self.replace(root=root, offset=new_offset, length=self.length - 1)

    # ------------------------------------------------------------------
    # Traversal

    def __iter__(self) -> Iterator[Any]:
        return iter_range(
            self.root,
            self.depth,
            self._lo_key,
            self._lo_key + self.length,
            bits=self.bits,
        )

    def __reversed__(self) -> Iterator[Any]:
        return iter_range(
            self.root,
            self.depth,
            self._lo_key,
            self._lo_key + self.length,
            bits=self.bits,
            reverse=True,
        )

    def fold(self, combine: Callable[[T, Any], T], initial: T) -> T:
        """Left fold over the elements in index order."""

        return fold_left(iter(self), combine, initial)

    def fold_right(self, combine: Callable[[Any, T], T], initial: T) -> T:
        return fold_right(reversed(self), combine, initial)

    def map(self, fn: Callable[[Any], Any]) -> "PersistentArray":
        values = [fn(value) for value in self]
        root, depth = build_trie(values, bits=self.bits)
        return PersistentArray(
            root=root, depth=depth, origin=0, length=len(values), offset=0, bits=self.bits
        )

    # ------------------------------------------------------------------
    # Python protocol

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentArray):
            return NotImplemented
        if self.length != other.length:
            return False
        return all(left == right for left, right in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PersistentArray({list(self)!r})"

    # ------------------------------------------------------------------
    # Introspection

    def describe(self) -> dict[str, Any]:
        return {
            "length": self.length,
            "offset": self.offset,
            "origin": self.origin,
            "depth": self.depth,
            "bits": self.bits,
            "capacity": self.capacity,
            "nodes": count_nodes(self.root),
        }

    def validate(self) -> None:
        """Check the bookkeeping against the trie; raise `TrieInvariantError`."""

        try:
            ta_config.normalise_branch_bits(self.bits)
        except ValueError as exc:
            raise TrieInvariantError(str(exc)) from exc
        if self.length < 0 or self.depth < 0:
            raise TrieInvariantError(f"negative length {self.length} or depth {self.depth}")
        if self.length == 0:
            return

        lo = self.offset
        hi = self.offset + self.length
        if lo < self.origin or hi > self.origin + self.capacity:
            raise TrieInvariantError(
                f"physical range [{lo}, {hi}) outside root window "
                f"[{self.origin}, {self.origin + self.capacity})"
            )

        width = 1 << self.bits
        stack: List[Tuple[TrieNode, int]] = [(self.root, self.depth)]
        while stack:
            node, level = stack.pop()
            if node is EMPTY:
                continue
            if level == 0:
                if node.kind is not NodeKind.LEAF or len(node.slots) != width:
                    raise TrieInvariantError(f"malformed leaf at depth 0: {node!r}")
                continue
            if node.kind is not NodeKind.BRANCH or len(node.children) != width:
                raise TrieInvariantError(f"malformed branch at depth {level}: {node!r}")
            stack.extend((child, level - 1) for child in node.children)

        try:
            for _ in self:
                pass
        except NotFound as exc:
            raise TrieInvariantError(f"logical element missing from trie: {exc}") from exc


__all__ = ["PersistentArray", "resolve_bits"]
