import pytest

from triearray.core.persistence import (
    SlotUpdate,
    apply_slot_updates,
    build_trie,
    clear_slot,
    grow_to_cover,
    with_slot,
)
from triearray.core.trie import (
    EMPTY,
    Branch,
    Leaf,
    NodeKind,
    capacity,
    count_nodes,
    lookup,
    path_to,
    slot_index,
)
from triearray.errors import NotFound


def test_node_kinds_are_tagged():
    assert EMPTY.kind is NodeKind.EMPTY
    assert Leaf((1, 2)).kind is NodeKind.LEAF
    assert Branch((EMPTY, EMPTY)).kind is NodeKind.BRANCH


def test_nodes_compare_by_identity():
    assert Leaf((1, 2)) != Leaf((1, 2))


def test_slot_index_uses_bit_groups():
    # 0b10_01_11 with two bits per level
    assert slot_index(0b100111, 0, 2) == 0b11
    assert slot_index(0b100111, 1, 2) == 0b01
    assert slot_index(0b100111, 2, 2) == 0b10
    assert capacity(0, 5) == 32
    assert capacity(2, 2) == 64


def test_build_trie_shapes():
    assert build_trie([], bits=2) == (EMPTY, 0)

    leaf, depth = build_trie(range(4), bits=2)
    assert depth == 0
    assert leaf.slots == (0, 1, 2, 3)

    root, depth = build_trie(list(range(100)), bits=2)
    assert depth == 3
    assert count_nodes(root) == 25 + 7 + 2 + 1
    assert [lookup(root, depth, key, 2) for key in range(100)] == list(range(100))


def test_lookup_raises_not_found_for_holes():
    root, depth = build_trie(list(range(5)), bits=2)
    assert depth == 1

    with pytest.raises(NotFound):
        lookup(root, depth, 5, 2)  # vacant slot in the second leaf
    with pytest.raises(NotFound):
        lookup(root, depth, 9, 2)  # subtree never materialised
    with pytest.raises(NotFound):
        lookup(root, depth, 16, 2)  # beyond the root's capacity
    with pytest.raises(NotFound):
        lookup(EMPTY, 0, 0, 2)


def test_with_slot_copies_only_the_path():
    root, depth = build_trie(list(range(64)), bits=2)
    assert depth == 2

    updated = with_slot(root, depth, 0, "x", 2)

    assert lookup(updated, depth, 0, 2) == "x"
    assert lookup(root, depth, 0, 2) == 0
    assert updated.children[0] is not root.children[0]
    for position in range(1, 4):
        assert updated.children[position] is root.children[position]
        assert updated.children[0].children[position] is root.children[0].children[position]

    old_path = path_to(root, depth, 0, 2)
    new_path = path_to(updated, depth, 0, 2)
    assert len(new_path) == depth + 1
    assert all(old is not new for old, new in zip(old_path, new_path))

    untouched = path_to(updated, depth, 63, 2)
    assert untouched[0] is updated
    assert untouched[1:] == path_to(root, depth, 63, 2)[1:]


def test_with_slot_materialises_fresh_path():
    node = with_slot(EMPTY, 1, 5, "v", 2)

    assert node.kind is NodeKind.BRANCH
    assert lookup(node, 1, 5, 2) == "v"
    assert count_nodes(node) == 2
    assert path_to(node, 1, 12, 2) == [node]


def test_with_slot_rejects_keys_outside_the_trie():
    with pytest.raises(ValueError):
        with_slot(EMPTY, 0, 4, "v", 2)
    with pytest.raises(ValueError):
        with_slot(EMPTY, 0, -1, "v", 2)


def test_clear_slot_prunes_empty_nodes():
    leaf = with_slot(EMPTY, 0, 2, "v", 2)
    assert clear_slot(leaf, 0, 2, 2) is EMPTY

    branch = with_slot(EMPTY, 1, 5, "v", 2)
    assert clear_slot(branch, 1, 5, 2) is EMPTY

    root, depth = build_trie(list(range(8)), bits=2)
    cleared = clear_slot(root, depth, 7, 2)
    assert cleared.children[0] is root.children[0]
    with pytest.raises(NotFound):
        lookup(cleared, depth, 7, 2)


def test_apply_slot_updates_in_order():
    root, depth = build_trie(list(range(16)), bits=2)
    updates = [SlotUpdate(index=3, value="a"), SlotUpdate(index=12, value="b"), SlotUpdate(index=3, value="c")]

    updated = apply_slot_updates(root, depth, updates, bits=2)

    assert lookup(updated, depth, 3, 2) == "c"
    assert lookup(updated, depth, 12, 2) == "b"
    assert lookup(root, depth, 3, 2) == 3
    assert apply_slot_updates(root, depth, (), bits=2) is root


def test_grow_to_cover_left_keeps_old_root_in_last_slot():
    root, depth = build_trie(list(range(4)), bits=2)

    grown, new_depth, origin = grow_to_cover(root, depth, 0, -1, bits=2)

    assert new_depth == 1
    assert origin == -12
    assert grown.children[3] is root
    assert lookup(grown, new_depth, 0 - origin, 2) == 0


def test_grow_to_cover_right_keeps_old_root_in_first_slot():
    root, depth = build_trie(list(range(4)), bits=2)

    grown, new_depth, origin = grow_to_cover(root, depth, 0, 4, bits=2)
    assert (new_depth, origin) == (1, 0)
    assert grown.children[0] is root

    far, far_depth, far_origin = grow_to_cover(root, depth, 0, 100, bits=2)
    assert (far_depth, far_origin) == (3, 0)
    assert far.children[0].children[0].children[0] is root


def test_grow_to_cover_is_noop_inside_window():
    root, depth = build_trie(list(range(4)), bits=2)

    assert grow_to_cover(root, depth, 0, 3, bits=2) == (root, depth, 0)
    assert grow_to_cover(EMPTY, 0, 0, -7, bits=2) == (EMPTY, 0, -7)
