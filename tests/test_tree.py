"""Unit tests for catalog/tree.py and catalog/listing.py."""
from __future__ import annotations

import pytest

from catalog.listing import group_listing
from catalog.tree import NodeKind, TreeNode


def _make_tree() -> TreeNode:
    root = TreeNode(title="Man pages: /man", key="/man", synonyms={"man", "/man"})
    one = root.add_child("Section 1", "1", {"1"})
    one.add_child("ls", "ls")
    one.add_child("cat", "cat")
    eight = root.add_child("Section 8", "8", {"8"})
    eight.add_child("mount", "mount")
    return root


def test_kind_follows_depth():
    root = _make_tree()
    category = root.children[0]
    document = category.children[0]

    assert (root.depth, category.depth, document.depth) == (0, 1, 2)
    assert root.kind is NodeKind.ROOT
    assert category.kind is NodeKind.CATEGORY
    assert document.kind is NodeKind.DOCUMENT
    assert document.is_document and not category.is_document


def test_parent_and_root_links():
    root = _make_tree()
    document = root.children[1].children[0]

    assert root.parent is None
    assert document.parent is root.children[1]
    assert document.root is root
    assert document.parent.parent is root


def test_documents_cannot_have_children():
    root = _make_tree()
    with pytest.raises(ValueError):
        root.children[0].children[0].add_child("x", "x")


def test_walk_is_depth_first_in_child_order():
    titles = [node.title for node in _make_tree().walk()]
    assert titles == ["Man pages: /man", "Section 1", "ls", "cat", "Section 8", "mount"]


def test_matches_title_and_synonyms():
    root = _make_tree()
    assert root.matches("MAN")
    assert root.children[1].matches("8")
    assert not root.children[1].matches("9")


def test_destroy_detaches_children_first():
    root = _make_tree()
    category = root.children[0]
    document = category.children[0]

    root.destroy()

    assert root.children == []
    assert category.children == []
    assert category.parent is None
    assert document.parent is None


def test_group_listing_keeps_first_seen_order():
    grouped = group_listing([("alpha", "1"), ("beta", "1"), ("gamma", "8")])
    assert list(grouped) == ["1", "8"]
    assert grouped["1"] == ["alpha", "beta"]
    assert grouped["8"] == ["gamma"]


def test_group_listing_orders_by_appearance_not_value():
    grouped = group_listing([("z", "8"), ("a", "1"), ("y", "8")])
    assert list(grouped) == ["8", "1"]
    assert grouped["8"] == ["z", "y"]


def test_group_listing_drops_duplicates_and_blanks():
    grouped = group_listing([("ls", "1"), ("ls", "1"), ("", "1"), ("cat", " "), ("ls", "1p")])
    assert grouped == {"1": ["ls"], "1p": ["ls"]}


def test_group_listing_skips_entries_that_are_not_string_pairs():
    grouped = group_listing([("foo", "1"), ("bar",), ("a", "1", "x"), (None, "1"), "ls", ("baz", "1")])
    assert grouped == {"1": ["foo", "baz"]}
