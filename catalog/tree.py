"""
Tree node model for the manual catalog.

A catalog tree always has exactly three levels:
    root (a source location) -> category (e.g. manual section) -> document

The kind of a node is never stored, it is derived from how many parents it has.
Parents own their children; the back-link to the parent is a weak reference.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Set


class NodeKind(str, Enum):
    """Kind of a tree node, inferred from its depth."""
    ROOT = "root"
    CATEGORY = "category"
    DOCUMENT = "document"


_KIND_BY_DEPTH = {
    0: NodeKind.ROOT,
    1: NodeKind.CATEGORY,
    2: NodeKind.DOCUMENT,
}


@dataclass(eq=False)
class TreeNode:
    """One node of a catalog tree.

    Attributes:
        title: Display label
        key: Lookup key (location for a root, category key, or document id)
        synonyms: Alternate lookup keys used by the host for matching
        children: Owned child nodes, in discovery order
    """
    title: str
    key: str
    synonyms: Set[str] = field(default_factory=set)
    children: List["TreeNode"] = field(default_factory=list)
    _parent_ref: Optional["weakref.ReferenceType[TreeNode]"] = field(
        default=None, repr=False
    )

    @property
    def parent(self) -> Optional["TreeNode"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def kind(self) -> NodeKind:
        try:
            return _KIND_BY_DEPTH[self.depth]
        except KeyError:
            raise ValueError(f"Node '{self.title}' is deeper than a document") from None

    @property
    def is_document(self) -> bool:
        return self.depth == 2

    @property
    def root(self) -> "TreeNode":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def add_child(self, title: str, key: str, synonyms: Iterable[str] = ()) -> "TreeNode":
        """Create a child node owned by this node and append it.

        Args:
            title: Display label of the child
            key: Lookup key of the child
            synonyms: Alternate lookup keys

        Returns:
            The new child node

        Raises:
            ValueError: If this node is already a document (leaf)
        """
        if self.depth >= 2:
            raise ValueError(f"Document node '{self.title}' cannot have children")

        child = TreeNode(title=title, key=key, synonyms=set(synonyms))
        child._parent_ref = weakref.ref(self)
        self.children.append(child)
        return child

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and all descendants, depth-first in child order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def matches(self, text: str) -> bool:
        """Case-insensitive match against title and synonyms."""
        needle = text.lower()
        if needle in self.title.lower():
            return True
        return any(needle == synonym.lower() for synonym in self.synonyms)

    def destroy(self) -> None:
        """Detach the whole subtree, children first."""
        for child in self.children:
            child.destroy()
            child._parent_ref = None
        self.children.clear()
