#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
rb_node.py
----------

Node storage for the arena‑backed red‑black tree in ``red_black_tree.py``.

The tree keeps every node in a single list (the *arena*).  Links between
nodes are plain integer indices into that list, so there are no reference
cycles between parents and children.  Index ``0`` is reserved for the shared
sentinel leaf.

Callers never see the raw records; they get :class:`Node` handles, which are
cheap read‑only views ``(tree, index)`` onto an arena slot.

>>> from red_black_tree import RedBlackTree
>>> rbt = RedBlackTree([10, 20, 30])
>>> rbt.root
<B 20>
>>> rbt.root.left.sibling()
<R 30>
>>> bool(rbt.search(99))
False
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from red_black_tree import RedBlackTree

# ----------------------------------------------------------------------
#  Colour constants and reserved arena indices
# ----------------------------------------------------------------------
RED = True
BLACK = False

NIL = 0          # arena index of the sentinel
NO_PARENT = -1   # parent link of the root (and of the sentinel)


class RedBlackTreeError(Exception):
    """Base class for errors raised by the red‑black tree."""


class InvalidColor(RedBlackTreeError, ValueError):
    """A colour other than ``RED`` or ``BLACK`` was supplied."""


def check_color(color: object) -> bool:
    """Return *color* unchanged if it is ``RED`` or ``BLACK``, else raise."""
    # Identity, not equality: 1 and 0 compare equal to True/False.
    if color is not RED and color is not BLACK:
        raise InvalidColor(f"Invalid colour {color!r}; use RED or BLACK")
    return color  # type: ignore[return-value]


class _Slot:
    """Internal arena record – links are indices into the owning arena."""

    __slots__ = ("key", "color", "parent", "left", "right")

    def __init__(
        self,
        key: Optional[int] = None,
        color: bool = BLACK,
        parent: int = NO_PARENT,
        left: int = NIL,
        right: int = NIL,
    ) -> None:
        self.key = key
        self.color = check_color(color)
        self.parent = parent
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"_Slot({col} {self.key!r} p={self.parent} l={self.left} r={self.right})"


class Node:
    """
    Read‑only handle onto one node of a :class:`RedBlackTree`.

    Handles compare equal when they point at the same slot of the same tree.
    The sentinel handle is falsy, which is how ``search`` reports a miss::

        node = tree.search(42)
        if node:
            print(node.key)

    Handles stay valid for the lifetime of the tree: rotations move slots
    around in the tree structure but never move them in the arena.
    """

    __slots__ = ("_tree", "_index")

    def __init__(self, tree: "RedBlackTree", index: int) -> None:
        self._tree = tree
        self._index = index

    # ------------------------------------------------------------------
    #   Raw accessors
    # ------------------------------------------------------------------
    @property
    def _slot(self) -> _Slot:
        return self._tree._slots[self._index]

    @property
    def index(self) -> int:
        """Position of this node in the tree's arena (``0`` is the sentinel)."""
        return self._index

    @property
    def key(self) -> Optional[int]:
        return self._slot.key

    @property
    def color(self) -> bool:
        return self._slot.color

    @property
    def is_nil(self) -> bool:
        return self._index == NIL

    @property
    def parent(self) -> Optional["Node"]:
        """The parent handle, or ``None`` for the root and the sentinel."""
        return self._handle(self._slot.parent)

    @property
    def left(self) -> "Node":
        return Node(self._tree, self._slot.left)

    @property
    def right(self) -> "Node":
        return Node(self._tree, self._slot.right)

    def _handle(self, index: int) -> Optional["Node"]:
        if index == NO_PARENT:
            return None
        return Node(self._tree, index)

    # ------------------------------------------------------------------
    #   Derived relations
    # ------------------------------------------------------------------
    def sibling(self) -> Optional["Node"]:
        """Return the other child of this node's parent, or ``None``."""
        parent = self._slot.parent
        if parent == NO_PARENT:
            return None
        parent_slot = self._tree._slots[parent]
        if parent_slot.left == self._index:
            return Node(self._tree, parent_slot.right)
        return Node(self._tree, parent_slot.left)

    def grandparent(self) -> Optional["Node"]:
        parent = self.parent
        if parent is None:
            return None
        return parent.parent

    def uncle(self) -> Optional["Node"]:
        """Return the sibling of this node's parent, or ``None`` if there is
        no grandparent."""
        if self.grandparent() is None:
            return None
        return self.parent.sibling()  # type: ignore[union-attr]

    # ------------------------------------------------------------------
    #   Predicates
    # ------------------------------------------------------------------
    def is_red(self) -> bool:
        return self._slot.color == RED

    def is_black(self) -> bool:
        return self._slot.color == BLACK

    def is_leaf(self) -> bool:
        """True when both children are the sentinel."""
        slot = self._slot
        return not self.is_nil and slot.left == NIL and slot.right == NIL

    def has_two_children(self) -> bool:
        slot = self._slot
        return not self.is_nil and slot.left != NIL and slot.right != NIL

    # ------------------------------------------------------------------
    #   Mutation
    # ------------------------------------------------------------------
    def set_color(self, color: object) -> None:
        """
        Recolour this node.

        Anything other than ``RED``/``BLACK`` raises :class:`InvalidColor`
        and leaves the node untouched; the sentinel only accepts ``BLACK``.
        A valid recolour can still break the red‑black invariants – use
        :meth:`RedBlackTree.validate` to check.
        """
        color = check_color(color)
        if self.is_nil and color is not BLACK:
            raise InvalidColor("The sentinel is always BLACK")
        self._slot.color = color

    # ------------------------------------------------------------------
    #   Dunder helpers
    # ------------------------------------------------------------------
    def __bool__(self) -> bool:
        return not self.is_nil

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._tree is other._tree and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._tree), self._index))

    def __repr__(self) -> str:
        if self.is_nil:
            return "<nil>"
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}>"
