#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

An ordered container of integer keys based on the **Red‑Black** algorithm.
Insert and lookup are guaranteed O(log n).

Features
~~~~~~~~
* `tree.insert(key)`      – insert (duplicates are kept, they go right)
* `tree.search(key)`      – node handle, or the falsy sentinel if missing
* `key in tree`           – membership test
* `len(tree)`             – number of stored keys
* iteration (`for key in tree:`) / `tree.in_order_keys()` – ascending order
* `tree.min_key()`, `tree.max_key()`, `tree.height()`, `tree.black_height()`
* `tree.root`, `tree.nil` – read‑only handles for outside traversal
* `tree.validate()` – sanity‑check that the red‑black invariants hold

Storage is a single arena (a Python list) of node records.  Parent and child
links are integer indices into the arena and index ``0`` is the single shared
sentinel leaf, so "is this the sentinel?" is an integer comparison and the
fixup code can read the colour of any child without a ``None`` check.  See
``rb_node.py`` for the record and handle types.

The tree is not thread‑safe; guard it with one lock or keep it on one thread.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree
>>> rbt = RedBlackTree()
>>> for k in (10, 20, 30):
...     _ = rbt.insert(k)
>>> rbt.root.key
20
>>> rbt.in_order_keys()
[10, 20, 30]
>>> rbt.search(20).key
20
>>> rbt.search(99) == rbt.nil
True
"""

from __future__ import annotations

import logging
from typing import Dict, Generator, Iterable, List, Optional, Tuple

from rb_node import (
    BLACK,
    NIL,
    NO_PARENT,
    RED,
    InvalidColor,
    Node,
    RedBlackTreeError,
    _Slot,
)

__all__ = [
    "RED",
    "BLACK",
    "InvalidColor",
    "Node",
    "RedBlackTree",
    "RedBlackTreeError",
]

logger = logging.getLogger(__name__)


class RedBlackTree:
    """
    A red‑black binary search tree of integer keys.

    Keys strictly less than a node go left, everything else – duplicates
    included – goes right.  A duplicate therefore never replaces an existing
    key; it is stored as a separate node next to its twins in key order.
    """

    __slots__ = ("_slots", "_root")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(self, keys: Optional[Iterable[int]] = None) -> None:
        """
        Create an empty tree or optionally fill it from an iterable of keys.

        Parameters
        ----------
        keys : iterable of int   optional
            If supplied, each key is inserted in order using ``insert``
            (i.e. the whole operation is O(n log n)).
        """
        # Slot 0 is the sentinel – BLACK, never written again.
        self._slots: List[_Slot] = [_Slot(color=BLACK)]
        self._root: int = NIL

        if keys is not None:
            for key in keys:
                self.insert(key)

    def __len__(self) -> int:
        return len(self._slots) - 1

    def __contains__(self, key: object) -> bool:
        return self._search_index(key) != NIL  # type: ignore[arg-type]

    def __iter__(self) -> Generator[int, None, None]:
        """Yield keys in ascending order (in‑order traversal)."""
        slots = self._slots
        stack: List[int] = []
        cur = self._root
        while stack or cur != NIL:
            while cur != NIL:
                stack.append(cur)
                cur = slots[cur].left
            cur = stack.pop()
            yield slots[cur].key  # type: ignore[misc]
            cur = slots[cur].right

    # ------------------------------------------------------------------
    #   Read‑only handles
    # ------------------------------------------------------------------
    @property
    def root(self) -> Node:
        """Handle of the root node (the sentinel handle when empty)."""
        return Node(self, self._root)

    @property
    def nil(self) -> Node:
        """Handle of the shared sentinel leaf."""
        return Node(self, NIL)

    def is_empty(self) -> bool:
        return self._root == NIL

    def in_order_keys(self) -> List[int]:
        """Return a list of all keys in sorted order."""
        return list(self)

    # ------------------------------------------------------------------
    #   Lookup
    # ------------------------------------------------------------------
    def _search_index(self, key: int) -> int:
        """Return the arena index holding *key* or ``NIL`` if not found."""
        slots = self._slots
        cur = self._root
        while cur != NIL:
            slot = slots[cur]
            if key == slot.key:
                return cur
            elif key < slot.key:  # type: ignore[operator]
                cur = slot.left
            else:
                cur = slot.right
        return NIL

    def search(self, key: int) -> Node:
        """
        Return the handle of the first node found with *key*.

        A miss returns the sentinel handle (``tree.nil``), which is falsy.
        With duplicate keys only the one met first on the way down is
        returned; the others are reachable through ``in_order_keys``.
        """
        return Node(self, self._search_index(key))

    # ------------------------------------------------------------------
    #   Minimum / maximum helpers
    # ------------------------------------------------------------------
    def _minimum_index(self) -> int:
        """Return the arena index of the smallest key."""
        cur = self._root
        if cur == NIL:
            raise ValueError("Tree is empty")
        slots = self._slots
        while slots[cur].left != NIL:
            cur = slots[cur].left
        return cur

    def _maximum_index(self) -> int:
        """Return the arena index of the largest key."""
        cur = self._root
        if cur == NIL:
            raise ValueError("Tree is empty")
        slots = self._slots
        while slots[cur].right != NIL:
            cur = slots[cur].right
        return cur

    def min_key(self) -> int:
        """Return the smallest key stored in the tree."""
        return self._slots[self._minimum_index()].key  # type: ignore[return-value]

    def max_key(self) -> int:
        """Return the largest key stored in the tree."""
        return self._slots[self._maximum_index()].key  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Shape helpers
    # ------------------------------------------------------------------
    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 if empty)."""
        slots = self._slots
        best = 0
        stack: List[Tuple[int, int]] = [(self._root, 1)] if self._root != NIL else []
        while stack:
            idx, depth = stack.pop()
            best = max(best, depth)
            for child in (slots[idx].left, slots[idx].right):
                if child != NIL:
                    stack.append((child, depth + 1))
        return best

    def black_height(self) -> int:
        """BLACK nodes on the path from the root down to a sentinel, the
        sentinel included."""
        slots = self._slots
        count = 1
        cur = self._root
        while cur != NIL:
            if slots[cur].color == BLACK:
                count += 1
            cur = slots[cur].left
        return count

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, key: int) -> Node:
        """Insert *key* and return the handle of the new node."""
        slots = self._slots
        parent = NO_PARENT
        cur = self._root
        while cur != NIL:
            parent = cur
            if key < slots[cur].key:  # type: ignore[operator]
                cur = slots[cur].left
            else:
                cur = slots[cur].right

        # Allocate only once the descent has succeeded.
        new = len(slots)
        slots.append(_Slot(key=key, color=RED, parent=parent))
        if parent == NO_PARENT:
            self._root = new
        elif key < slots[parent].key:  # type: ignore[operator]
            slots[parent].left = new
        else:
            slots[parent].right = new

        # A new root is simply painted black.
        if parent == NO_PARENT:
            slots[new].color = BLACK
            return Node(self, new)

        # A red child of a black root cannot violate anything.
        if slots[parent].parent == NO_PARENT:
            return Node(self, new)

        self._fix_insert(new)
        return Node(self, new)

    # ------------------------------------------------------------------
    #   Insert fix‑up (restores the red‑black properties)
    # ------------------------------------------------------------------
    def _fix_insert(self, z: int) -> None:
        """Restore red‑black properties after inserting node `z` (which is RED)."""
        slots = self._slots
        while slots[z].parent != NO_PARENT and slots[slots[z].parent].color == RED:
            p = slots[z].parent
            g = slots[p].parent
            if g == NO_PARENT:
                break

            if p == slots[g].right:
                u = slots[g].left  # uncle
                if slots[u].color == RED:
                    # Case 1 – recolour and move the violation up
                    logger.debug("fixup: recolour below %r", slots[g].key)
                    slots[u].color = BLACK
                    slots[p].color = BLACK
                    slots[g].color = RED
                    z = g
                else:
                    if z == slots[p].left:
                        # Case 2 – straighten the zig‑zag
                        z = p
                        self._rotate_right(z)
                    # Case 3
                    p = slots[z].parent
                    slots[p].color = BLACK
                    g = slots[p].parent
                    if g != NO_PARENT:
                        slots[g].color = RED
                        self._rotate_left(g)
            else:  # Mirror of the above (parent is a left child)
                u = slots[g].right
                if slots[u].color == RED:
                    logger.debug("fixup: recolour below %r", slots[g].key)
                    slots[u].color = BLACK
                    slots[p].color = BLACK
                    slots[g].color = RED
                    z = g
                else:
                    if z == slots[p].right:
                        z = p
                        self._rotate_left(z)
                    p = slots[z].parent
                    slots[p].color = BLACK
                    g = slots[p].parent
                    if g != NO_PARENT:
                        slots[g].color = RED
                        self._rotate_right(g)

            if z == self._root:
                break
        slots[self._root].color = BLACK

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _rotate_left(self, x: int) -> None:
        """Left‑rotate the subtree rooted at `x`."""
        slots = self._slots
        y = slots[x].right
        if y == NIL:
            raise RuntimeError("rotate_left called on a node with nil right child")
        logger.debug("rotate left at %r", slots[x].key)
        # Turn y's left subtree into x's right subtree
        slots[x].right = slots[y].left
        if slots[y].left != NIL:
            slots[slots[y].left].parent = x
        # Link x's parent to y
        parent = slots[x].parent
        slots[y].parent = parent
        if parent == NO_PARENT:
            self._root = y
        elif x == slots[parent].left:
            slots[parent].left = y
        else:
            slots[parent].right = y
        # Put x on y's left
        slots[y].left = x
        slots[x].parent = y

    def _rotate_right(self, y: int) -> None:
        """Right‑rotate the subtree rooted at `y`."""
        slots = self._slots
        x = slots[y].left
        if x == NIL:
            raise RuntimeError("rotate_right called on a node with nil left child")
        logger.debug("rotate right at %r", slots[y].key)
        # Turn x's right subtree into y's left subtree
        slots[y].left = slots[x].right
        if slots[x].right != NIL:
            slots[slots[x].right].parent = y
        # Link y's parent to x
        parent = slots[y].parent
        slots[x].parent = parent
        if parent == NO_PARENT:
            self._root = x
        elif y == slots[parent].right:
            slots[parent].right = x
        else:
            slots[parent].left = x
        # Put y on x's right
        slots[x].right = y
        slots[y].parent = x

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.

        Besides the colour rules this checks the key order (non‑decreasing,
        since duplicates are allowed) and that every parent link matches the
        child link pointing back at it.
        """
        slots = self._slots
        assert slots[NIL].color == BLACK, "Sentinel is not black"
        if self._root == NIL:
            assert len(slots) == 1, "Empty tree still owns nodes"
            return
        assert slots[self._root].color == BLACK, "Root is not black"
        assert slots[self._root].parent == NO_PARENT, "Root has a parent"

        # Pre‑order walk; reversed, it visits children before parents.
        order: List[int] = []
        stack = [self._root]
        while stack:
            idx = stack.pop()
            order.append(idx)
            slot = slots[idx]
            for child in (slot.left, slot.right):
                if child == NIL:
                    continue
                assert slots[child].parent == idx, (
                    f"Broken parent link below {slot.key!r}"
                )
                if slot.color == RED:
                    assert slots[child].color == BLACK, (
                        f"Red node {slot.key!r} has a red child"
                    )
                stack.append(child)
        assert len(order) == len(self), "Unreachable nodes in the arena"

        black: Dict[int, int] = {NIL: 1}
        for idx in reversed(order):
            slot = slots[idx]
            left_black = black[slot.left]
            right_black = black[slot.right]
            assert left_black == right_black, (
                f"Black-height mismatch at {slot.key!r}"
            )
            black[idx] = left_black + (1 if slot.color == BLACK else 0)

        keys = self.in_order_keys()
        assert all(a <= b for a, b in zip(keys, keys[1:])), "BST order violated"

    # ------------------------------------------------------------------
    #   Convenience string representation (for debugging)
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"RedBlackTree({self.in_order_keys()!r})"
