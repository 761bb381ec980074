"""Height-balanced ordered set (AVL tree).

Every node caches its height; after each insert or remove the nodes on the
mutated path are rebalanced bottom-up so that the heights of any node's two
subtrees differ by at most one. All operations are O(log n).

Nodes are owned by exactly one parent. Rotations detach a child, rewire it and
hand back the new subtree root; the caller stores whatever is returned.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, Protocol, TypeVar

from treecalc.models import RootInfo


class _Ordered(Protocol):
    def __lt__(self, other: Any) -> bool: ...
    def __gt__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=_Ordered)


class _Node(Generic[T]):
    __slots__ = ("value", "left", "right", "height")

    def __init__(self, value: T) -> None:
        self.value = value
        self.left: Optional[_Node[T]] = None
        self.right: Optional[_Node[T]] = None
        self.height = 1


def _height(node: Optional[_Node]) -> int:
    return node.height if node else 0


def _update_height(node: _Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _balance_factor(node: _Node) -> int:
    return _height(node.left) - _height(node.right)


def _rotate_right(root: _Node) -> _Node:
    """Promote root.left; root becomes its right child."""
    new_root = root.left
    root.left = new_root.right
    _update_height(root)
    new_root.right = root
    _update_height(new_root)
    return new_root


def _rotate_left(root: _Node) -> _Node:
    """Promote root.right; root becomes its left child."""
    new_root = root.right
    root.right = new_root.left
    _update_height(root)
    new_root.left = root
    _update_height(new_root)
    return new_root


def _rebalance(node: _Node) -> _Node:
    """Refresh node's height and restore the AVL property at node.

    A child balance of 0 takes the single-rotation branch, which is the case
    that only arises after a deletion.
    """
    _update_height(node)
    balance = _balance_factor(node)

    if balance > 1:
        if node.left and _balance_factor(node.left) < 0:
            node.left = _rotate_left(node.left)
        return _rotate_right(node)

    if balance < -1:
        if node.right and _balance_factor(node.right) > 0:
            node.right = _rotate_right(node.right)
        return _rotate_left(node)

    return node


def _insert(node: Optional[_Node[T]], value: T) -> tuple[_Node[T], bool]:
    if node is None:
        return _Node(value), True

    if value < node.value:
        node.left, inserted = _insert(node.left, value)
    elif value > node.value:
        node.right, inserted = _insert(node.right, value)
    else:
        return node, False

    return (_rebalance(node) if inserted else node), inserted


def _extract_min(node: _Node[T]) -> tuple[T, Optional[_Node[T]]]:
    """Unlink the leftmost node of a subtree.

    Returns (min value, rebalanced subtree without it).
    """
    if node.left is None:
        return node.value, node.right
    min_value, node.left = _extract_min(node.left)
    return min_value, _rebalance(node)


def _remove(node: Optional[_Node[T]], value: T) -> tuple[Optional[_Node[T]], bool]:
    if node is None:
        return None, False

    if value < node.value:
        node.left, removed = _remove(node.left, value)
    elif value > node.value:
        node.right, removed = _remove(node.right, value)
    else:
        if node.left is None:
            return node.right, True
        if node.right is None:
            return node.left, True
        # Two children: the in-order successor's value takes this slot
        successor, node.right = _extract_min(node.right)
        node.value = successor
        return _rebalance(node), True

    return (_rebalance(node) if removed else node), removed


def _checked_height(node: Optional[_Node]) -> Optional[int]:
    """Height recomputed from scratch, or None if any subtree is unbalanced."""
    if node is None:
        return 0
    left = _checked_height(node.left)
    if left is None:
        return None
    right = _checked_height(node.right)
    if right is None:
        return None
    if abs(left - right) > 1:
        return None
    return 1 + max(left, right)


class AvlTree(Generic[T]):
    """Ordered set of distinct, mutually comparable values.

    Example:
        >>> tree = AvlTree()
        >>> for i in range(1, 11):
        ...     tree.insert(i)
        >>> len(tree), tree.height(), tree.is_balanced()
        (10, 4, True)
    """

    def __init__(self) -> None:
        self._root: Optional[_Node[T]] = None
        self._size = 0

    def insert(self, value: T) -> bool:
        """Insert value unless present. Returns True if the set grew."""
        self._root, inserted = _insert(self._root, value)
        if inserted:
            self._size += 1
        return inserted

    def remove(self, value: T) -> bool:
        """Remove value if present. Returns True if something was removed."""
        self._root, removed = _remove(self._root, value)
        if removed:
            self._size -= 1
        return removed

    def contains(self, value: T) -> bool:
        current = self._root
        while current is not None:
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return True
        return False

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __repr__(self) -> str:
        return f"AvlTree(size={self._size}, height={self.height()})"

    def is_empty(self) -> bool:
        return self._size == 0

    def height(self) -> int:
        """Height of the root; 0 for an empty tree."""
        return _height(self._root)

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def is_balanced(self) -> bool:
        """Check the AVL property everywhere, ignoring cached heights."""
        return _checked_height(self._root) is not None

    def root_info(self) -> Optional[RootInfo]:
        """Describe the root node, or None when the tree is empty."""
        root = self._root
        if root is None:
            return None
        return RootInfo(
            value=root.value,
            height=root.height,
            balance=_balance_factor(root),
            left=root.left.value if root.left else None,
            right=root.right.value if root.right else None,
        )
