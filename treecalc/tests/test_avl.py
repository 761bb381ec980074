"""Tests for the AVL ordered set.

Structural invariants (order, cached heights, balance, size) are checked
against the tree's internals after every mutation, alongside the public
contract: insert/remove/contains/len/height/clear/is_balanced/root_info.
"""

import math
import random

import pytest

from treecalc.avl import AvlTree
from treecalc.models import RootInfo


def _check_invariants(tree: AvlTree) -> None:
    """Assert BST order, height cache, AVL balance and size on the raw nodes."""
    count = 0

    def walk(node, low, high):
        nonlocal count
        if node is None:
            return 0
        count += 1
        if low is not None:
            assert node.value > low
        if high is not None:
            assert node.value < high
        lh = walk(node.left, low, node.value)
        rh = walk(node.right, node.value, high)
        assert node.height == 1 + max(lh, rh)
        assert abs(lh - rh) <= 1
        return node.height

    walk(tree._root, None, None)
    assert count == len(tree)
    assert tree.is_balanced()


def _height_bound(n: int) -> int:
    return math.ceil(1.44 * math.log2(n + 2))


@pytest.fixture
def tree():
    return AvlTree()


# --- Empty tree ---

def test_new_tree_is_empty(tree):
    assert len(tree) == 0
    assert tree.is_empty()
    assert tree.height() == 0
    assert not tree


def test_empty_tree_is_balanced(tree):
    assert tree.is_balanced()
    assert tree.root_info() is None


def test_remove_from_empty_tree(tree):
    assert tree.remove(1) is False
    assert len(tree) == 0


# --- Insert ---

def test_insert_single(tree):
    assert tree.insert(10) is True
    assert len(tree) == 1
    assert tree.height() == 1
    assert tree.contains(10)
    assert 10 in tree


def test_insert_duplicate_is_noop(tree):
    tree.insert(10)
    assert tree.insert(10) is False
    assert len(tree) == 1


def test_insert_one_to_ten(tree):
    for i in range(1, 11):
        tree.insert(i)
        _check_invariants(tree)
    assert len(tree) == 10
    assert tree.height() <= 4
    assert tree.is_balanced()


def test_insert_sorted_sequence_stays_logarithmic(tree):
    for i in range(1000):
        tree.insert(i)
    assert tree.height() <= _height_bound(1000)
    _check_invariants(tree)


def test_insert_strings(tree):
    for word in ["pear", "apple", "fig", "kiwi", "banana", "apple"]:
        tree.insert(word)
    assert len(tree) == 5
    assert tree.contains("fig")
    assert not tree.contains("grape")
    _check_invariants(tree)


# --- Rotation cases ---

@pytest.mark.parametrize("order", [
    (30, 20, 10),  # left-left
    (10, 20, 30),  # right-right
    (30, 10, 20),  # left-right
    (10, 30, 20),  # right-left
])
def test_rotation_cases_produce_middle_root(tree, order):
    for v in order:
        tree.insert(v)
    assert tree.root_info() == RootInfo(value=20, height=2, balance=0, left=10, right=30)
    _check_invariants(tree)


# --- Remove ---

def test_remove_one_to_three_after_one_to_ten(tree):
    for i in range(1, 11):
        tree.insert(i)
    for i in range(1, 4):
        assert tree.remove(i) is True
        _check_invariants(tree)
    assert len(tree) == 7
    assert not tree.contains(3)
    assert tree.contains(4)
    assert tree.is_balanced()


def test_remove_missing_value(tree):
    for i in (5, 3, 8):
        tree.insert(i)
    assert tree.remove(7) is False
    assert len(tree) == 3


def test_remove_leaf(tree):
    for i in (5, 3, 8):
        tree.insert(i)
    assert tree.remove(3)
    assert tree.root_info() == RootInfo(value=5, height=2, balance=-1, left=None, right=8)


def test_remove_node_with_two_children_promotes_successor(tree):
    for i in range(1, 8):
        tree.insert(i)
    assert tree.root_info().value == 4
    assert tree.remove(4)
    assert tree.root_info() == RootInfo(value=5, height=3, balance=0, left=2, right=6)
    _check_invariants(tree)


def test_remove_with_balanced_child_takes_single_rotation(tree):
    for i in (5, 3, 8, 2, 4):
        tree.insert(i)
    tree.remove(8)
    # Left child had balance 0: one right rotation at the root
    assert tree.root_info() == RootInfo(value=3, height=3, balance=-1, left=2, right=5)
    _check_invariants(tree)


def test_remove_everything(tree):
    values = list(range(50))
    for v in values:
        tree.insert(v)
    random.Random(7).shuffle(values)
    for v in values:
        assert tree.remove(v)
        _check_invariants(tree)
    assert tree.is_empty()
    assert tree.height() == 0


# --- Clear ---

def test_clear(tree):
    for i in range(20):
        tree.insert(i)
    tree.clear()
    assert len(tree) == 0
    assert tree.height() == 0
    assert not tree.contains(5)
    tree.insert(1)
    assert len(tree) == 1


# --- Properties over random operation sequences ---

@pytest.mark.parametrize("seed", range(5))
def test_random_operations_match_reference_set(tree, seed):
    rng = random.Random(seed)
    reference = set()
    for _ in range(400):
        v = rng.randrange(100)
        if rng.random() < 0.6:
            assert tree.insert(v) == (v not in reference)
            reference.add(v)
        else:
            assert tree.remove(v) == (v in reference)
            reference.discard(v)
        assert len(tree) == len(reference)
        assert tree.is_balanced()
    _check_invariants(tree)
    for v in range(100):
        assert tree.contains(v) == (v in reference)


@pytest.mark.parametrize("n", [1, 2, 7, 100, 777])
def test_height_bound_after_distinct_inserts(n):
    values = list(range(n))
    random.Random(n).shuffle(values)
    tree = AvlTree()
    for v in values:
        tree.insert(v)
    assert tree.height() <= _height_bound(n)


def test_permutations_give_equivalent_sets():
    values = list(range(64))
    a, b = AvlTree(), AvlTree()
    for v in values:
        a.insert(v)
    shuffled = values[:]
    random.Random(3).shuffle(shuffled)
    for v in shuffled:
        b.insert(v)
    for v in range(-5, 70):
        assert a.contains(v) == b.contains(v)
    assert a.is_balanced() and b.is_balanced()


def test_is_balanced_detects_broken_structure(tree):
    for i in range(1, 8):
        tree.insert(i)
    # Unlink a whole subtree behind the tree's back
    tree._root.left = None
    assert not tree.is_balanced()


def test_demo_walkthrough_stays_balanced(tree):
    for i in range(1, 11):
        tree.insert(i)
    for i in range(1, 4):
        tree.remove(i)
    for i in range(11, 26):
        tree.insert(i)
        assert tree.is_balanced()
    assert len(tree) == 22
    assert not tree.contains(3)
    assert tree.contains(20)
