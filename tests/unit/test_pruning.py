"""
Pruning Unit Tests
Tests for mrkl/merkle/pruning.py

Tests:
- Refusals: empty keep set, already-pruned tree, kept items out of range
- Root digest is preserved
- Pruned validation passes when every kept item is in the tree
- Kept items survive; everything else is collapsed
- Keeping an item that is not in the tree can leave an unverifiable node
"""
import logging
import random

import pytest

from mrkl.config.runtime import TreeConfig
from mrkl.merkle import Branch, Leaf, MerkleTree, Partial, prune

from fixtures import make_names_tree, make_numeric_items, make_numeric_tree


class TestRefusals:
    """Preconditions fail softly with False."""

    def test_empty_keep_set(self, names_tree):
        before = names_tree.root_digest

        assert names_tree.prune([]) is False
        assert not names_tree.is_pruned
        assert names_tree.root_digest == before

    def test_already_pruned(self, names_tree):
        assert names_tree.prune(["alice"]) is True
        assert names_tree.prune(["alice"]) is False

    def test_tampered_tree(self, names_tree):
        names_tree.root.root_digest = "0" * 64

        assert names_tree.prune(["alice"]) is False
        assert not names_tree.is_pruned

    def test_keep_below_range(self, names_tree):
        assert names_tree.prune(["aaron"]) is False
        assert not names_tree.is_pruned

    def test_keep_above_range(self, names_tree):
        assert names_tree.prune(["zed"]) is False

    def test_fail_fast_config_does_not_raise(self):
        """The precondition check reports instead of raising."""
        tree = make_names_tree(config=TreeConfig(fail_fast=True))
        tree.root.root_digest = "0" * 64

        assert tree.prune(["alice"]) is False

    def test_refusal_is_logged(self, names_tree, caplog):
        with caplog.at_level(logging.WARNING, logger="mrkl.merkle.pruning"):
            names_tree.prune([])

        assert "no items to keep" in caplog.text


class TestPruneNames:
    """The five-name tree."""

    def test_keep_alice(self, names_tree):
        before = names_tree.root_digest

        assert names_tree.prune(["alice"])

        assert names_tree.root_digest == before
        assert names_tree.validate_pruned().is_valid
        assert names_tree.validate().is_invalid_tree
        assert names_tree.leaves() == ["alice"]
        assert names_tree.is_pruned

    def test_keep_alice_shape(self, names_tree):
        names_tree.prune(["alice"])
        root = names_tree.root

        assert isinstance(root.left, Branch)
        assert isinstance(root.right, Partial)

        inner = root.left.node
        assert isinstance(inner.left, Branch)
        assert isinstance(inner.right, Partial)

        fringe = inner.left.node
        assert isinstance(fringe.left, Leaf)
        assert fringe.left.item == "alice"
        assert isinstance(fringe.right, Partial)

    def test_keep_two_names(self, names_tree):
        names_tree.prune(["mj", "sally"])

        assert names_tree.leaves() == ["mj", "sally"]
        assert names_tree.validate_pruned().is_valid

    def test_keep_everything(self, names_tree):
        names = names_tree.leaves()

        assert names_tree.prune(names)

        assert names_tree.leaves() == names
        assert not names_tree.is_pruned
        assert names_tree.validate().is_valid

    def test_partial_digest_equals_subtree_digest(self, names_tree):
        right_digest = names_tree.root.right.node.root_digest

        names_tree.prune(["alice"])

        assert names_tree.root.right.digest == right_digest

    def test_absent_keep_between_leaves(self, names_tree):
        """
        "mje" falls between "mj" and "ronnie". Both leaves are collapsed,
        leaving a node that no longer has anything to re-derive from.
        """
        before = names_tree.root_digest

        assert names_tree.prune(["mje"]) is True

        assert names_tree.root_digest == before
        assert names_tree.leaves() == []
        result = names_tree.validate_pruned()
        assert result.is_invalid_tree

    def test_out_of_range_keeps_are_dropped(self, names_tree):
        assert names_tree.prune(["aaron", "alice", "zed"])

        assert names_tree.leaves() == ["alice"]
        assert names_tree.validate_pruned().is_valid

    def test_function_form(self, names_tree):
        assert prune(names_tree.root, ["ronnie"]) is True
        assert names_tree.leaves() == ["ronnie"]


class TestPruneNumbers:
    """Larger trees."""

    @pytest.mark.parametrize("count", [2, 3, 7, 16, 31, 64, 101])
    def test_keep_each_single_item(self, count):
        for kept in range(count):
            tree = make_numeric_tree(count)
            before = tree.root_digest

            assert tree.prune([kept])

            assert tree.root_digest == before
            assert tree.validate_pruned().is_valid
            assert tree.leaves() == [kept]
            assert tree.contains(kept)

    def test_random_subsets(self):
        rng = random.Random(1234)
        items = make_numeric_items(200, step=3)

        for _ in range(25):
            keep = sorted(rng.sample(items, rng.randint(1, 20)))
            tree = MerkleTree.construct(items)
            before = tree.root_digest

            assert tree.prune(keep)

            assert tree.root_digest == before
            assert tree.validate_pruned().is_valid
            assert tree.leaves() == keep
            for kept in keep:
                assert tree.contains(kept)

    def test_single_item_tree(self):
        tree = make_numeric_tree(1)

        assert tree.prune([0])
        assert tree.leaves() == [0]
        assert tree.validate().is_valid

    def test_numbers_as_strings(self):
        """String order, not numeric order: "101" sorts before "11"."""
        items = [str(i) for i in range(1, 200, 2)]
        tree = MerkleTree.construct(items)
        before = tree.root_digest

        assert tree.prune(["11", "101"])

        assert tree.root_digest == before
        assert tree.validate().is_invalid_tree
        assert tree.validate_pruned().is_valid
        assert tree.leaves() == ["101", "11"]

    def test_prune_is_logged(self, caplog):
        tree = make_numeric_tree(8)

        with caplog.at_level(logging.INFO, logger="mrkl.merkle.pruning"):
            tree.prune([3])

        assert "Pruned" in caplog.text
