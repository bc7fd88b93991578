"""
Test fixtures package for mrkl tests.

This package provides factory functions for creating test trees.

Usage:
    from tests.fixtures import make_names_tree, make_numeric_items

    def test_something():
        tree = make_names_tree()
        items = make_numeric_items(17)
"""

from .common import (
    NAMES,
    make_names_tree,
    make_numeric_items,
    make_numeric_tree,
    walk_to_leaf_parent,
    write_items_file,
)

__all__ = [
    "NAMES",
    "make_names_tree",
    "make_numeric_items",
    "make_numeric_tree",
    "walk_to_leaf_parent",
    "write_items_file",
]
