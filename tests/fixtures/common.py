"""
Common test fixtures shared by all test modules.

Provides factory functions for:
- The five-name tree used throughout the examples
- Integer item sets of arbitrary size
- Items files for the CLI
"""

from pathlib import Path
from typing import Any, Optional

from mrkl.config.runtime import TreeConfig
from mrkl.merkle import Branch, MerkleNode, MerkleTree


# Sorted: alice, john john, mj, ronnie, sally
NAMES = ["sally", "alice", "ronnie", "mj", "john john"]


def make_names_tree(config: Optional[TreeConfig] = None) -> MerkleTree:
    """
    Build the five-name tree.

    Shape (heights in brackets):

        root [2]
        ├── [1]
        │   ├── [0] alice, john john
        │   └── [0] mj, ronnie
        └── [1]
            └── [0] sally
    """
    return MerkleTree.construct(NAMES, config=config or TreeConfig())


def make_numeric_items(count: int, step: int = 1, start: int = 0) -> list[int]:
    """Create ``count`` integers starting at ``start``."""
    return [start + i * step for i in range(count)]


def make_numeric_tree(
    count: int,
    step: int = 1,
    config: Optional[TreeConfig] = None,
) -> MerkleTree:
    """Build a tree over ``count`` integers."""
    return MerkleTree.construct(
        make_numeric_items(count, step=step),
        config=config or TreeConfig(),
    )


def walk_to_leaf_parent(node: MerkleNode, item: Any) -> MerkleNode:
    """Follow bounds down to the fringe node whose leaves could hold ``item``."""
    current = node
    while True:
        branch = current.left if item <= current.left_bound else current.right
        if not isinstance(branch, Branch):
            return current
        current = branch.node


def write_items_file(directory: Path, items: list[str], name: str = "items.txt") -> Path:
    """Write one item per line and return the file path."""
    path = directory / name
    path.write_text("\n".join(items) + "\n", encoding="utf-8")
    return path
