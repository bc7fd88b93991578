"""
mrkl CLI

Command-line interface for building and checking Merkle trees.

Usage:
    python -m mrkl_cli root items.txt
    python -m mrkl_cli contains items.txt alice
    python -m mrkl_cli prove items.txt alice --json
    python -m mrkl_cli prune items.txt --keep alice --keep mj
"""

__version__ = "0.1.0"
