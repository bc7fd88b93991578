"""
CLI command modules.
"""

from mrkl_cli.commands import inspect, prove, prune

__all__ = ["inspect", "prove", "prune"]
