"""Helpers for command argument strings."""

from typing import List


def parse_arguments(args: str) -> List[str]:
    """Split an argument string on runs of whitespace.

    ``"  a  b "`` becomes ``["a", "b"]``; blank input gives ``[]``.
    """
    return args.split()
