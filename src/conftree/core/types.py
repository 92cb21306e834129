"""
Core type definitions for conftree.

This module contains fundamental type aliases used throughout the lexer,
parser, tree and query engine for type safety and consistency.
"""

from typing import Any

# A single command argument: word, quoted string, integer or decimal
ArgValue = str | int | float

SnapshotDict = dict[str, Any]
