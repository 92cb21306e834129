"""
Core conftree components.

This package provides the command tree data model, its structural snapshot
models and shared type definitions.
"""

from conftree.core.snapshot import CommandModel, DocumentModel
from conftree.core.tree import Command, Document
from conftree.core.types import ArgValue, SnapshotDict

__all__ = [
    "Command",
    "Document",
    "CommandModel",
    "DocumentModel",
    "ArgValue",
    "SnapshotDict",
]
