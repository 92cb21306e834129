"""
conftree - Parse network device configuration dumps into a queryable tree

conftree turns indentation-structured configuration text into a tree of
commands and provides a declarative query language to search it.
"""

from collections.abc import Mapping
from importlib.metadata import version
from typing import Any

from conftree.core.tree import Command, Document
from conftree.parsing import Lexer, LexerConfig, Parser, Token, TokenKind, parse, tokenize

__version__ = version("conftree")


def from_dict(data: Mapping[str, Any]) -> Document:
    """Restore a document from its structural snapshot."""
    return Document.from_dict(data)


def from_json(text: str | bytes) -> Document:
    """Restore a document from a JSON snapshot."""
    return Document.from_json(text)


__all__ = [
    "__version__",
    "Command",
    "Document",
    "Lexer",
    "LexerConfig",
    "Parser",
    "Token",
    "TokenKind",
    "parse",
    "tokenize",
    "from_dict",
    "from_json",
]
