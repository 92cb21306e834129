"""
Lexing and parsing of configuration text.

This package provides the tokenizer, its configuration, and the parser that
turns the token stream into a command tree.
"""

from conftree.parsing.config import LexerConfig
from conftree.parsing.lexer import Lexer, LexMode, LexState, tokenize
from conftree.parsing.parser import Parser, parse
from conftree.parsing.tokens import Token, TokenKind

__all__ = [
    "LexerConfig",
    "Lexer",
    "LexMode",
    "LexState",
    "Parser",
    "Token",
    "TokenKind",
    "parse",
    "tokenize",
]
