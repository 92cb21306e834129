"""
Parser building command trees from configuration text.

This module consumes the lexer's token stream in a single left-to-right pass.
INDENT and DEDENT tokens are the only nesting signal: a line followed by INDENT
owns every line up to the matching DEDENT as its sub-commands.
"""

import logging
from collections import deque
from collections.abc import Iterable
from typing import Any

from conftree.core.tree import Command, Document
from conftree.core.types import ArgValue
from conftree.exceptions import InvalidInputError
from conftree.parsing.lexer import Lexer
from conftree.parsing.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class Parser:
    """Parser for indentation-structured configuration text."""

    def __init__(self, lexer: Lexer | None = None):
        self.lexer = lexer or Lexer()

    def parse(self, source: Any) -> Document:
        """
        Parse configuration text into a document.

        Params:
            source: Complete configuration text

        Returns:
            Document owning the parsed command tree

        Raises:
            InvalidInputError: If source is not a string
            LexError: If the text cannot be tokenized
        """
        if not isinstance(source, str):
            raise InvalidInputError(source)
        return self.parse_tokens(self.lexer.tokenize(source), source)

    def parse_tokens(self, tokens: Iterable[Token], source: str | None = None) -> Document:
        """
        Build a document from an already lexed token stream.

        Params:
            tokens: Tokens as produced by ``Lexer.tokenize``
            source: The text the tokens were lexed from, kept on the document

        Returns:
            Document owning the parsed command tree
        """
        stream = deque(tokens)
        document = Document(source=source)
        while stream:
            document.commands.extend(self._section(stream, None, 0))
        logger.debug("Parsed %d top-level commands", len(document.commands))
        return document

    def _section(
        self, stream: deque[Token], parent: Command | None, indent: int
    ) -> list[Command]:
        commands = []
        while stream and stream[0].kind is not TokenKind.DEDENT:
            command = self._command(stream, parent, indent)
            if command is not None:
                commands.append(command)
        if stream:
            stream.popleft()  # DEDENT
        return commands

    def _command(
        self, stream: deque[Token], parent: Command | None, indent: int
    ) -> Command | None:
        pos = stream[0].offset
        args = self._arguments(stream)
        if not args:
            return None

        command = Command(args=args, parent=parent, pos=pos, indent=indent)
        if stream and stream[0].kind is TokenKind.INDENT:
            stream.popleft()
            command.commands = self._section(stream, command, indent + 1)
        return command

    @staticmethod
    def _arguments(stream: deque[Token]) -> list[ArgValue]:
        args = []
        while stream and stream[0].kind is not TokenKind.EOL:
            token = stream.popleft()
            if not token.is_structural:
                args.append(token.value)
        if stream:
            stream.popleft()  # EOL
        return args


def parse(source: Any, lexer: Lexer | None = None) -> Document:
    """
    Parse configuration text with a fresh parser.

    Params:
        source: Complete configuration text
        lexer: Optional lexer, e.g. one built with a custom ``LexerConfig``

    Returns:
        Document owning the parsed command tree
    """
    return Parser(lexer).parse(source)
