"""
Token definitions produced by the configuration lexer.
"""

from enum import Enum

from attrs import frozen

from conftree.core.types import ArgValue


class TokenKind(Enum):
    """Kind of a lexed token."""

    WORD = "word"
    STRING = "string"  # quoted strings and raw banner/certificate payloads
    INTEGER = "integer"
    DECIMAL = "decimal"
    EOL = "EOL"
    INDENT = "INDENT"
    DEDENT = "DEDENT"
    BANNER_BEGIN = "BANNER_BEGIN"
    BANNER_END = "BANNER_END"
    CERTIFICATE_BEGIN = "CERTIFICATE_BEGIN"
    CERTIFICATE_END = "CERTIFICATE_END"


CONTENT_KINDS = frozenset(
    {TokenKind.WORD, TokenKind.STRING, TokenKind.INTEGER, TokenKind.DECIMAL}
)

# Markers the parser strips from a command's arguments
STRUCTURAL_KINDS = frozenset(
    {
        TokenKind.INDENT,
        TokenKind.DEDENT,
        TokenKind.BANNER_BEGIN,
        TokenKind.BANNER_END,
        TokenKind.CERTIFICATE_BEGIN,
        TokenKind.CERTIFICATE_END,
    }
)

# A line that ends right after one of these produced no content of its own
LINE_BOUNDARY_KINDS = frozenset({TokenKind.EOL, TokenKind.INDENT, TokenKind.DEDENT})


@frozen
class Token:
    """A single lexed token with its source position.

    Params:
        kind: Token kind
        value: Text for words and strings, int/float for numbers, None for markers
        offset: 0-based character offset of the token's first character
        line: 1-based line number
        column: 1-based column number
    """

    kind: TokenKind
    value: ArgValue | None
    offset: int
    line: int
    column: int

    @property
    def is_content(self) -> bool:
        """Check if this token carries a command argument."""
        return self.kind in CONTENT_KINDS

    @property
    def is_structural(self) -> bool:
        """Check if this token is a nesting or block marker."""
        return self.kind in STRUCTURAL_KINDS

    def is_word(self, text: str) -> bool:
        """Check if this token is the plain word ``text``."""
        return self.kind is TokenKind.WORD and self.value == text

    def __str__(self) -> str:
        if self.is_content:
            return str(self.value)
        return self.kind.value
