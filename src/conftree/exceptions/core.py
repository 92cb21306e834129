"""
Exception classes for configuration parsing and querying.

This module defines specific exception types for the error conditions that can
occur while tokenizing configuration text, building the command tree and
normalizing query expressions. Every failure is fatal: no partial token stream
or tree is ever handed back to the caller.
"""

from dataclasses import dataclass
from typing import Any

EXCERPT_LENGTH = 20


@dataclass
class SourceLocation:
    """
    Location information for error messages.

    Captures where an error occurred in the source text, both as a raw
    character offset and as a human-friendly line/column pair, together with a
    short excerpt of the text starting at the offset.

    Params:
        offset: 0-based character offset into the source text
        line: 1-based line number
        column: 1-based column number
        excerpt: Short slice of the source text starting at the offset
    """

    offset: int
    line: int | None = None
    column: int | None = None
    excerpt: str | None = None

    @classmethod
    def from_text(cls, text: str, offset: int) -> "SourceLocation":
        """
        Build a location for an offset into a source text.

        Params:
            text: The full source text
            offset: Offset of the offending character

        Returns:
            SourceLocation with line, column and excerpt filled in
        """
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(
            offset=offset,
            line=text.count("\n", 0, offset) + 1,
            column=offset - line_start + 1,
            excerpt=text[offset : offset + EXCERPT_LENGTH],
        )

    def format_location(self) -> str:
        """
        Format location information for an error message.

        Returns:
            Indented, multi-line location description
        """
        lines = []

        if self.line is not None and self.column is not None:
            lines.append(
                f"  at line {self.line}, column {self.column} (offset {self.offset})"
            )
        else:
            lines.append(f"  at offset {self.offset}")

        if self.excerpt is not None:
            lines.append(f"  near: {self.excerpt!r}")

        return "\n".join(lines)


class ConfTreeError(Exception):
    """Base exception for all conftree errors."""

    pass


class LexError(ConfTreeError):
    """Base exception for tokenization failures."""

    def __init__(self, message: str, location: SourceLocation):
        """
        Initialize the exception.

        Params:
            message: Short description of the failure
            location: Where in the source text the failure happened
        """
        self.offset = location.offset
        self.location = location
        super().__init__(f"{message}\n{location.format_location()}")


class UnterminatedQuotedStringError(LexError):
    """Raised when a quoted token is never closed before the end of input."""

    def __init__(self, location: SourceLocation, quote: str = '"'):
        """
        Initialize the exception.

        Params:
            location: Location of the opening quote
            quote: The quote character that was never matched
        """
        self.quote = quote
        self.excerpt = location.excerpt
        super().__init__(
            f"Unterminated quoted string starting at {location.offset}", location
        )


class UnknownCharacterError(LexError):
    """Raised when a character matches no lexer rule."""

    def __init__(self, char: str, location: SourceLocation):
        """
        Initialize the exception.

        Params:
            char: The offending character
            location: Location of the character
        """
        self.char = char
        super().__init__(
            f"Unknown character {char!r} at {location.offset}", location
        )


class UnterminatedBannerError(LexError):
    """Raised when a banner block never reaches its closing delimiter."""

    def __init__(self, delimiter: str, location: SourceLocation):
        """
        Initialize the exception.

        Params:
            delimiter: The delimiter that was expected to close the banner
            location: Location of the banner opening
        """
        self.delimiter = delimiter
        super().__init__(
            f"Unterminated banner (delimiter {delimiter!r}) starting at "
            f"{location.offset}",
            location,
        )


class UnterminatedCertificateError(LexError):
    """Raised when a certificate block has no terminating line."""

    def __init__(self, terminator: str, location: SourceLocation):
        """
        Initialize the exception.

        Params:
            terminator: The line text that should have closed the block
            location: Location of the certificate payload start
        """
        self.terminator = terminator
        super().__init__(
            f"Unterminated certificate (missing '{terminator}' line) starting at "
            f"{location.offset}",
            location,
        )


class InvalidInputError(ConfTreeError):
    """Raised when the parser is handed something that is not text."""

    def __init__(self, source: Any):
        """
        Initialize the exception.

        Params:
            source: The rejected source value
        """
        self.source = source
        super().__init__(
            f"Provided configuration source is invalid: expected str, "
            f"got {type(source).__name__}"
        )


class InvalidQueryError(ConfTreeError):
    """Raised when a query expression cannot be normalized."""

    def __init__(self, predicate_name: str, value: Any, reason: str = "invalid condition"):
        """
        Initialize the exception.

        Params:
            predicate_name: Name of the predicate whose payload is malformed
            value: The malformed payload
            reason: Why the payload was rejected
        """
        self.predicate_name = predicate_name
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid {predicate_name} condition in query: {value!r} ({reason})"
        )


class SnapshotError(ConfTreeError):
    """Raised when a structural snapshot cannot be restored into a tree."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: Description of the validation failure
        """
        self.reason = reason
        super().__init__(f"Invalid command tree snapshot: {reason}")
