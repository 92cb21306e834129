"""
Lexer for indentation-structured configuration dumps.

This module turns a complete configuration text into a flat token stream.
Nesting is expressed through INDENT/DEDENT tokens derived from the raw width of
each line's leading whitespace, lines end with EOL, and two raw-capture modes
swallow banner texts and certificate payloads verbatim so that their contents
never reach normal word tokenization.

The scan loop is driven by an explicit ``LexState`` value: each ``LexMode`` has
one handler which consumes input from the current position and selects the
next mode. The ``Lexer`` itself only holds configuration, so one instance can
tokenize any number of texts, including concurrently.
"""

import logging
import re
from bisect import bisect_left
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from conftree.core.types import ArgValue
from conftree.exceptions import (
    SourceLocation,
    UnknownCharacterError,
    UnterminatedBannerError,
    UnterminatedCertificateError,
    UnterminatedQuotedStringError,
)
from conftree.parsing.config import LexerConfig
from conftree.parsing.tokens import LINE_BOUNDARY_KINDS, Token, TokenKind

logger = logging.getLogger(__name__)

# Characters that separate tokens and make up indentation (no tab expansion)
WHITESPACE = " \t\r"

INTEGER_PATTERN = re.compile(r"[1-9][0-9]*")
DECIMAL_PATTERN = re.compile(r"[1-9][0-9]*\.[0-9]+")


class LexMode(Enum):
    """Scanning mode of the lexer state machine."""

    LINE_START = "line_start"
    IN_LINE = "in_line"
    WORD = "word"
    QUOTED_STRING = "quoted_string"
    COMMENT = "comment"
    BANNER = "banner"
    CERTIFICATE = "certificate"


@dataclass
class LexState:
    """
    Mutable scan state for a single tokenization run.

    Params:
        text: The text being tokenized
        pos: Offset of the next character to consume
        mode: Current scanning mode
        indents: Stack of open indentation widths, base level first
        tokens: Tokens emitted so far
        banner_delimiter: Closing delimiter of the banner being captured
        block_start: Offset where the current raw-capture block started
        trailing_start: Start of the current run of blank and comment lines
    """

    text: str
    pos: int = 0
    mode: LexMode = LexMode.LINE_START
    indents: list[int] = field(default_factory=lambda: [0])
    tokens: list[Token] = field(default_factory=list)
    banner_delimiter: str | None = None
    block_start: int = 0
    trailing_start: int | None = None
    newlines: list[int] = field(init=False, repr=False)

    def __post_init__(self):
        self.newlines = [match.start() for match in re.finditer("\n", self.text)]

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def char(self) -> str:
        return self.text[self.pos]

    def location(self, offset: int) -> SourceLocation:
        return SourceLocation.from_text(self.text, offset)

    def emit(
        self, kind: TokenKind, value: ArgValue | None = None, offset: int | None = None
    ) -> Token:
        """
        Append a token, deriving its line and column from the offset.

        Params:
            kind: Kind of the token
            value: Payload for content tokens
            offset: Token offset, defaults to the current position

        Returns:
            The emitted token
        """
        if offset is None:
            offset = self.pos
        line_index = bisect_left(self.newlines, offset)
        line_start = self.newlines[line_index - 1] + 1 if line_index else 0
        token = Token(kind, value, offset, line_index + 1, offset - line_start + 1)
        self.tokens.append(token)
        return token


def is_word_char(char: str) -> bool:
    """Check if a character can be part of a plain word."""
    return char.isprintable() and not char.isspace()


def classify_word(word: str) -> tuple[TokenKind, ArgValue]:
    """
    Classify a maximal non-blank run as integer, decimal or plain word.

    Numbers never carry a leading zero; anything number-like that does not fit
    the integer or single-dot decimal shape keeps its text unchanged.

    Params:
        word: The raw text of the token

    Returns:
        Token kind and converted value
    """
    if INTEGER_PATTERN.fullmatch(word):
        return TokenKind.INTEGER, int(word)
    if DECIMAL_PATTERN.fullmatch(word):
        return TokenKind.DECIMAL, float(word)
    return TokenKind.WORD, word


class Lexer:
    """Tokenizer for configuration dumps."""

    def __init__(self, config: LexerConfig | None = None):
        self.config = config or LexerConfig()
        self._handlers: dict[LexMode, Callable[[LexState], None]] = {
            LexMode.LINE_START: self._line_start,
            LexMode.IN_LINE: self._in_line,
            LexMode.WORD: self._word,
            LexMode.QUOTED_STRING: self._quoted_string,
            LexMode.COMMENT: self._comment,
            LexMode.BANNER: self._banner,
            LexMode.CERTIFICATE: self._certificate,
        }

    def tokenize(self, text: str) -> list[Token]:
        """
        Convert a configuration text into tokens.

        Params:
            text: Complete configuration text

        Returns:
            Ordered list of tokens

        Raises:
            LexError: If the text cannot be tokenized; no tokens are returned
        """
        state = LexState(text)
        while not state.at_end:
            self._handlers[state.mode](state)
        tokens = self._finalize(state)
        logger.debug("Tokenized %d characters into %d tokens", len(text), len(tokens))
        return tokens

    # Mode handlers

    def _line_start(self, state: LexState) -> None:
        text = state.text
        start = end = state.pos
        while end < len(text) and text[end] in WHITESPACE:
            end += 1
        state.pos = end
        if state.trailing_start is None:
            state.trailing_start = start

        if state.at_end:
            return
        if state.char == "\n":
            # blank line
            state.pos += 1
            return
        if state.char in self.config.comment_chars:
            state.mode = LexMode.COMMENT
            return

        state.trailing_start = None
        self._update_indentation(state, end - start)
        state.mode = LexMode.IN_LINE

    def _in_line(self, state: LexState) -> None:
        char = state.char

        if char in WHITESPACE:
            state.pos += 1
        elif self._banner_begins(state.tokens):
            self._begin_banner(state)
        elif self._certificate_begins(state.tokens):
            self._begin_certificate(state)
        elif char == "\n":
            self._end_line(state)
            state.pos += 1
            state.mode = LexMode.LINE_START
        elif char in self.config.inline_comment_chars:
            state.mode = LexMode.COMMENT
        elif char in self.config.quote_chars:
            state.mode = LexMode.QUOTED_STRING
        elif is_word_char(char):
            state.mode = LexMode.WORD
        else:
            raise UnknownCharacterError(char, state.location(state.pos))

    def _word(self, state: LexState) -> None:
        text = state.text
        start = end = state.pos
        while end < len(text) and is_word_char(text[end]):
            end += 1
        kind, value = classify_word(text[start:end])
        state.emit(kind, value, offset=start)
        state.pos = end
        state.mode = LexMode.IN_LINE

    def _quoted_string(self, state: LexState) -> None:
        start = state.pos
        quote = state.char
        end = state.text.find(quote, start + 1)
        if end == -1:
            raise UnterminatedQuotedStringError(state.location(start), quote)
        state.emit(TokenKind.STRING, state.text[start : end + 1], offset=start)
        state.pos = end + 1
        state.mode = LexMode.IN_LINE

    def _comment(self, state: LexState) -> None:
        self._end_line(state)
        newline = state.text.find("\n", state.pos)
        state.pos = len(state.text) if newline == -1 else newline + 1
        state.mode = LexMode.LINE_START

    def _banner(self, state: LexState) -> None:
        text = state.text
        delimiter = state.banner_delimiter
        start = state.pos

        if len(delimiter) == 1:
            end = self._find_banner_char(text, start, delimiter)
        else:
            end = self._find_banner_word(text, start, delimiter)
        if end == -1:
            raise UnterminatedBannerError(delimiter, state.location(state.block_start))

        state.emit(TokenKind.STRING, text[start:end], offset=start)
        state.emit(TokenKind.BANNER_END, offset=end)
        logger.debug("Captured banner of %d characters at %d", end - start, start)
        state.pos = end + len(delimiter)
        state.mode = LexMode.IN_LINE

    def _certificate(self, state: LexState) -> None:
        text = state.text
        terminator = self.config.certificate_terminator
        start = line_start = state.pos

        while True:
            newline = text.find("\n", line_start)
            line_end = len(text) if newline == -1 else newline
            if text[line_start:line_end].strip() == terminator:
                break
            if newline == -1:
                raise UnterminatedCertificateError(
                    terminator, state.location(state.block_start)
                )
            line_start = newline + 1

        resume = len(text) if newline == -1 else newline + 1
        state.emit(TokenKind.STRING, " ".join(text[start:line_start].split()), offset=start)
        state.emit(TokenKind.CERTIFICATE_END, offset=resume)
        state.emit(TokenKind.EOL, offset=resume)
        logger.debug("Captured certificate payload at %d", start)
        state.pos = resume
        state.mode = LexMode.LINE_START

    # Transitions

    def _update_indentation(self, state: LexState, width: int) -> None:
        indents = state.indents
        while len(indents) > 1 and width <= indents[-2]:
            indents.pop()
            state.emit(TokenKind.DEDENT)
        if width > indents[-1]:
            indents.append(width)
            state.emit(TokenKind.INDENT)

    def _end_line(self, state: LexState) -> None:
        if state.tokens and state.tokens[-1].kind not in LINE_BOUNDARY_KINDS:
            state.emit(TokenKind.EOL)

    def _banner_begins(self, tokens: list[Token]) -> bool:
        if len(tokens) < 2:
            return False
        previous, last = tokens[-2], tokens[-1]
        if not (previous.is_content and last.is_content):
            return False
        keyword = self.config.banner_keyword
        if previous.is_word(keyword):
            return True
        return (
            last.is_word(keyword)
            and previous.kind is TokenKind.WORD
            and previous.value in self.config.banner_qualifiers
        )

    def _begin_banner(self, state: LexState) -> None:
        trigger = state.pos
        state.emit(TokenKind.BANNER_BEGIN, offset=trigger)
        state.block_start = trigger

        if state.char == "\n":
            state.banner_delimiter = self.config.banner_eof_delimiter
            state.pos = trigger + 1
        else:
            # the character after the delimiter (C of ^C, or a newline) goes with it
            state.banner_delimiter = state.char
            state.pos = min(trigger + 2, len(state.text))
        state.mode = LexMode.BANNER

    @staticmethod
    def _find_banner_char(text: str, start: int, delimiter: str) -> int:
        index = text.find(delimiter, start)
        while index != -1:
            at_line_start = text[index - 1] == "\n"
            at_line_end = index + 1 == len(text) or text[index + 1] == "\n"
            if at_line_start or at_line_end:
                return index
            index = text.find(delimiter, index + 1)
        return -1

    @staticmethod
    def _find_banner_word(text: str, start: int, delimiter: str) -> int:
        index = text.find(delimiter, start)
        while index != -1:
            after = index + len(delimiter)
            if after == len(text) or text[after] == "\n":
                return index
            index = text.find(delimiter, index + 1)
        return -1

    def _certificate_begins(self, tokens: list[Token]) -> bool:
        if len(tokens) < 6:
            return False
        tail = tokens[-6:]
        return (
            tail[0].kind is TokenKind.INDENT
            and tail[1].is_word(self.config.certificate_keyword)
            and tail[4].kind is TokenKind.EOL
            and tail[5].kind is TokenKind.INDENT
        )

    def _begin_certificate(self, state: LexState) -> None:
        # The payload block is not a nested section: fold EOL + INDENT into the marker
        begin = state.tokens[-1].offset
        del state.tokens[-2:]
        state.indents.pop()
        state.emit(TokenKind.CERTIFICATE_BEGIN, offset=begin)
        state.block_start = state.pos
        state.mode = LexMode.CERTIFICATE

    # End of input

    def _finalize(self, state: LexState) -> list[Token]:
        if state.mode is LexMode.BANNER:
            raise UnterminatedBannerError(
                state.banner_delimiter, state.location(state.block_start)
            )

        # closing DEDENTs sit before any trailing blank and comment lines
        end = len(state.text) if state.trailing_start is None else state.trailing_start
        while len(state.indents) > 1:
            state.indents.pop()
            state.emit(TokenKind.DEDENT, offset=end)

        if self.config.scrub_banner_residue:
            return self._scrub_banner_residue(state.tokens)
        return state.tokens

    @staticmethod
    def _scrub_banner_residue(tokens: list[Token]) -> list[Token]:
        scrubbed: list[Token] = []
        for token in tokens:
            if (
                scrubbed
                and scrubbed[-1].kind is TokenKind.BANNER_END
                and token.kind is TokenKind.WORD
                and token.offset == scrubbed[-1].offset + 1
            ):
                logger.debug("Dropped banner residue %r at %d", token.value, token.offset)
                continue
            scrubbed.append(token)
        return scrubbed


def tokenize(text: str, config: LexerConfig | None = None) -> list[Token]:
    """
    Tokenize a configuration text with a fresh lexer.

    Params:
        text: Complete configuration text
        config: Optional lexer configuration

    Returns:
        Ordered list of tokens
    """
    return Lexer(config).tokenize(text)
