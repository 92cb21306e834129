"""
conftree exception classes.

This package provides all exception types used throughout conftree for
consistent error handling and reporting.
"""

from conftree.exceptions.core import (
    ConfTreeError,
    InvalidInputError,
    InvalidQueryError,
    LexError,
    SnapshotError,
    SourceLocation,
    UnknownCharacterError,
    UnterminatedBannerError,
    UnterminatedCertificateError,
    UnterminatedQuotedStringError,
)

__all__ = [
    "ConfTreeError",
    "LexError",
    "SourceLocation",
    "UnterminatedQuotedStringError",
    "UnknownCharacterError",
    "UnterminatedBannerError",
    "UnterminatedCertificateError",
    "InvalidInputError",
    "InvalidQueryError",
    "SnapshotError",
]
