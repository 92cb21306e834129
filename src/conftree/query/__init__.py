"""
Query engine for command trees.

This package provides the predicate catalog, the normalization of loose query
expressions into predicates, and the ``find``/``find_all`` operations shared
by documents and commands.
"""

from conftree.query.normalize import QueryExpression, normalize_query
from conftree.query.predicates import (
    AllOf,
    AnyChild,
    AnyOf,
    Contains,
    Depth,
    EndsWith,
    Line,
    Name,
    NoChild,
    NoneOf,
    NotAll,
    Parent,
    Predicate,
    Procedure,
    StartsWith,
    matches_value,
)
from conftree.query.queryable import Queryable

__all__ = [
    "Queryable",
    "QueryExpression",
    "normalize_query",
    "matches_value",
    "Predicate",
    "Name",
    "StartsWith",
    "Contains",
    "EndsWith",
    "Line",
    "Procedure",
    "Parent",
    "AnyOf",
    "AllOf",
    "NotAll",
    "NoneOf",
    "AnyChild",
    "NoChild",
    "Depth",
]
