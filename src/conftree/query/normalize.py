"""
Normalization of raw query expressions into predicates.

Queries are accepted in several loose shapes: a string or list of tokens, a
compiled regular expression, a callable, or a mapping of predicate names to
their conditions, freely nested. ``normalize_query`` converts any of them into
the closed predicate form from ``conftree.query.predicates`` and rejects
malformed payloads before a single command is visited.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from conftree.exceptions import InvalidQueryError
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
    ValueMatcher,
)

QueryExpression = (
    str | list | tuple | re.Pattern | Callable[..., object] | Mapping[str, Any] | Predicate
)


def normalize_query(raw: QueryExpression) -> Predicate:
    """
    Convert a raw query expression into a predicate.

    Params:
        raw: String, token list, pattern, callable, mapping or predicate

    Returns:
        The equivalent predicate

    Raises:
        InvalidQueryError: If the expression or any nested condition is malformed
    """
    if isinstance(raw, Predicate):
        return raw
    if isinstance(raw, Mapping):
        return _read_mapping(raw)
    if isinstance(raw, re.Pattern):
        return Line(raw)
    if isinstance(raw, (str, list, tuple)):
        return StartsWith(_read_tokens("starts_with", raw))
    if callable(raw):
        return Procedure(raw)
    raise InvalidQueryError("query", raw, "unsupported expression type")


def _read_mapping(raw: Mapping[str, Any]) -> Predicate:
    predicates = []
    for key, value in raw.items():
        reader = PREDICATE_READERS.get(key)
        if reader is None:
            raise InvalidQueryError(str(key), value, "unknown predicate")
        if value is None:
            raise InvalidQueryError(key, value, "missing condition")
        predicates.append(reader(value))

    if len(predicates) == 1:
        return predicates[0]
    # an empty mapping is an empty conjunction and matches every command
    return AllOf(tuple(predicates))


def _read_tokens(name: str, value: Any) -> tuple[ValueMatcher, ...]:
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, (list, tuple)):
        return tuple(value)
    raise InvalidQueryError(name, value, "expected a string or a list of tokens")


def _read_expressions(name: str, value: Any) -> tuple[Predicate, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(normalize_query(expression) for expression in value)
    raise InvalidQueryError(name, value, "expected a list of query expressions")


def _read_name(value: Any) -> Predicate:
    if isinstance(value, bool) or not isinstance(value, (str, int, float, re.Pattern)):
        raise InvalidQueryError("name", value, "expected a string, number or pattern")
    return Name(value)


def _read_line(value: Any) -> Predicate:
    if isinstance(value, (str, re.Pattern)):
        return Line(value)
    if isinstance(value, (list, tuple)):
        return Line(" ".join(str(token) for token in value))
    raise InvalidQueryError("line", value, "expected a string, list or pattern")


def _read_procedure(value: Any) -> Predicate:
    if not callable(value):
        raise InvalidQueryError("procedure", value, "expected a callable")
    return Procedure(value)


def _read_all(value: Any) -> Predicate:
    if isinstance(value, Mapping):
        return AllOf((normalize_query(value),))
    return AllOf(_read_expressions("all", value))


def _read_not_all(value: Any) -> Predicate:
    if isinstance(value, Mapping):
        return NotAll((normalize_query(value),))
    return NotAll(_read_expressions("not_all", value))


def _read_depth(value: Any) -> Predicate:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidQueryError("depth", value, "expected a non-negative integer")
    return Depth(value)


PREDICATE_READERS: dict[str, Callable[[Any], Predicate]] = {
    "name": _read_name,
    "starts_with": lambda value: StartsWith(_read_tokens("starts_with", value)),
    "contains": lambda value: Contains(_read_tokens("contains", value)),
    "ends_with": lambda value: EndsWith(_read_tokens("ends_with", value)),
    "line": _read_line,
    "procedure": _read_procedure,
    "parent": lambda value: Parent(normalize_query(value)),
    "any": lambda value: AnyOf(_read_expressions("any", value)),
    "all": _read_all,
    "not_all": _read_not_all,
    "none": lambda value: NoneOf(_read_expressions("none", value)),
    "any_child": lambda value: AnyChild(normalize_query(value)),
    "no_child": lambda value: NoChild(normalize_query(value)),
    "depth": _read_depth,
}
