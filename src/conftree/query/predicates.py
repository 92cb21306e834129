"""
Predicate catalog for command tree queries.

Every query is normalized into a tree of the predicates defined here before
any traversal happens. Each predicate is an immutable value with a typed
payload and decides on its own whether a candidate command matches.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conftree.core.tree import Command

# A single element of a token sequence or a name condition
ValueMatcher = str | int | float | re.Pattern | type


def matches_value(expected: ValueMatcher, actual: object) -> bool:
    """
    Match one query element against one command argument.

    Strings compare against the stringified argument, patterns search the
    stringified argument, types check the argument's type and anything else
    compares by equality.

    Params:
        expected: Query element
        actual: Command argument (None when the command has no such argument)

    Returns:
        True if the argument satisfies the element
    """
    if actual is None:
        return False
    if isinstance(expected, str):
        return expected == str(actual)
    if isinstance(expected, re.Pattern):
        return expected.search(str(actual)) is not None
    if isinstance(expected, type):
        return isinstance(actual, expected)
    return expected == actual


def matches_sequence(expected: tuple[ValueMatcher, ...], actual: list) -> bool:
    """Match query elements pairwise against an equally long argument run."""
    return len(expected) == len(actual) and all(
        matches_value(element, arg) for element, arg in zip(expected, actual)
    )


class Predicate(ABC):
    """Base class for all query predicates."""

    @abstractmethod
    def matches(self, command: "Command") -> bool:
        """Check whether a candidate command satisfies this predicate."""


@dataclass(frozen=True)
class Name(Predicate):
    """The command keyword (first argument) matches the value."""

    value: ValueMatcher

    def matches(self, command: "Command") -> bool:
        return matches_value(self.value, command.name)


@dataclass(frozen=True)
class StartsWith(Predicate):
    """The leading arguments match the tokens position by position."""

    tokens: tuple[ValueMatcher, ...]

    def matches(self, command: "Command") -> bool:
        return matches_sequence(self.tokens, command.args[: len(self.tokens)])


@dataclass(frozen=True)
class Contains(Predicate):
    """The tokens match a contiguous run of arguments at any offset."""

    tokens: tuple[ValueMatcher, ...]

    def matches(self, command: "Command") -> bool:
        args = command.args
        width = len(self.tokens)
        return any(
            matches_sequence(self.tokens, args[offset : offset + width])
            for offset in range(len(args) - width + 1)
        )


@dataclass(frozen=True)
class EndsWith(Predicate):
    """The trailing arguments match the tokens, right-aligned."""

    tokens: tuple[ValueMatcher, ...]

    def matches(self, command: "Command") -> bool:
        args = command.args
        if len(self.tokens) > len(args):
            return False
        return matches_sequence(self.tokens, args[len(args) - len(self.tokens) :])


@dataclass(frozen=True)
class Line(Predicate):
    """The canonical line equals the string or is searched by the pattern."""

    pattern: str | re.Pattern

    def matches(self, command: "Command") -> bool:
        return matches_value(self.pattern, command.line())


@dataclass(frozen=True)
class Procedure(Predicate):
    """An arbitrary boolean function of the command."""

    function: Callable[["Command"], object]

    def matches(self, command: "Command") -> bool:
        return bool(self.function(command))


@dataclass(frozen=True)
class Parent(Predicate):
    """The command has a parent and the parent matches."""

    predicate: Predicate

    def matches(self, command: "Command") -> bool:
        return command.parent is not None and self.predicate.matches(command.parent)


@dataclass(frozen=True)
class AnyOf(Predicate):
    """At least one sub-predicate matches."""

    predicates: tuple[Predicate, ...]

    def matches(self, command: "Command") -> bool:
        return any(predicate.matches(command) for predicate in self.predicates)


@dataclass(frozen=True)
class AllOf(Predicate):
    """Every sub-predicate matches."""

    predicates: tuple[Predicate, ...]

    def matches(self, command: "Command") -> bool:
        return all(predicate.matches(command) for predicate in self.predicates)


@dataclass(frozen=True)
class NotAll(Predicate):
    """At least one sub-predicate does not match."""

    predicates: tuple[Predicate, ...]

    def matches(self, command: "Command") -> bool:
        return not all(predicate.matches(command) for predicate in self.predicates)


@dataclass(frozen=True)
class NoneOf(Predicate):
    """No sub-predicate matches."""

    predicates: tuple[Predicate, ...]

    def matches(self, command: "Command") -> bool:
        return not any(predicate.matches(command) for predicate in self.predicates)


@dataclass(frozen=True)
class AnyChild(Predicate):
    """Some command nested anywhere below the candidate matches."""

    predicate: Predicate

    def matches(self, command: "Command") -> bool:
        return command.find(self.predicate) is not None


@dataclass(frozen=True)
class NoChild(Predicate):
    """No command nested anywhere below the candidate matches."""

    predicate: Predicate

    def matches(self, command: "Command") -> bool:
        return command.find(self.predicate) is None


@dataclass(frozen=True)
class Depth(Predicate):
    """The candidate sits exactly ``levels`` parent links below its top-level ancestor."""

    levels: int

    def matches(self, command: "Command") -> bool:
        level = 0
        node = command
        while node.parent is not None:
            node = node.parent
            level += 1
            if level > self.levels:
                return False
        return level == self.levels
