"""
Search operations shared by documents and commands.
"""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from conftree.query.normalize import QueryExpression, normalize_query

if TYPE_CHECKING:
    from conftree.core.tree import Command

Visitor = Callable[["Command"], object]


class Queryable:
    """
    Mixin providing ``find`` and ``find_all`` over a command subtree.

    The candidates are every command nested below the receiver, visited
    depth-first in source order; the receiver itself is never a candidate.
    """

    commands: list["Command"]

    def descendants(self) -> Iterator["Command"]:
        """Traverse all nested commands depth-first in source order."""
        for command in self.commands:
            yield from command.each()

    def find_all(
        self, expr: QueryExpression, visit: Visitor | None = None
    ) -> list["Command"]:
        """
        Find every nested command matching a query.

        Params:
            expr: Query expression (see ``normalize_query``)
            visit: Optional callback invoked on each match, in order

        Returns:
            All matching commands in depth-first order, possibly empty

        Raises:
            InvalidQueryError: If the query is malformed
        """
        predicate = normalize_query(expr)
        matches = []
        for command in self.descendants():
            if predicate.matches(command):
                matches.append(command)
                if visit is not None:
                    visit(command)
        return matches

    def find(
        self, expr: QueryExpression, visit: Visitor | None = None
    ) -> "Command | None":
        """
        Find the first nested command matching a query.

        Traversal stops at the first match, so the query is never evaluated on
        the commands after it.

        Params:
            expr: Query expression (see ``normalize_query``)
            visit: Optional callback invoked once on the match

        Returns:
            The first matching command, or None

        Raises:
            InvalidQueryError: If the query is malformed
        """
        predicate = normalize_query(expr)
        for command in self.descendants():
            if predicate.matches(command):
                if visit is not None:
                    visit(command)
                return command
        return None
