"""
Command tree data model.

A parsed configuration is a ``Document`` owning an ordered list of top-level
``Command`` nodes; each command owns its nested sub-commands. The ``parent``
link of a command is a lookup-only back-reference: it is never compared,
hashed, printed or exported, and it is rebuilt top-down whenever a tree is
restored from a snapshot.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import ValidationError

from conftree.core.snapshot import CommandModel, DocumentModel
from conftree.core.types import ArgValue, SnapshotDict
from conftree.exceptions import SnapshotError
from conftree.query.queryable import Queryable


@dataclass(eq=False)
class Command(Queryable):
    """
    One parsed configuration line and its nested sub-commands.

    Params:
        args: Arguments of the line; words and quoted strings as text,
            numbers as int/float
        commands: Child commands in source order
        parent: Enclosing command, None for top-level commands
        pos: Offset of the line's first token in the source text
        indent: Nesting level, 0 for top-level commands
    """

    args: list[ArgValue]
    commands: list["Command"] = field(default_factory=list)
    parent: Optional["Command"] = field(default=None, repr=False)
    pos: int | None = None
    indent: int = 0

    @property
    def name(self) -> ArgValue:
        """The first argument (the command keyword)."""
        return self.args[0]

    @property
    def depth(self) -> int:
        """Depth in the tree; top-level commands are 1, the document is 0."""
        return self.indent + 1

    def line(self) -> str:
        """Canonical single-line text of this command."""
        return " ".join(str(arg) for arg in self.args)

    def path(self) -> list[str]:
        """Lines of all ancestors, outermost first."""
        lines = []
        node = self.parent
        while node is not None:
            lines.append(node.line())
            node = node.parent
        lines.reverse()
        return lines

    def depth_from_root(self) -> int:
        """Number of parent links up to the top-level ancestor."""
        level = 0
        node = self
        while node.parent is not None:
            node = node.parent
            level += 1
        return level

    def each(self) -> Iterator["Command"]:
        """Traverse the subtree depth-first, yielding self then descendants."""
        yield self
        for command in self.commands:
            yield from command.each()

    def __iter__(self) -> Iterator["Command"]:
        return self.each()

    def to_s(self, base_depth: int = 0, *, dedent: bool = False) -> str:
        """
        Reconstruct the text of this command and its whole subtree.

        Params:
            base_depth: Nesting level rendered without indentation
            dedent: Render this command itself without indentation
                (overrides base_depth)

        Returns:
            Newline-terminated lines, one space of indentation per level
        """
        base = self.indent if dedent else base_depth
        return "".join(
            f"{' ' * (command.indent - base)}{command.line()}\n" for command in self
        )

    def __str__(self) -> str:
        return self.to_s()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return self.args == other.args and self.commands == other.commands

    def __hash__(self) -> int:
        return hash((tuple(self.args), tuple(self.commands)))

    def to_dict(self) -> SnapshotDict:
        """Export the structural snapshot of this subtree."""
        return {
            "args": list(self.args),
            "commands": [command.to_dict() for command in self.commands],
            "pos": self.pos,
            "indent": self.indent,
        }

    def to_json(self) -> str:
        """Export the structural snapshot of this subtree as JSON."""
        return CommandModel.model_validate(self.to_dict()).model_dump_json()

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], parent: Optional["Command"] = None
    ) -> "Command":
        """
        Restore a subtree from its structural snapshot.

        Params:
            data: Snapshot mapping with args, commands, pos and indent
            parent: Command the restored subtree is attached under

        Returns:
            Restored command with parent links rebuilt

        Raises:
            SnapshotError: If the snapshot does not have the expected shape
        """
        try:
            model = CommandModel.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(str(e)) from e
        return cls.from_model(model, parent)

    @classmethod
    def from_model(
        cls, model: CommandModel, parent: Optional["Command"] = None
    ) -> "Command":
        """Build a command from a validated snapshot model."""
        if model.indent is not None:
            indent = model.indent
        else:
            indent = parent.indent + 1 if parent is not None else 0
        command = cls(args=list(model.args), parent=parent, pos=model.pos, indent=indent)
        command.commands = [cls.from_model(child, command) for child in model.commands]
        return command


@dataclass(eq=False)
class Document(Queryable):
    """
    Root of a parsed configuration.

    Params:
        commands: Top-level commands in source order
        source: The text the document was parsed from, if any
    """

    commands: list[Command] = field(default_factory=list)
    source: str | None = field(default=None, repr=False)

    parent = None
    depth = 0

    def __getitem__(self, index: int) -> Command:
        return self.commands[index]

    def __len__(self) -> int:
        return len(self.commands)

    def each(self) -> Iterator[Command]:
        """Traverse all commands depth-first in source order."""
        for command in self.commands:
            yield from command.each()

    def __iter__(self) -> Iterator[Command]:
        return self.each()

    def to_s(self, base_depth: int = 0) -> str:
        """Reconstruct the configuration text of the whole document."""
        return "".join(command.to_s(base_depth) for command in self.commands)

    def __str__(self) -> str:
        return self.to_s()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.commands == other.commands

    def __hash__(self) -> int:
        return hash(tuple(self.commands))

    def to_dict(self) -> SnapshotDict:
        """Export the structural snapshot of the document."""
        return {"commands": [command.to_dict() for command in self.commands]}

    def to_json(self) -> str:
        """Export the structural snapshot of the document as JSON."""
        return DocumentModel.model_validate(self.to_dict()).model_dump_json()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        """
        Restore a document from its structural snapshot.

        Raises:
            SnapshotError: If the snapshot does not have the expected shape
        """
        try:
            model = DocumentModel.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(str(e)) from e
        return cls.from_model(model)

    @classmethod
    def from_json(cls, text: str | bytes) -> "Document":
        """
        Restore a document from a JSON snapshot.

        Raises:
            SnapshotError: If the JSON is malformed or has the wrong shape
        """
        try:
            model = DocumentModel.model_validate_json(text)
        except ValidationError as e:
            raise SnapshotError(str(e)) from e
        return cls.from_model(model)

    @classmethod
    def from_model(cls, model: DocumentModel) -> "Document":
        """Build a document from a validated snapshot model."""
        return cls(commands=[Command.from_model(child) for child in model.commands])
