"""
Structural snapshot models for command trees.

A snapshot is the plain ``{args, commands, pos, indent}`` shape of every
command, nested under ``{commands: [...]}`` for a document. These pydantic
models validate that shape on import and own its JSON encoding.
"""

from pydantic import BaseModel, Field

from conftree.core.types import ArgValue


class CommandModel(BaseModel):
    """
    Snapshot of one command and its subtree.

    Params:
        args: Command arguments, at least one
        commands: Snapshots of the child commands
        pos: Offset of the command's first token in the source, if known
        indent: Nesting level (0 for top-level commands); derived from the
            parent when omitted
    """

    args: list[ArgValue] = Field(min_length=1)
    commands: list["CommandModel"] = Field(default_factory=list)
    pos: int | None = None
    indent: int | None = Field(default=None, ge=0)


class DocumentModel(BaseModel):
    """Snapshot of a whole document."""

    commands: list[CommandModel] = Field(default_factory=list)
