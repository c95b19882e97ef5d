"""Header comment nodes and the parsed-file interface consumed by the analyzer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from filebuildtag.models.errors import SourceSpan


@dataclass(frozen=True)
class Comment:
    """A single comment, delimiters included (``// ...`` or ``/* ... */``)."""

    text: str
    span: SourceSpan

    @property
    def is_line_comment(self) -> bool:
        return self.text.startswith("//")


@dataclass(frozen=True)
class CommentGroup:
    """Adjacent comments with no blank line between them."""

    comments: tuple[Comment, ...] = field(default_factory=tuple)

    @property
    def start_line(self) -> int:
        return self.comments[0].span.line

    @property
    def end_line(self) -> int:
        last = self.comments[-1].span
        return last.end_line if last.end_line is not None else last.line

    def text(self) -> str:
        return "\n".join(c.text for c in self.comments)


@runtime_checkable
class ParsedFile(Protocol):
    """What the analyzer needs from a parsed source file, and nothing more.

    ``comment_groups`` are the groups preceding the package clause, in source
    order. ``position`` is where the package clause starts; diagnostics for
    the file are anchored there.
    """

    @property
    def filename(self) -> str: ...

    @property
    def comment_groups(self) -> Sequence[CommentGroup]: ...

    @property
    def position(self) -> SourceSpan: ...
