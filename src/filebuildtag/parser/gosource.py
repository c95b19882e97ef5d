"""Go source header scanner: leading comments up to the package clause."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from filebuildtag.models.errors import SourceSpan
from filebuildtag.parser.header import Comment, CommentGroup

_BOM = "\ufeff"
_WHITESPACE = " \t\r\n\f\v"


@dataclass(frozen=True)
class GoFile:
    """Header of one Go source file. Satisfies :class:`ParsedFile`."""

    filename: str
    position: SourceSpan
    comment_groups: tuple[CommentGroup, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return PurePath(self.filename).name


class _Cursor:
    """Offset → (line, column) translation, both 1-based."""

    def __init__(self, content: str) -> None:
        self._line_starts = [0]
        for i, ch in enumerate(content):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def locate(self, offset: int) -> tuple[int, int]:
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1


class GoSourceLoader:
    """Scans the comments that precede a Go file's package clause.

    Only the header is read: scanning stops at the first token that is
    neither whitespace nor a comment. Malformed source never raises.
    """

    def load(self, path: Path) -> GoFile:
        """Load a Go file from disk."""
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            content = handle.read()
        return self.load_string(content, str(path))

    def load_string(self, content: str, filename: str = "<string>") -> GoFile:
        """Scan Go source text."""
        if content.startswith(_BOM):
            content = content[len(_BOM) :]
        cursor = _Cursor(content)
        comments, stop = self._scan_comments(content, filename, cursor)
        if stop is None:
            stop = len(content)
        line, column = cursor.locate(stop)
        return GoFile(
            filename=filename,
            position=SourceSpan(file=filename, line=line, column=column),
            comment_groups=self._group(comments),
        )

    def _scan_comments(
        self, content: str, filename: str, cursor: _Cursor
    ) -> tuple[list[Comment], int | None]:
        """Return header comments and the offset of the first other token."""
        comments: list[Comment] = []
        pos = 0
        size = len(content)
        while pos < size:
            if content[pos] in _WHITESPACE:
                pos += 1
                continue
            if content.startswith("//", pos):
                end = content.find("\n", pos)
                if end == -1:
                    end = size
                text = content[pos:end].rstrip("\r")
            elif content.startswith("/*", pos):
                close = content.find("*/", pos + 2)
                if close == -1:
                    # Unterminated block comment: the header ends here.
                    return comments, pos
                end = close + 2
                text = content[pos:end]
            else:
                return comments, pos

            line, column = cursor.locate(pos)
            end_line, end_column = cursor.locate(pos + len(text))
            comments.append(
                Comment(
                    text=text,
                    span=SourceSpan(
                        file=filename,
                        line=line,
                        column=column,
                        end_line=end_line,
                        end_column=end_column,
                    ),
                )
            )
            pos = end
        return comments, None

    @staticmethod
    def _group(comments: list[Comment]) -> tuple[CommentGroup, ...]:
        groups: list[CommentGroup] = []
        current: list[Comment] = []
        for comment in comments:
            if current and comment.span.line > (current[-1].span.end_line or 0) + 1:
                groups.append(CommentGroup(comments=tuple(current)))
                current = []
            current.append(comment)
        if current:
            groups.append(CommentGroup(comments=tuple(current)))
        return tuple(groups)
