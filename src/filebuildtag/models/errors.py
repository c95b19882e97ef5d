"""Structured diagnostic models with Go source position tracking."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

MISSING_BUILD_TAG = "MISSING_BUILD_TAG"


class SourceSpan(BaseModel):
    """Points to exact location in a source file for diagnostic reporting."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class Violation(BaseModel):
    """A file matched a configured pattern but lacks the pattern's build tag."""

    model_config = ConfigDict(frozen=True)

    span: SourceSpan
    message: str
    pattern: str
    tag: str
    code: str = MISSING_BUILD_TAG
    analyzer: str = "filebuildtag"

    def __str__(self) -> str:
        return f"{self.span}: {self.message} ({self.analyzer})"
