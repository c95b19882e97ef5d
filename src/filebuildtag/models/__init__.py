"""Pydantic domain models for the filebuildtag linter."""

from filebuildtag.models.errors import MISSING_BUILD_TAG, SourceSpan, Violation
from filebuildtag.models.filetags import FileTagRule, FileTags

__all__ = [
    "MISSING_BUILD_TAG",
    "FileTagRule",
    "FileTags",
    "SourceSpan",
    "Violation",
]
