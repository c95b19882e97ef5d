"""Tests for Pydantic domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from filebuildtag.models.errors import MISSING_BUILD_TAG, SourceSpan, Violation
from filebuildtag.models.filetags import FileTagRule, FileTags


class TestSourceSpan:
    def test_str(self) -> None:
        assert str(SourceSpan(file="a.go", line=2, column=5)) == "a.go:2:5"

    def test_optional_end(self) -> None:
        span = SourceSpan(file="a.go", line=2, column=5)
        assert span.end_line is None
        assert span.end_column is None

    def test_hashable(self) -> None:
        span = SourceSpan(file="a.go", line=1, column=1)
        assert span in {SourceSpan(file="a.go", line=1, column=1)}


class TestViolation:
    def test_defaults(self) -> None:
        violation = Violation(
            span=SourceSpan(file="a.go", line=1, column=1),
            message='missing expected build tag: "x"',
            pattern="*.go",
            tag="x",
        )
        assert violation.code == MISSING_BUILD_TAG
        assert violation.analyzer == "filebuildtag"

    def test_frozen(self) -> None:
        violation = Violation(
            span=SourceSpan(file="a.go", line=1, column=1), message="m", pattern="*", tag="x"
        )
        with pytest.raises(ValidationError):
            violation.tag = "y"  # type: ignore[misc]

    def test_serializes(self) -> None:
        violation = Violation(
            span=SourceSpan(file="a.go", line=1, column=1), message="m", pattern="*", tag="x"
        )
        data = violation.model_dump()
        assert data["span"]["line"] == 1
        assert data["tag"] == "x"


class TestFileTags:
    def test_rule_requires_non_empty_sides(self) -> None:
        with pytest.raises(ValidationError):
            FileTagRule(pattern="", tag="x")
        with pytest.raises(ValidationError):
            FileTagRule(pattern="*.go", tag="")

    def test_from_pairs_last_wins(self) -> None:
        filetags = FileTags.from_pairs([("a", "1"), ("b", "2"), ("a", "3")])
        assert filetags.items() == [("a", "3"), ("b", "2")]

    def test_empty(self) -> None:
        filetags = FileTags()
        assert len(filetags) == 0
        assert filetags.rules == ()

    def test_equality(self) -> None:
        assert FileTags.from_pairs([("a", "1")]) == FileTags.from_pairs([("a", "1")])
