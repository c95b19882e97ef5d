"""Tests for the Go header scanner."""

from __future__ import annotations

from filebuildtag.parser.gosource import GoFile, GoSourceLoader
from filebuildtag.parser.header import ParsedFile
from tests.conftest import GO_SOURCES_DIR, NO_HEADER_SOURCE, PLUS_BUILD_SOURCE


class TestGoSourceLoader:
    def test_groups_split_on_blank_lines(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string(PLUS_BUILD_SOURCE, "foo.go")
        texts = [group.text() for group in file.comment_groups]
        assert texts == [
            "// Copyright 2024 The Example Authors.",
            "// +build linux,amd64 integration\n// +build !windows",
            "// Package foo does things.",
        ]

    def test_position_is_package_clause(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string(PLUS_BUILD_SOURCE, "pkg/foo.go")
        assert file.position.file == "pkg/foo.go"
        assert file.position.line == 7
        assert file.position.column == 1

    def test_comment_spans(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string(PLUS_BUILD_SOURCE, "foo.go")
        build_group = file.comment_groups[1]
        assert build_group.start_line == 3
        assert build_group.end_line == 4
        first = build_group.comments[0]
        assert first.span.column == 1
        assert first.span.end_column == len("// +build linux,amd64 integration") + 1

    def test_no_header(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string(NO_HEADER_SOURCE, "foo.go")
        assert file.comment_groups == ()
        assert file.position.line == 1

    def test_comments_after_package_ignored(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string(NO_HEADER_SOURCE, "foo.go")
        assert all("+build" not in g.text() for g in file.comment_groups)

    def test_block_comment_spans_lines(self, go_loader: GoSourceLoader) -> None:
        source = "/*\n Copyright\n*/\n// +build foo\n\npackage foo\n"
        file = go_loader.load_string(source, "foo.go")
        assert len(file.comment_groups) == 1
        group = file.comment_groups[0]
        assert [c.is_line_comment for c in group.comments] == [False, True]
        assert group.comments[0].span.end_line == 3
        assert group.end_line == 4

    def test_unterminated_block_comment_ends_header(self, go_loader: GoSourceLoader) -> None:
        source = "// +build foo\n\n/* never closed\npackage foo\n"
        file = go_loader.load_string(source, "foo.go")
        assert len(file.comment_groups) == 1
        assert file.position.line == 3

    def test_only_comments_position_at_eof(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string("// just a comment\n", "foo.go")
        assert len(file.comment_groups) == 1
        assert file.position.line == 2

    def test_empty_source(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string("", "empty.go")
        assert file.comment_groups == ()
        assert file.position.line == 1
        assert file.position.column == 1

    def test_byte_order_mark_skipped(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string("\ufeff// +build foo\n\npackage foo\n", "foo.go")
        assert file.comment_groups[0].comments[0].text == "// +build foo"
        assert file.position.line == 3

    def test_crlf_line_endings(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string("// +build foo\r\n\r\npackage foo\r\n", "foo.go")
        assert file.comment_groups[0].comments[0].text == "// +build foo"
        assert file.position.line == 3

    def test_load_from_disk(self, go_loader: GoSourceLoader) -> None:
        path = GO_SOURCES_DIR / "foo2.go"
        file = go_loader.load(path)
        assert file.filename == str(path)
        assert file.name == "foo2.go"
        assert len(file.comment_groups) == 1

    def test_satisfies_parsed_file_protocol(self, go_loader: GoSourceLoader) -> None:
        file = go_loader.load_string("package foo\n", "foo.go")
        assert isinstance(file, GoFile)
        assert isinstance(file, ParsedFile)
