"""Shared test fixtures for the filebuildtag analyzer."""

from __future__ import annotations

from pathlib import Path

import pytest

from filebuildtag.analyzer import FileBuildTagAnalyzer
from filebuildtag.config import parse_filetags
from filebuildtag.parser.gosource import GoSourceLoader
from filebuildtag.parser.loader import SettingsLoader

FIXTURES_DIR = Path(__file__).parent / "fixtures"
GO_SOURCES_DIR = FIXTURES_DIR / "gosrc"
SETTINGS_DIR = FIXTURES_DIR / "settings"


@pytest.fixture
def go_loader() -> GoSourceLoader:
    return GoSourceLoader()


@pytest.fixture
def settings_loader() -> SettingsLoader:
    return SettingsLoader()


@pytest.fixture
def analyzer() -> FileBuildTagAnalyzer:
    """Analyzer requiring "tag1" on *foo.go and "integration" on integration tests."""
    return FileBuildTagAnalyzer(parse_filetags("*foo.go:tag1,*_integration_test.go:integration"))


PLUS_BUILD_SOURCE = """\
// Copyright 2024 The Example Authors.

// +build linux,amd64 integration
// +build !windows

// Package foo does things.
package foo

import "fmt"
"""

GO_BUILD_SOURCE = """\
//go:build (linux && amd64) || integration
// +build linux,amd64 integration

package foo
"""

NO_HEADER_SOURCE = """\
package foo

// +build tag1
func Foo() {}
"""
