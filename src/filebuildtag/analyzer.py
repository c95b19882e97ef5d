"""The filebuildtag analyzer: binds a FileTags configuration to per-file checks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from filebuildtag.config import load_filetags_file, parse_filetags
from filebuildtag.models.errors import Violation
from filebuildtag.models.filetags import FileTags
from filebuildtag.parser.gosource import GoSourceLoader
from filebuildtag.parser.header import ParsedFile
from filebuildtag.parser.markers import extract_build_tags
from filebuildtag.registry import AnalyzerRegistry
from filebuildtag.rule import check
from filebuildtag.settings import Settings

logger = logging.getLogger("filebuildtag.analyzer")

NAME = "filebuildtag"

DOC = """\
ensure Go files have the expected "// +build <tag>" instruction based on the file name

Bind file names to their expected build tags, such as:
	Files named "foo.go" must have the "foo" build tag
	Files with the suffix "*_integration_test.go" must have the "integration" build tag"""

FLAG_FILETAGS_NAME = "filetags"
FLAG_FILETAGS_DOC = """\
Comma-separated list of file names and build tags using the form "pattern:tag". For example:
- Single pattern: "*foo.go:tag1"
- Multiple patterns: "*foo.go:tag1,*foo2.go:tag2\""""


@AnalyzerRegistry.register
class FileBuildTagAnalyzer:
    """Reports files whose name matches a pattern but that lack its build tag.

    Holds nothing but the immutable :class:`FileTags`, so one instance can
    check any number of files, from any number of threads.
    """

    name = NAME
    doc = DOC

    def __init__(self, filetags: FileTags | None = None) -> None:
        self.filetags = filetags if filetags is not None else FileTags()
        logger.info("%s: %d file tag rule(s)", self.name, len(self.filetags))

    @classmethod
    def from_flag(cls, raw: str | None) -> FileBuildTagAnalyzer:
        """Build from the raw ``filetags`` flag value; raises ``ConfigError``."""
        return cls(parse_filetags(raw))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> FileBuildTagAnalyzer:
        """Build from environment settings.

        ``filetags`` wins over ``config_file``; with neither, no rule applies.
        """
        settings = settings or Settings()
        logging.getLogger("filebuildtag").setLevel(settings.log_level)
        if settings.filetags.strip():
            return cls(parse_filetags(settings.filetags))
        if settings.config_file is not None:
            return cls(load_filetags_file(settings.config_file))
        return cls()

    def run(self, file: ParsedFile) -> list[Violation]:
        """Check one parsed file."""
        tags = extract_build_tags(file)
        return check(file.filename, tags, self.filetags, span=file.position)

    def check_source(self, content: str, filename: str) -> list[Violation]:
        """Scan Go source text and check it."""
        return self.run(GoSourceLoader().load_string(content, filename))


@dataclass
class AnalysisPass:
    """One analysis run: feeds files to the analyzer and collects violations."""

    analyzer: FileBuildTagAnalyzer
    violations: list[Violation] = field(default_factory=list)
    files_checked: int = 0

    def report(self, violation: Violation) -> None:
        self.violations.append(violation)

    def run(self, files: Iterable[ParsedFile]) -> list[Violation]:
        """Check every file in order; returns all violations of this pass so far."""
        for file in files:
            self.files_checked += 1
            for violation in self.analyzer.run(file):
                self.report(violation)
        logger.info(
            "%s: %d violation(s) in %d file(s)",
            self.analyzer.name,
            len(self.violations),
            self.files_checked,
        )
        return self.violations
