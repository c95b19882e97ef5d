"""Matches file names against the configured patterns and reports missing tags."""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Set
from pathlib import PurePath

from filebuildtag.models.errors import SourceSpan, Violation
from filebuildtag.models.filetags import FileTags

logger = logging.getLogger("filebuildtag.rule")

MESSAGE = 'missing expected build tag: "{tag}"'


@functools.lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern[str] | None:
    """Translate a glob pattern to a regex, or ``None`` if it is malformed.

    Syntax: ``*`` any run of non-``/`` characters, ``?`` one non-``/``
    character, ``[...]`` a class of characters and ``lo-hi`` ranges
    (``[^...]`` negated), ``\\c`` the literal ``c``. An unclosed or empty
    class, a dangling ``-`` in a class and a trailing ``\\`` are malformed.
    """
    parts: list[str] = []
    i, size = 0, len(pattern)
    while i < size:
        ch = pattern[i]
        if ch == "*":
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch == "\\":
            i += 1
            if i == size:
                return _malformed(pattern)
            parts.append(re.escape(pattern[i]))
        elif ch == "[":
            i, char_class = _translate_class(pattern, i + 1)
            if char_class is None:
                return _malformed(pattern)
            parts.append(char_class)
            continue
        else:
            parts.append(re.escape(ch))
        i += 1
    try:
        return re.compile("".join(parts), re.DOTALL)
    except re.error:
        return _malformed(pattern)


def _malformed(pattern: str) -> None:
    logger.warning("ignoring malformed file pattern %r", pattern)
    return None


def _class_char(pattern: str, i: int) -> tuple[int, str | None]:
    if i >= len(pattern) or pattern[i] in "-]":
        return i, None
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            return i, None
    return i + 1, pattern[i]


def _translate_class(pattern: str, i: int) -> tuple[int, str | None]:
    """Translate the class starting after ``[``; returns (next index, regex)."""
    negate = i < len(pattern) and pattern[i] == "^"
    if negate:
        i += 1
    ranges: list[str] = []
    first = True
    while True:
        if i >= len(pattern):
            return i, None
        if pattern[i] == "]" and not first:
            i += 1
            break
        first = False
        i, lo = _class_char(pattern, i)
        if lo is None:
            return i, None
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            i, hi = _class_char(pattern, i + 1)
            if hi is None:
                return i, None
        if lo == hi:
            ranges.append(re.escape(lo))
        elif lo < hi:
            ranges.append(f"{re.escape(lo)}-{re.escape(hi)}")
        # An inverted range is valid and matches nothing.

    if not ranges:
        return i, "." if negate else "(?!)"
    return i, f"[{'^' if negate else ''}{''.join(ranges)}]"


def match_pattern(pattern: str, name: str) -> bool:
    """Whether *name* matches the glob *pattern*; malformed patterns never match."""
    regex = compile_pattern(pattern)
    return regex is not None and regex.fullmatch(name) is not None


def check(
    filename: str,
    markers: Set[str],
    filetags: FileTags,
    span: SourceSpan | None = None,
) -> list[Violation]:
    """Report one violation per matching pattern whose tag is not in *markers*.

    Only the base name of *filename* is matched. Violations are anchored at
    *span*, or at the start of the file when no span is given.
    """
    name = PurePath(filename).name
    if span is None:
        span = SourceSpan(file=filename, line=1, column=1)

    violations: list[Violation] = []
    for rule in filetags.rules:
        if not match_pattern(rule.pattern, name):
            continue
        logger.debug("%s matches %r, expecting tag %r", filename, rule.pattern, rule.tag)
        if rule.tag in markers:
            continue
        violations.append(
            Violation(
                span=span,
                message=MESSAGE.format(tag=rule.tag),
                pattern=rule.pattern,
                tag=rule.tag,
            )
        )
    return violations
