"""Build constraint extraction from a file's header comments.

Two constraint syntaxes are recognised, both only in ``//`` line comments::

    // +build linux,amd64 integration
    //go:build (linux && amd64) || integration

Tags are flattened into one set: the AND/OR structure is dropped and only
negation survives, as a ``!`` prefix on the token (``!windows``).

Placement follows the Go toolchain: constraints must precede the package
clause and their comment group must be followed by a blank line, so a
group attached to the package clause (the package doc comment) is ignored.
"""

from __future__ import annotations

import logging
import re

from filebuildtag.parser.header import CommentGroup, ParsedFile

logger = logging.getLogger("filebuildtag.parser")

PLUS_BUILD = "+build"
GO_BUILD = "//go:build"

_TERM_RE = re.compile(r"!?[A-Za-z0-9_.]+")
_EXPR_TOKEN_RE = re.compile(r"\s*(&&|\|\||[!()]|[A-Za-z0-9_.]+)")


def extract_build_tags(file: ParsedFile) -> frozenset[str]:
    """Return the distinct build tags declared in *file*'s header.

    Never raises: unrecognised or malformed lines contribute nothing.
    """
    tags: set[str] = set()
    for group in constraint_groups(file):
        for comment in group.comments:
            if not comment.is_line_comment:
                continue
            for line in comment.text.splitlines():
                tags.update(parse_constraint_line(line))
    if tags:
        logger.debug("%s: build tags %s", file.filename, sorted(tags))
    return frozenset(tags)


def constraint_groups(file: ParsedFile) -> list[CommentGroup]:
    """Header comment groups separated by a blank line from what follows them."""
    groups = list(file.comment_groups)
    result: list[CommentGroup] = []
    for i, group in enumerate(groups):
        next_line = groups[i + 1].start_line if i + 1 < len(groups) else file.position.line
        if next_line > group.end_line + 1:
            result.append(group)
    return result


def parse_constraint_line(line: str) -> list[str]:
    """Tags declared by a single comment line, or ``[]`` if it is not a constraint."""
    line = line.strip()
    if line.startswith(GO_BUILD):
        rest = line[len(GO_BUILD) :]
        if rest and not rest[0].isspace():
            # e.g. //go:buildfoo
            return []
        return _parse_go_build(rest)
    if line.startswith("//"):
        return _parse_plus_build(line[2:])
    return []


def _parse_plus_build(body: str) -> list[str]:
    fields = body.split()
    if len(fields) < 2 or fields[0] != PLUS_BUILD:
        return []
    terms: list[str] = []
    for option in fields[1:]:
        for term in option.split(","):
            if not _TERM_RE.fullmatch(term):
                return []
            terms.append(term)
    return terms


def _tokenize(expr: str) -> list[str] | None:
    tokens: list[str] = []
    pos = 0
    expr = expr.rstrip()
    while pos < len(expr):
        m = _EXPR_TOKEN_RE.match(expr, pos)
        if m is None:
            return None
        tokens.append(m.group(1))
        pos = m.end()
    return tokens


def _parse_go_build(expr: str) -> list[str]:
    tokens = _tokenize(expr)
    if not tokens:
        return []

    # Negation state of each open parenthesis level.
    negated = [False]
    pending_not = False
    # A tag, "!" or "(" must come next; otherwise "&&", "||" or ")".
    expect_operand = True
    terms: list[str] = []
    for token in tokens:
        if token == "!":
            if not expect_operand:
                return []
            pending_not = not pending_not
        elif token == "(":
            if not expect_operand:
                return []
            negated.append(negated[-1] != pending_not)
            pending_not = False
        elif token == ")":
            if expect_operand or len(negated) == 1:
                return []
            negated.pop()
        elif token in ("&&", "||"):
            if expect_operand:
                return []
            expect_operand = True
        else:
            if not expect_operand:
                return []
            neg = negated[-1] != pending_not
            terms.append(f"!{token}" if neg else token)
            pending_not = False
            expect_operand = False

    if expect_operand or len(negated) != 1:
        return []
    return terms
