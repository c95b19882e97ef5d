"""YAML settings loader that keeps source positions for config errors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from filebuildtag.models.errors import SourceSpan

_MAX_DOCUMENT_SIZE = 1_000_000  # characters
_MAX_NODE_COUNT = 10_000
_MAX_DEPTH = 20


class YAMLSafetyError(Exception):
    """Raised when a settings document is refused before being interpreted.

    Oversized documents, anchors/aliases, too many nodes or too deep nesting.
    """


def _anchor_name(node: Any) -> str | None:
    # ruamel.yaml keeps anchors on round-trip containers and scalar subclasses.
    anchor = getattr(node, "anchor", None)
    return getattr(anchor, "value", None)


@dataclass(frozen=True)
class SettingsDocument:
    """A parsed settings document; positions are read from ruamel.yaml nodes."""

    data: dict[str, Any]
    filename: str

    def find(self, key_path: str) -> tuple[bool, Any, SourceSpan | None]:
        """Look up a dotted key path; returns (found, value, span of the last key)."""
        node: Any = self.data
        span: SourceSpan | None = None
        for key in key_path.split("."):
            if not isinstance(node, dict) or key not in node:
                return False, None, None
            span = self.key_span(node, key)
            node = node[key]
        return True, node, span

    def key_span(self, mapping: dict[str, Any], key: str) -> SourceSpan | None:
        if not isinstance(mapping, CommentedMap):
            return None
        try:
            position = mapping.lc.key(key)
        except (AttributeError, KeyError, TypeError):
            return None
        return self._span(position)

    def item_span(self, sequence: list[Any], index: int) -> SourceSpan | None:
        if not isinstance(sequence, CommentedSeq):
            return None
        try:
            position = sequence.lc.item(index)
        except (AttributeError, KeyError, IndexError, TypeError):
            return None
        return self._span(position)

    def _span(self, position: Any) -> SourceSpan | None:
        if not position:
            return None
        line, col = position
        return SourceSpan(file=self.filename, line=line + 1, column=col + 1)


class SettingsLoader:
    """Loads linter settings YAML with ruamel.yaml's round-trip parser."""

    def __init__(self) -> None:
        self._yaml = YAML()

    def load(self, path: Path) -> SettingsDocument:
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        return self.load_string(content, str(path))

    def load_string(self, content: str, filename: str = "<string>") -> SettingsDocument:
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"settings document exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )
        data = self._yaml.load(content)
        if data is None:
            return SettingsDocument(data={}, filename=filename)
        self._check_nodes(data)
        if not isinstance(data, dict):
            return SettingsDocument(data={}, filename=filename)
        return SettingsDocument(data=data, filename=filename)

    @staticmethod
    def _check_nodes(data: Any) -> None:
        """Walk the parsed nodes: no anchors or aliases, bounded size and depth."""
        count = 0
        seen: set[int] = set()
        stack: list[tuple[Any, int]] = [(data, 1)]
        while stack:
            node, depth = stack.pop()
            count += 1
            if count > _MAX_NODE_COUNT:
                raise YAMLSafetyError(
                    f"settings document exceeds maximum node count ({_MAX_NODE_COUNT:,})"
                )
            if depth > _MAX_DEPTH:
                raise YAMLSafetyError(f"settings document nested deeper than {_MAX_DEPTH} levels")
            anchor = _anchor_name(node)
            if anchor is not None:
                raise YAMLSafetyError(
                    f"YAML anchors/aliases are not supported in settings files (&{anchor})"
                )
            if isinstance(node, (dict, list)):
                # An alias resolves to the very container it points at.
                if id(node) in seen:
                    raise YAMLSafetyError("YAML anchors/aliases are not supported in settings files")
                seen.add(id(node))
                children = node.values() if isinstance(node, dict) else node
                stack.extend((child, depth + 1) for child in children)
