"""Parsing of the ``filetags`` option into an immutable :class:`FileTags`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from filebuildtag.models.errors import SourceSpan
from filebuildtag.models.filetags import FileTags
from filebuildtag.parser.loader import SettingsDocument, SettingsLoader

logger = logging.getLogger("filebuildtag.config")

# Key paths searched in a settings document, first match wins.
SETTINGS_KEYS = ("linters-settings.filebuildtag.filetags", "filetags")


class ConfigError(ValueError):
    """Raised when the file tags configuration cannot be used."""

    def __init__(self, message: str, span: SourceSpan | None = None) -> None:
        self.span = span
        super().__init__(f"{span}: {message}" if span is not None else message)


class MalformedEntryError(ConfigError):
    """An entry is not of the form ``pattern:tag``."""

    def __init__(self, entry: str, span: SourceSpan | None = None) -> None:
        self.entry = entry
        super().__init__(
            f'malformed argument: "{entry}", must be of the form "pattern:tag"', span=span
        )


def parse_entry(entry: str, span: SourceSpan | None = None) -> tuple[str, str] | None:
    """Parse one ``pattern:tag`` entry.

    Returns ``None`` for an entry that is blank after trimming. The error
    raised for a malformed entry carries the entry exactly as given.
    """
    filetag = entry.strip()
    if not filetag:
        return None
    parts = filetag.split(":")
    if len(parts) != 2:
        raise MalformedEntryError(entry, span=span)
    pattern, tag = parts[0].strip(), parts[1].strip()
    if not pattern or not tag:
        raise MalformedEntryError(entry, span=span)
    return pattern, tag


def parse_filetags(raw: str | None) -> FileTags:
    """Parse ``"pattern1:tag1,pattern2:tag2"`` into a :class:`FileTags`.

    ``None`` and the empty string give an empty configuration. A pattern
    given twice keeps the tag of its last occurrence.
    """
    if raw is None:
        return FileTags()
    pairs: list[tuple[str, str]] = []
    for entry in raw.split(","):
        parsed = parse_entry(entry)
        if parsed is not None:
            pairs.append(parsed)
    return _build(pairs)


def load_filetags_file(path: Path, loader: SettingsLoader | None = None) -> FileTags:
    """Read the ``filetags`` option from a YAML settings file."""
    return _from_settings_document((loader or SettingsLoader()).load(path))


def load_filetags_yaml(
    content: str, filename: str = "<string>", loader: SettingsLoader | None = None
) -> FileTags:
    """Read the ``filetags`` option from YAML text.

    ``filetags`` may be a comma-separated string, a list of ``pattern:tag``
    strings or a mapping of pattern to tag. It is looked up under
    ``linters-settings.filebuildtag`` first, then at the top level.
    """
    return _from_settings_document((loader or SettingsLoader()).load_string(content, filename))


def _from_settings_document(document: SettingsDocument) -> FileTags:
    for key_path in SETTINGS_KEYS:
        found, value, span = document.find(key_path)
        if found:
            return _from_settings_value(value, key_path, document, span)
    return FileTags()


def _from_settings_value(
    value: Any, key_path: str, document: SettingsDocument, span: SourceSpan | None
) -> FileTags:
    if value is None:
        return FileTags()
    if isinstance(value, str):
        try:
            return parse_filetags(value)
        except MalformedEntryError as exc:
            raise MalformedEntryError(exc.entry, span=span) from None

    pairs: list[tuple[str, str]] = []
    if isinstance(value, list):
        for i, item in enumerate(value):
            item_span = document.item_span(value, i) or span
            if not isinstance(item, str):
                raise ConfigError(
                    f"'{key_path}[{i}]' must be a \"pattern:tag\" string", span=item_span
                )
            parsed = parse_entry(item, span=item_span)
            if parsed is not None:
                pairs.append(parsed)
    elif isinstance(value, dict):
        for key, tag in value.items():
            entry_span = document.key_span(value, key) or span
            pairs.append(_mapping_entry(key, tag, key_path, entry_span))
    else:
        raise ConfigError(
            f"'{key_path}' must be a string, a list or a mapping, "
            f"not {type(value).__name__}",
            span=span,
        )
    return _build(pairs)


def _mapping_entry(
    key: Any, tag: Any, key_path: str, span: SourceSpan | None
) -> tuple[str, str]:
    # Key and tag are taken as given; neither may contain the ":" separator.
    if not isinstance(tag, str):
        raise ConfigError(f"'{key_path}.{key}' must be a tag string", span=span)
    pattern = str(key).strip()
    if not pattern or ":" in pattern:
        raise MalformedEntryError(str(key), span=span)
    if not tag.strip() or ":" in tag:
        raise MalformedEntryError(f"{key}: {tag}", span=span)
    return pattern, tag.strip()


def _build(pairs: list[tuple[str, str]]) -> FileTags:
    seen: dict[str, str] = {}
    for pattern, tag in pairs:
        if pattern in seen and seen[pattern] != tag:
            logger.debug("pattern %r redefined: %r overrides %r", pattern, tag, seen[pattern])
        seen[pattern] = tag
    filetags = FileTags.from_pairs(pairs)
    logger.debug("parsed %d file tag rule(s): %s", len(filetags), filetags.as_dict())
    return filetags
