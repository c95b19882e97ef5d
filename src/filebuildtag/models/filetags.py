"""Immutable pattern → build tag configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FileTagRule(BaseModel):
    """Files whose base name matches ``pattern`` must declare ``tag``."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(min_length=1)
    tag: str = Field(min_length=1)


class FileTags(BaseModel):
    """Ordered set of file tag rules, at most one rule per pattern.

    Built once per analysis run and shared read-only by every file check.
    """

    model_config = ConfigDict(frozen=True)

    rules: tuple[FileTagRule, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]]) -> FileTags:
        """Build from (pattern, tag) pairs; a repeated pattern keeps the last tag."""
        merged: dict[str, str] = {}
        for pattern, tag in pairs:
            merged[pattern] = tag
        return cls(rules=tuple(FileTagRule(pattern=p, tag=t) for p, t in merged.items()))

    def __len__(self) -> int:
        return len(self.rules)

    def __contains__(self, pattern: object) -> bool:
        return any(rule.pattern == pattern for rule in self.rules)

    def get(self, pattern: str) -> str | None:
        for rule in self.rules:
            if rule.pattern == pattern:
                return rule.tag
        return None

    def items(self) -> list[tuple[str, str]]:
        return [(rule.pattern, rule.tag) for rule in self.rules]

    def as_dict(self) -> dict[str, str]:
        return {rule.pattern: rule.tag for rule in self.rules}
