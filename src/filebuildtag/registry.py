"""Analyzer registry: lets a lint host look analyzers up by name."""

from __future__ import annotations

from typing import Any


class UnknownAnalyzerError(Exception):
    """Raised when a requested analyzer is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.analyzer_name = name
        self.available = available
        super().__init__(f"Unknown analyzer '{name}'. Available: {', '.join(available)}")


class AnalyzerRegistry:
    """Registry of analyzer classes keyed by their ``name``."""

    _analyzers: dict[str, type[Any]] = {}

    @classmethod
    def register(cls, analyzer_class: type[Any]) -> type[Any]:
        """Register an analyzer class. Can be used as a decorator."""
        cls._analyzers[analyzer_class.name] = analyzer_class
        return analyzer_class

    @classmethod
    def get(cls, name: str, *args: Any, **kwargs: Any) -> Any:
        """Instantiate the named analyzer with the given arguments."""
        if name not in cls._analyzers:
            raise UnknownAnalyzerError(name, available=cls.available())
        return cls._analyzers[name](*args, **kwargs)

    @classmethod
    def get_class(cls, name: str) -> type[Any]:
        """Return the registered class for *name* without instantiating it."""
        if name not in cls._analyzers:
            raise UnknownAnalyzerError(name, available=cls.available())
        return cls._analyzers[name]

    @classmethod
    def available(cls) -> list[str]:
        """List registered analyzer names."""
        return sorted(cls._analyzers.keys())

    @classmethod
    def reset(cls) -> None:
        """Clear all registered analyzers (for testing)."""
        cls._analyzers.clear()
