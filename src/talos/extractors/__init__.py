"""Extraction engine -- routes files to the right extractor by language."""

from __future__ import annotations

from .base import Extractor
from .grammars import LANGUAGE_EXTENSIONS, Grammar, load_grammars, resolve

__all__ = [
    "Extractor",
    "Grammar",
    "LANGUAGE_EXTENSIONS",
    "get_extractor",
    "register",
    "resolve",
    "setup_extractors",
]

# Registry populated at startup via setup_extractors().
_REGISTRY: dict[str, Extractor] = {}


def register(language: str, extractor: Extractor) -> None:
    """Register an extractor instance for a language tag."""
    _REGISTRY[language] = extractor


def get_extractor(language: str) -> Extractor | None:
    """Return the extractor for *language*, or ``None`` if unsupported."""
    return _REGISTRY.get(language)


def setup_extractors() -> None:
    """Load every grammar and register the built-in extractors.

    Call once at startup, before any worker threads start.  Raises
    ``QueryCompileError`` if a built-in query program is malformed.
    """
    from .treesitter_extractor import TreeSitterExtractor

    ts = TreeSitterExtractor()
    for tag in load_grammars():
        register(tag, ts)
