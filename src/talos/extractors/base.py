"""Base protocol for signature extractors."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Extractor(Protocol):
    """Interface every signature extractor must satisfy.

    Implementations:
      - TreeSitterExtractor (tree-sitter queries for JS/TS/TSX and CSS)
    """

    def extract_file(self, abs_path: Path) -> list[str]:
        """Return the sorted, unique signatures declared in one file.

        Files whose extension has no registered grammar yield ``[]``.
        Raises ``ExtractionError`` when the file cannot be read or parsed.
        """
        ...
