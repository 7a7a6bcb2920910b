"""Exception hierarchy for talos.

Per-file failures (:class:`ExtractionError`) are absorbed by the scanner into
error entries.  Everything else aborts the run.
"""

from __future__ import annotations


class TalosError(Exception):
    """Base class for every error raised by talos."""


class ConfigError(TalosError):
    """Unusable scan configuration (bad extension list, malformed glob)."""


class QueryCompileError(TalosError):
    """A built-in query program failed to compile against its grammar."""

    def __init__(self, language: str, detail: str) -> None:
        super().__init__(f"Query for {language} failed to compile: {detail}")
        self.language = language


class ExtractionError(TalosError):
    """Signature extraction failed for a single file."""


class ReadError(ExtractionError):
    """The file could not be read."""

    def __str__(self) -> str:
        return f"IO error: {self.args[0]}"


class ParseError(ExtractionError):
    """The grammar could not build a syntax tree from the file contents."""

    def __str__(self) -> str:
        return f"Parse error: {self.args[0]}"


class OutputError(TalosError):
    """The document could not be written."""
