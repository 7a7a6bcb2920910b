"""Talos - signature extraction for JavaScript, TypeScript and CSS projects."""

__version__ = "0.1.0"

from .models import (  # noqa: E402 -- public re-exports
    DirectoryEntry,
    Document,
    ErrorEntry,
    FileEntry,
    ScanOptions,
)
from .scanner import scan_project  # noqa: E402
from .writer import write_output  # noqa: E402

__all__ = [
    "DirectoryEntry",
    "Document",
    "ErrorEntry",
    "FileEntry",
    "ScanOptions",
    "scan_project",
    "write_output",
]
