"""Aggregator -- merges per-file results into one deterministic Document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .models import DirectoryEntry, Document, ErrorEntry, FileEntry


@dataclass(frozen=True)
class ScannedFile:
    """Extraction result for one file, before grouping."""

    directory: str  # "." for the scan root
    file_name: str
    rel_path: str
    signatures: list[str]


def assemble(
    scanned: Iterable[ScannedFile],
    errors: Iterable[ErrorEntry],
    *,
    timestamp: str,
    terse: bool = False,
) -> Document:
    """Group files by directory and build the Document.

    Directories are sorted by path, files by relative path, errors by path.
    In terse mode files without signatures are dropped, and directories left
    empty are omitted.  Every entry shares *timestamp*.
    """
    by_dir: dict[str, list[FileEntry]] = {}
    for item in scanned:
        if terse and not item.signatures:
            continue
        by_dir.setdefault(item.directory, []).append(FileEntry(
            file_name=item.file_name,
            relative_file_path=item.rel_path,
            last_scanned=timestamp,
            signatures=item.signatures,
        ))

    directories = [
        DirectoryEntry(
            directory_path=path,
            files=sorted(files, key=lambda f: f.relative_file_path),
        )
        for path, files in sorted(by_dir.items())
        if files
    ]

    return Document(
        last_updated=timestamp,
        directories=directories,
        errors=sorted(errors, key=lambda e: (e.path, e.error)),
    )
