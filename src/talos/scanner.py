"""Directory scanner -- walks the file tree and extracts signatures per file."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .aggregator import ScannedFile, assemble
from .errors import ExtractionError
from .extractors import LANGUAGE_EXTENSIONS, get_extractor, setup_extractors
from .filters import IgnoreRules, PathFilters, build_filters
from .models import Document, ErrorEntry, ScanOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """An eligible file, located relative to the scan root."""

    abs_path: Path
    rel_path: str  # forward slashes
    language: str

    @property
    def rel_dir(self) -> str:
        parent = self.rel_path.rpartition("/")[0]
        return parent or "."


def utc_timestamp() -> str:
    """RFC 3339 UTC timestamp, e.g. ``2026-01-01T12:00:00.000000Z``."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _eligible_language(fname: str, options: ScanOptions) -> str | None:
    ext = os.path.splitext(fname)[1].lstrip(".").lower()
    if not ext or not options.allows_extension(ext):
        return None
    return LANGUAGE_EXTENSIONS.get(ext)


def _too_large(path: Path, options: ScanOptions) -> bool:
    if options.max_file_size is None:
        return False
    try:
        return path.stat().st_size > options.max_file_size
    except OSError:
        # Let extraction report the unreadable file.
        return False


def discover_files(root: Path, options: ScanOptions, filters: PathFilters) -> list[Candidate]:
    """Walk *root* and return every eligible file, sorted by relative path.

    Symbolic links are never followed or returned.  Ignored and excluded
    directories are pruned in place so ``os.walk`` never descends into them.
    """
    ignore = IgnoreRules.for_root(root)
    candidates: list[Candidate] = []

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        abs_dir = Path(dirpath)
        rel_dir = abs_dir.relative_to(root).as_posix()
        if rel_dir == ".":
            rel_dir = ""
        ignore.enter(rel_dir, abs_dir)

        kept_dirs = []
        for d in sorted(dirnames):
            rel = f"{rel_dir}/{d}" if rel_dir else d
            if (abs_dir / d).is_symlink():
                continue
            if filters.is_excluded(rel, is_dir=True) or ignore.is_ignored(rel, is_dir=True):
                logger.debug("Pruned directory %s", rel)
                continue
            kept_dirs.append(d)
        dirnames[:] = kept_dirs

        for fname in sorted(filenames):
            rel_path = f"{rel_dir}/{fname}" if rel_dir else fname
            abs_path = abs_dir / fname
            language = _eligible_language(fname, options)
            if language is None:
                continue
            if abs_path.is_symlink():
                logger.debug("Skipped symlink %s", rel_path)
                continue
            if not abs_path.is_file():
                logger.debug("Skipped non-regular file %s", rel_path)
                continue
            if not filters.accepts(rel_path) or ignore.is_ignored(rel_path):
                logger.debug("Filtered out %s", rel_path)
                continue
            if _too_large(abs_path, options):
                logger.debug("Skipped %s: larger than %d bytes", rel_path, options.max_file_size)
                continue
            candidates.append(Candidate(abs_path=abs_path, rel_path=rel_path, language=language))

    candidates.sort(key=lambda c: c.rel_path)
    return candidates


def _extract_one(candidate: Candidate) -> list[str] | ErrorEntry:
    extractor = get_extractor(candidate.language)
    if extractor is None:
        return []
    try:
        return extractor.extract_file(candidate.abs_path)
    except ExtractionError as exc:
        logger.debug("Extraction failed for %s: %s", candidate.rel_path, exc)
        return ErrorEntry(path=candidate.rel_path, error=str(exc))


def scan_project(root: Path, options: ScanOptions | None = None) -> tuple[Document, list[ErrorEntry]]:
    """Scan *root* and return the assembled document plus the per-file errors.

    The errors are already merged into ``document.errors``; they are also
    returned separately for callers that only care about failures.

    Raises ``ConfigError`` for malformed globs and ``QueryCompileError`` for a
    broken built-in query, both before any file is read.
    """
    options = options or ScanOptions()
    root = root.resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory")

    filters = build_filters(options.include, options.exclude)
    setup_extractors()
    timestamp = utc_timestamp()

    candidates = discover_files(root, options, filters)
    logger.info("Scanning %d file(s) under %s", len(candidates), root)

    if options.jobs > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=options.jobs) as pool:
            outcomes = list(pool.map(_extract_one, candidates))
    else:
        outcomes = [_extract_one(c) for c in candidates]

    scanned: list[ScannedFile] = []
    errors: list[ErrorEntry] = []
    for candidate, outcome in zip(candidates, outcomes):
        if isinstance(outcome, ErrorEntry):
            errors.append(outcome)
        else:
            scanned.append(ScannedFile(
                directory=candidate.rel_dir,
                file_name=candidate.abs_path.name,
                rel_path=candidate.rel_path,
                signatures=outcome,
            ))

    document = assemble(scanned, errors, timestamp=timestamp, terse=options.terse)
    logger.info(
        "Scan complete: %d file(s) in %d director(ies), %d error(s)",
        document.file_count, len(document.directories), len(document.errors),
    )
    return document, list(document.errors)
