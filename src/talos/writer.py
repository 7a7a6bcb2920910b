"""Write a Document to stdout or atomically replace a file on disk."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import TextIO

from .errors import OutputError
from .models import Document

logger = logging.getLogger(__name__)

STDOUT = "-"
DEFAULT_OUTPUT_NAME = "talos.json"


def resolve_output(output: str | None, input_dir: Path) -> str | Path:
    """``"-"`` means stdout; no value means ``<input_dir>/talos.json``."""
    if output == STDOUT:
        return STDOUT
    if output is None:
        return input_dir / DEFAULT_OUTPUT_NAME
    return Path(output)


def write_output(document: Document, target: str | Path, *, stream: TextIO | None = None) -> None:
    """Serialize *document* to *target*.

    File targets are replaced all-or-nothing: the JSON goes to a temporary
    sibling which is then renamed over the target, so a failed write leaves
    any previous file untouched.
    """
    payload = document.to_json()
    if target == STDOUT:
        out = stream or sys.stdout
        out.write(payload + "\n")
        out.flush()
        return
    _atomic_write(Path(target), payload)


def _atomic_write(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.{os.getpid()}.", suffix=".tmp",
        )
    except OSError as exc:
        raise OutputError(f"Cannot prepare {path}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise OutputError(f"Cannot write {path}: {exc}") from exc
    logger.debug("Wrote %d bytes to %s", len(text), path)
