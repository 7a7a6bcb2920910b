"""Pydantic models for talos's scan report and configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

SCHEMA_VERSION = "1.0"

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "jsx", "ts", "tsx", "css")


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class FileEntry(BaseModel):
    """Signatures extracted from one source file."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    relative_file_path: str  # forward slashes, relative to the scan root
    last_scanned: str
    signatures: list[str] = Field(default_factory=list)
    summary: str | None = None


class DirectoryEntry(BaseModel):
    """All reported files sharing one parent directory."""

    model_config = ConfigDict(frozen=True)

    directory_path: str  # "." for the scan root
    files: list[FileEntry]


class ErrorEntry(BaseModel):
    """A file whose extraction failed."""

    model_config = ConfigDict(frozen=True)

    path: str
    error: str


class Document(BaseModel):
    """The complete result of one scan."""

    model_config = ConfigDict(frozen=True)

    schema_version: str = SCHEMA_VERSION
    last_updated: str
    directories: list[DirectoryEntry] = Field(default_factory=list)
    errors: list[ErrorEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize with two-space indentation, omitting absent summaries."""
        return self.model_dump_json(indent=2, exclude_none=True)

    @property
    def file_count(self) -> int:
        return sum(len(d.files) for d in self.directories)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def _normalize_extensions(values: list[str]) -> list[str]:
    seen: list[str] = []
    for raw in values:
        ext = raw.strip().lstrip(".").lower()
        if ext and ext not in seen:
            seen.append(ext)
    return seen


def parse_extensions(text: str) -> list[str]:
    """Parse a comma-separated extension list such as ``"js, .TSX"``.

    Raises :class:`ConfigError` when nothing usable remains.
    """
    exts = _normalize_extensions(text.split(","))
    if not exts:
        raise ConfigError(f"No valid extensions provided in {text!r}")
    return exts


class ScanOptions(BaseModel):
    """What to scan and how to report it.

    Built by the CLI from flags (or environment variables); the scanner
    treats it as read-only.
    """

    model_config = ConfigDict(frozen=True)

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    """Allowed file extensions, lowercase and without the leading dot."""

    include: list[str] = Field(default_factory=list)
    """Include globs. Empty means every file is a candidate."""

    exclude: list[str] = Field(default_factory=list)
    """Exclude globs, added to the built-in defaults. Exclude beats include."""

    max_file_size: int | None = Field(default=None, ge=0)
    """Files larger than this many bytes are skipped."""

    terse: bool = False
    """Drop files that produced no signatures."""

    jobs: int = Field(default=1, ge=1)
    """Worker threads used for per-file extraction."""

    @field_validator("extensions")
    @classmethod
    def _check_extensions(cls, value: list[str]) -> list[str]:
        exts = _normalize_extensions(value)
        if not exts:
            raise ValueError("at least one file extension is required")
        return exts

    @field_validator("include", "exclude")
    @classmethod
    def _drop_blank_globs(cls, value: list[str]) -> list[str]:
        return [pattern for pattern in value if pattern.strip()]

    def allows_extension(self, ext: str) -> bool:
        return ext.lstrip(".").lower() in self.extensions
