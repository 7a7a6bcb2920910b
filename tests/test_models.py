"""Tests for report models and scan configuration."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from talos.errors import ConfigError
from talos.models import (
    DEFAULT_EXTENSIONS,
    DirectoryEntry,
    Document,
    ErrorEntry,
    FileEntry,
    ScanOptions,
    parse_extensions,
)


class TestParseExtensions:
    def test_normalizes(self):
        assert parse_extensions(" JS, .tsx ,css,, js") == ["js", "tsx", "css"]

    @pytest.mark.parametrize("text", ["", " , ", ".", ",,."])
    def test_empty_is_config_error(self, text: str):
        with pytest.raises(ConfigError):
            parse_extensions(text)


class TestScanOptions:
    def test_defaults(self):
        options = ScanOptions()
        assert options.extensions == list(DEFAULT_EXTENSIONS)
        assert options.include == []
        assert options.exclude == []
        assert options.max_file_size is None
        assert options.terse is False
        assert options.jobs == 1

    def test_extensions_normalized(self):
        options = ScanOptions(extensions=[".TS", "ts", " css "])
        assert options.extensions == ["ts", "css"]
        assert options.allows_extension(".CSS")
        assert not options.allows_extension("js")

    def test_empty_extensions_rejected(self):
        with pytest.raises(ValidationError):
            ScanOptions(extensions=["", " . "])

    def test_blank_globs_dropped(self):
        options = ScanOptions(include=["src/**", "  "], exclude=[""])
        assert options.include == ["src/**"]
        assert options.exclude == []

    @pytest.mark.parametrize("field, value", [("max_file_size", -1), ("jobs", 0)])
    def test_bounds(self, field: str, value: int):
        with pytest.raises(ValidationError):
            ScanOptions(**{field: value})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ScanOptions().terse = True


class TestDocumentJson:
    def _doc(self, summary: str | None = None) -> Document:
        entry = FileEntry(
            file_name="a.js",
            relative_file_path="src/a.js",
            last_scanned="2026-01-01T00:00:00Z",
            signatures=["class A"],
            summary=summary,
        )
        return Document(
            last_updated="2026-01-01T00:00:00Z",
            directories=[DirectoryEntry(directory_path="src", files=[entry])],
            errors=[ErrorEntry(path="bad.js", error="Parse error: boom")],
        )

    def test_shape(self):
        data = json.loads(self._doc().to_json())
        assert list(data) == ["schema_version", "last_updated", "directories", "errors"]
        assert data["schema_version"] == "1.0"
        file_obj = data["directories"][0]["files"][0]
        assert file_obj == {
            "file_name": "a.js",
            "relative_file_path": "src/a.js",
            "last_scanned": "2026-01-01T00:00:00Z",
            "signatures": ["class A"],
        }
        assert data["errors"] == [{"path": "bad.js", "error": "Parse error: boom"}]

    def test_summary_included_when_present(self):
        data = json.loads(self._doc(summary="Entry point").to_json())
        assert data["directories"][0]["files"][0]["summary"] == "Entry point"

    def test_indented(self):
        assert self._doc().to_json().startswith('{\n  "schema_version"')

    def test_file_count(self):
        assert self._doc().file_count == 1
        assert Document(last_updated="t").file_count == 0
