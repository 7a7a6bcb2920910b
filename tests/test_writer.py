"""Tests for output target resolution and atomic writes."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from talos import writer
from talos.errors import OutputError
from talos.models import Document
from talos.writer import STDOUT, resolve_output, write_output


@pytest.fixture
def document() -> Document:
    return Document(last_updated="2026-01-01T00:00:00Z")


class TestResolveOutput:
    def test_dash_is_stdout(self, tmp_path: Path):
        assert resolve_output("-", tmp_path) == STDOUT

    def test_default_inside_input_dir(self, tmp_path: Path):
        assert resolve_output(None, tmp_path) == tmp_path / "talos.json"

    def test_explicit_path(self, tmp_path: Path):
        assert resolve_output("out/index.json", tmp_path) == Path("out/index.json")


class TestWriteOutput:
    def test_stdout_stream(self, document: Document):
        buf = io.StringIO()
        write_output(document, STDOUT, stream=buf)
        text = buf.getvalue()
        assert text.endswith("\n")
        assert json.loads(text)["schema_version"] == "1.0"

    def test_creates_parent_directories(self, document: Document, tmp_path: Path):
        target = tmp_path / "a" / "b" / "talos.json"
        write_output(document, target)
        assert json.loads(target.read_text(encoding="utf-8"))["directories"] == []

    def test_replaces_existing_file(self, document: Document, tmp_path: Path):
        target = tmp_path / "talos.json"
        target.write_text("old", encoding="utf-8")
        write_output(document, target)
        assert target.read_text(encoding="utf-8") == document.to_json()
        assert [p.name for p in tmp_path.iterdir()] == ["talos.json"]

    def test_failed_rename_keeps_previous_file(
        self, document: Document, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        target = tmp_path / "talos.json"
        target.write_text("previous", encoding="utf-8")

        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(writer.os, "replace", boom)
        with pytest.raises(OutputError, match="disk full"):
            write_output(document, target)
        assert target.read_text(encoding="utf-8") == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["talos.json"]

    def test_unwritable_parent(self, document: Document, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(OutputError):
            write_output(document, blocker / "talos.json")
