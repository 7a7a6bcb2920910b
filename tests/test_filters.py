"""Tests for glob filters and ignore rules."""

from __future__ import annotations

import warnings
from pathlib import Path

from talos.filters import DEFAULT_EXCLUDES, IgnoreRules, build_filters, find_repo_top, resolve_git_dir


class TestPathFilters:
    def test_no_include_accepts_everything_not_excluded(self):
        filters = build_filters([], [])
        assert filters.include_spec is None
        assert filters.accepts("src/app.ts")
        assert not filters.accepts("node_modules/react/index.js")

    def test_defaults_match_at_any_depth(self):
        filters = build_filters([], [])
        for excluded in ("node_modules/a.js", "pkg/dist/b.js", "coverage/c.js", ".git/d.js"):
            assert not filters.accepts(excluded), excluded

    def test_directory_match(self):
        filters = build_filters([], ["generated/"])
        assert filters.is_excluded("generated", is_dir=True)
        assert not filters.is_excluded("generated")
        assert not filters.accepts("generated/x.js")

    def test_exclude_dominates_include(self):
        filters = build_filters(["**/*.ts"], ["*.spec.ts"])
        assert filters.accepts("src/a.ts")
        assert not filters.accepts("src/a.spec.ts")

    def test_blank_patterns_ignored(self):
        filters = build_filters(["  ", ""], ["", " "])
        assert filters.include_spec is None
        assert filters.accepts("a.js")

    def test_default_excludes_cover_expected_dirs(self):
        assert {".git/", "node_modules/", "dist/", "coverage/"} == set(DEFAULT_EXCLUDES)

    def test_compiles_without_deprecation_warnings(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            filters = build_filters(["src/**/*.ts"], ["*.spec.ts"])
        assert filters.accepts("src/a.ts")


class TestIgnoreRules:
    def test_no_files_no_layers(self, tmp_path: Path):
        rules = IgnoreRules.for_root(tmp_path)
        assert rules.layers == []
        assert not rules.is_ignored("anything.js")

    def test_root_rules(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("# comment\n\n*.gen.js\ntmp/\n", encoding="utf-8")
        rules = IgnoreRules.for_root(tmp_path)
        assert rules.is_ignored("a.gen.js")
        assert rules.is_ignored("deep/b.gen.js")
        assert rules.is_ignored("tmp", is_dir=True)
        assert not rules.is_ignored("a.js")

    def test_nested_rules_only_apply_below_their_directory(self, tmp_path: Path):
        sub = tmp_path / "pkg"
        sub.mkdir()
        (sub / ".gitignore").write_text("/local.js\n", encoding="utf-8")
        rules = IgnoreRules.for_root(tmp_path)
        rules.enter("pkg", sub)
        assert rules.is_ignored("pkg/local.js")
        assert not rules.is_ignored("pkg/nested/local.js")
        assert not rules.is_ignored("local.js")
        assert not rules.is_ignored("pkgx/local.js")

    def test_deeper_layer_decides(self, tmp_path: Path):
        sub = tmp_path / "pkg"
        sub.mkdir()
        (tmp_path / ".gitignore").write_text("*.gen.js\n", encoding="utf-8")
        (sub / ".gitignore").write_text("!keep.gen.js\n", encoding="utf-8")
        rules = IgnoreRules.for_root(tmp_path)
        rules.enter("pkg", sub)
        assert not rules.is_ignored("pkg/keep.gen.js")
        assert rules.is_ignored("pkg/other.gen.js")
        assert rules.is_ignored("keep.gen.js")

    def test_gitignore_overrides_info_exclude(self, tmp_path: Path):
        (tmp_path / ".git" / "info").mkdir(parents=True)
        (tmp_path / ".git" / "info" / "exclude").write_text("*.local.js\n", encoding="utf-8")
        (tmp_path / ".gitignore").write_text("!shared.local.js\n", encoding="utf-8")
        rules = IgnoreRules.for_root(tmp_path)
        assert rules.is_ignored("mine.local.js")
        assert not rules.is_ignored("shared.local.js")

    def test_paths_matched_relative_to_repo_top(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".gitignore").write_text("/app/build/\n", encoding="utf-8")
        root = tmp_path / "app"
        root.mkdir()
        rules = IgnoreRules.for_root(root)
        assert rules.prefix == "app/"
        assert rules.is_ignored("build", is_dir=True)
        assert not rules.is_ignored("src/build.js")


class TestRepoDiscovery:
    def test_find_repo_top_walks_upwards(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        assert find_repo_top(deep) == tmp_path
        assert find_repo_top(tmp_path) == tmp_path

    def test_git_directory(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert resolve_git_dir(tmp_path) == tmp_path / ".git"

    def test_gitdir_file(self, tmp_path: Path):
        target = tmp_path / "store" / "worktrees" / "wt"
        target.mkdir(parents=True)
        wt = tmp_path / "wt"
        wt.mkdir()
        (wt / ".git").write_text("gitdir: ../store/worktrees/wt\n", encoding="utf-8")
        assert resolve_git_dir(wt) == target.resolve()

    def test_no_git_entry(self, tmp_path: Path):
        assert resolve_git_dir(tmp_path) is None
