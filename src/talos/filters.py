"""Pathspec-backed include/exclude filters and ``.gitignore`` handling.

All paths are matched in their root-relative, forward-slash form using
gitignore pattern semantics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from pathspec import GitIgnoreSpec, PathSpec

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Version control, build output, dependencies, coverage.
DEFAULT_EXCLUDES: tuple[str, ...] = (".git/", "node_modules/", "dist/", "coverage/")


def _compile(kind: str, patterns: Sequence[str]) -> PathSpec:
    try:
        return PathSpec.from_lines("gitignore", patterns)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"Invalid {kind} glob: {exc}") from exc


@dataclass(frozen=True)
class PathFilters:
    """Compiled include and exclude globs."""

    include_spec: PathSpec | None
    exclude_spec: PathSpec

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        return self.exclude_spec.match_file(rel_path + "/" if is_dir else rel_path)

    def accepts(self, rel_path: str) -> bool:
        """Exclude always wins; no include globs means include everything."""
        if self.is_excluded(rel_path):
            return False
        if self.include_spec is None:
            return True
        return self.include_spec.match_file(rel_path)


def build_filters(include: Iterable[str], exclude: Iterable[str]) -> PathFilters:
    """Compile user globs plus the built-in excludes.

    Raises :class:`ConfigError` for a malformed pattern.
    """
    include_lines = [p for p in include if p.strip()]
    exclude_lines = [*DEFAULT_EXCLUDES, *(p for p in exclude if p.strip())]
    return PathFilters(
        include_spec=_compile("include", include_lines) if include_lines else None,
        exclude_spec=_compile("exclude", exclude_lines),
    )


# --------------------------------------------------------------------------
# Version-control ignore rules
# --------------------------------------------------------------------------

def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return []


def find_repo_top(root: Path) -> Path | None:
    """Return the nearest directory at or above *root* holding a ``.git`` entry."""
    for candidate in (root, *root.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def resolve_git_dir(repo_top: Path) -> Path | None:
    """Locate the git directory, following a ``gitdir:`` file for worktrees and submodules."""
    git_entry = repo_top / ".git"
    if git_entry.is_dir():
        return git_entry
    if not git_entry.is_file():
        return None
    for raw_line in _read_lines(git_entry):
        stripped = raw_line.strip()
        if stripped.startswith("gitdir:"):
            git_dir = Path(stripped[len("gitdir:"):].strip())
            if not git_dir.is_absolute():
                git_dir = (repo_top / git_dir).resolve()
            return git_dir
    return None


@dataclass(frozen=True)
class _IgnoreLayer:
    base: str  # repo-relative directory the rules are anchored to ("" for the top)
    spec: GitIgnoreSpec


@dataclass
class IgnoreRules:
    """Stack of ignore layers, from ``info/exclude`` down to the deepest ``.gitignore``.

    Paths are given relative to the scan root and matched relative to the
    repository top, so ``.gitignore`` files above the scan root still apply.
    The deepest layer with a matching rule decides, which lets a nested
    ``!pattern`` re-include what a parent ignores.
    """

    prefix: str = ""  # scan root relative to the repository top, "" or "sub/dir/"
    layers: list[_IgnoreLayer] = field(default_factory=list)

    @classmethod
    def for_root(cls, root: Path) -> IgnoreRules:
        repo_top = find_repo_top(root)
        if repo_top is None:
            rules = cls()
            rules._add("", _read_lines(root / ".gitignore"))
            return rules

        rel_root = root.relative_to(repo_top).as_posix()
        rules = cls(prefix="" if rel_root == "." else rel_root + "/")
        git_dir = resolve_git_dir(repo_top)
        if git_dir is not None:
            rules._add("", _read_lines(git_dir / "info" / "exclude"))

        rules._add("", _read_lines(repo_top / ".gitignore"))
        current = repo_top
        for part in root.relative_to(repo_top).parts:
            current = current / part
            rules._add(current.relative_to(repo_top).as_posix(), _read_lines(current / ".gitignore"))
        return rules

    def _add(self, base: str, lines: list[str]) -> None:
        lines = [line for line in lines if line.strip()]
        if not lines:
            return
        try:
            spec = GitIgnoreSpec.from_lines(lines)
        except ValueError as exc:
            logger.warning("Ignoring unreadable ignore rules in %s: %s", base or ".", exc)
            return
        self.layers.append(_IgnoreLayer(base=base, spec=spec))

    def enter(self, rel_dir: str, abs_dir: Path) -> None:
        """Load ``abs_dir/.gitignore`` for a directory below the scan root."""
        if rel_dir:
            self._add(self.prefix + rel_dir, _read_lines(abs_dir / ".gitignore"))

    def is_ignored(self, rel_path: str, *, is_dir: bool = False) -> bool:
        repo_path = self.prefix + rel_path
        # Layers are stored top-down, so walking them backwards visits the
        # deepest applicable one first.
        for layer in reversed(self.layers):
            if layer.base:
                anchor = layer.base + "/"
                if not repo_path.startswith(anchor):
                    continue
                local = repo_path[len(anchor):]
            else:
                local = repo_path
            result = layer.spec.check_file(local + "/" if is_dir else local)
            if result.include is not None:
                return result.include
        return False
