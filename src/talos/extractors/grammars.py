"""Grammar registry -- maps file extensions to tree-sitter grammars and queries.

The registry is built once per process and is read-only afterwards, so it can
be shared by extraction worker threads without locking.
"""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

import tree_sitter_css
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Query, QueryError

from ..errors import QueryCompileError
from .queries import CSS_QUERY, JAVASCRIPT_QUERY, TYPESCRIPT_QUERY
from .signatures import SCRIPT_RULES, STYLE_RULES, Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grammar:
    """A parser definition bound to its fixed query program and rule table."""

    tag: str
    language: Language
    query: Query
    rules: tuple[Rule, ...]


@dataclass(frozen=True)
class _GrammarSpec:
    tag: str
    load: Callable[[], object]
    query: str
    rules: tuple[Rule, ...]


_SPECS: tuple[_GrammarSpec, ...] = (
    _GrammarSpec("javascript", tree_sitter_javascript.language, JAVASCRIPT_QUERY, SCRIPT_RULES),
    _GrammarSpec("typescript", tree_sitter_typescript.language_typescript, TYPESCRIPT_QUERY, SCRIPT_RULES),
    _GrammarSpec("typescript-with-jsx", tree_sitter_typescript.language_tsx, TYPESCRIPT_QUERY, SCRIPT_RULES),
    _GrammarSpec("css", tree_sitter_css.language, CSS_QUERY, STYLE_RULES),
)

# Extension (lowercase, no dot) -> language tag.
LANGUAGE_EXTENSIONS: Mapping[str, str] = MappingProxyType({
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "typescript-with-jsx",
    "css": "css",
})

_build_lock = threading.Lock()


def _compile(spec: _GrammarSpec) -> Grammar:
    language = Language(spec.load())
    try:
        query = Query(language, spec.query)
    except QueryError as exc:
        raise QueryCompileError(spec.tag, str(exc)) from exc
    logger.debug("Loaded %s grammar (%d query patterns)", spec.tag, query.pattern_count)
    return Grammar(tag=spec.tag, language=language, query=query, rules=spec.rules)


@functools.lru_cache(maxsize=None)
def _registry() -> Mapping[str, Grammar]:
    return MappingProxyType({spec.tag: _compile(spec) for spec in _SPECS})


def load_grammars() -> Mapping[str, Grammar]:
    """Build (first call only) and return the read-only tag -> grammar map.

    Raises :class:`QueryCompileError` if a built-in query is malformed.
    """
    with _build_lock:
        return _registry()


def grammar_for_tag(tag: str) -> Grammar | None:
    return load_grammars().get(tag)


def resolve(extension: str) -> Grammar | None:
    """Return the grammar registered for *extension*, or ``None``.

    Case-insensitive; a leading dot is ignored.
    """
    tag = LANGUAGE_EXTENSIONS.get(extension.lstrip(".").lower())
    if tag is None:
        return None
    return grammar_for_tag(tag)
