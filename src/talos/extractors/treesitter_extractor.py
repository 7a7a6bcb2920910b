"""Tree-sitter signature extractor for JavaScript, TypeScript, TSX and CSS.

Pipeline per file: parse -> run the grammar's query -> classify and render
each match -> dedupe and sort.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from tree_sitter import Node, Parser, QueryCursor, Tree

from ..errors import ParseError, ReadError
from .grammars import Grammar, resolve
from .signatures import CaptureGroup, classify, dedupe_sorted

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------
# Syntax parser
# --------------------------------------------------------------------------

def parse(source: bytes, grammar: Grammar) -> Tree:
    """Build a syntax tree for *source*.

    Raises :class:`ParseError` when the source is not UTF-8 or the grammar
    cannot produce a root node.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"source is not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc

    parser = Parser(grammar.language)
    try:
        tree = parser.parse(source)
    except ValueError as exc:
        raise ParseError(f"{grammar.tag} parser rejected the source: {exc}") from exc
    if tree is None or tree.root_node is None:
        raise ParseError(f"{grammar.tag} parser produced no syntax tree")
    return tree


# --------------------------------------------------------------------------
# Query engine
# --------------------------------------------------------------------------

def _span(nodes: list[Node]) -> tuple[int, int]:
    return min(n.start_byte for n in nodes), max(n.end_byte for n in nodes)


def run_query(grammar: Grammar, tree: Tree) -> Iterator[CaptureGroup]:
    """Yield one capture group per query match, in tree traversal order.

    A capture name bound to several nodes in one match covers the span from
    the first node's start to the last node's end.
    """
    cursor = QueryCursor(grammar.query)
    for _pattern_index, captures in cursor.matches(tree.root_node):
        yield {name: _span(nodes) for name, nodes in captures.items() if nodes}


def extract_signatures(source: bytes, grammar: Grammar) -> list[str]:
    """Return the sorted, unique signatures declared in *source*."""
    tree = parse(source, grammar)
    rendered = []
    for group in run_query(grammar, tree):
        signature = classify(group, source, grammar.rules)
        if signature is not None:
            rendered.append(signature.render())
    return dedupe_sorted(rendered)


# --------------------------------------------------------------------------
# Extractor class
# --------------------------------------------------------------------------

class TreeSitterExtractor:
    """Extract signatures from source files using tree-sitter grammars."""

    def extract_file(self, abs_path: Path) -> list[str]:
        grammar = resolve(abs_path.suffix)
        if grammar is None:
            return []

        try:
            source = abs_path.read_bytes()
        except OSError as exc:
            raise ReadError(exc.strerror or str(exc)) from exc

        signatures = extract_signatures(source, grammar)
        logger.debug("%s: %d signature(s) via %s", abs_path, len(signatures), grammar.tag)
        return signatures
