from __future__ import annotations

from pathlib import Path
from typing import List

from lark import Lark

from .tree import SyntaxNode, from_lark

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


# `keep_all_tokens` keeps keywords and punctuation in the tree so declaration
# ranges span the whole construct (`fun` through the closing brace).
_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="kotlin_file",
	propagate_positions=True,
	maybe_placeholders=False,
	keep_all_tokens=True,
)


def parse_source(source: str) -> SyntaxNode:
	"""
	Parse `.mykt` source text into a parent-linked syntax tree.

	Raises `lark.exceptions.UnexpectedInput` on syntax errors; callers turn
	that into a diagnostic.
	"""
	tree = _PARSER.parse(source)
	return from_lark(tree)


def parse_file(path: Path) -> SyntaxNode:
	return parse_source(path.read_text(encoding="utf-8"))


def import_headers(tree: SyntaxNode) -> List[SyntaxNode]:
	"""Return the `import_header` nodes of a file's preamble, in source order."""
	preamble = tree.child("preamble")
	if preamble is None:
		return []
	return preamble.children_of_kind("import_header")


def import_name(header: SyntaxNode) -> str:
	"""Dotted name of an import header, e.g. `lib.helper`."""
	ident = header.child("identifier")
	if ident is None:
		raise ValueError("import header without identifier")
	return ident.text
