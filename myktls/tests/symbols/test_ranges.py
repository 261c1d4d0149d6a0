from __future__ import annotations

import pytest
from lsprotocol import types as lsp

from myktls.parser import parse_source
from myktls.symbols import MalformedNode, range_of


def _rng(sl: int, sc: int, el: int, ec: int) -> lsp.Range:
	return lsp.Range(start=lsp.Position(line=sl, character=sc), end=lsp.Position(line=el, character=ec))


def test_range_is_zero_based_and_end_exclusive():
	tree = parse_source("val x = 10\n")
	decl = tree.children_of_kind("statement")[0].child("variable_declaration")

	assert range_of(decl) == _rng(0, 0, 0, 10)
	assert range_of(decl.child("simple_identifier")) == _rng(0, 4, 0, 5)


def test_range_spans_lines_up_to_the_stop_token():
	source = "fun f() {\n    val y = 2\n}\n"
	tree = parse_source(source)
	fn = tree.children_of_kind("statement")[0].child("function_declaration")

	assert range_of(fn) == _rng(0, 0, 2, 1)


def test_terminal_uses_its_own_token():
	tree = parse_source("val longer_name = 1")
	name = next(n for n in tree.terminals() if n.kind == "NAME")

	assert range_of(name) == _rng(0, 4, 0, 15)


def test_node_without_tokens_is_malformed():
	tree = parse_source("val x = 1")
	preamble = tree.child("preamble")

	with pytest.raises(MalformedNode) as excinfo:
		range_of(preamble)
	assert excinfo.value.node is preamble
