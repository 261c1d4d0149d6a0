from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from myktls.parser import Token, import_headers, import_name, parse_source, terminal_at


def test_parse_collects_imports_and_statements():
	source = """
import helper
import lib.util

val x = 1
fun f(a: Int): Int {
    return a
}
"""
	tree = parse_source(source)

	assert tree.kind == "kotlin_file"
	assert [import_name(h) for h in import_headers(tree)] == ["helper", "lib.util"]
	statements = tree.children_of_kind("statement")
	assert [s.children[0].kind for s in statements] == ["variable_declaration", "function_declaration"]


def test_tokens_use_one_based_lines_and_zero_based_columns():
	tree = parse_source("val answer = 42\n")
	name = next(n for n in tree.terminals() if n.kind == "NAME")

	assert name.token == Token(type="NAME", text="answer", line=1, column=4)


def test_rule_nodes_record_start_stop_and_parents():
	tree = parse_source("val answer = 42\n")
	decl = tree.children_of_kind("statement")[0].child("variable_declaration")
	name = next(n for n in tree.terminals() if n.kind == "NAME")

	assert decl is not None
	assert decl.start is not None and decl.start.text == "val"
	assert decl.stop is not None and decl.stop.text == "42"
	assert name.parent is not None and name.parent.kind == "simple_identifier"
	assert name.parent.parent is decl
	assert list(name.ancestors())[-1] is tree
	assert decl.text == "valanswer=42"


def test_file_without_imports_has_empty_preamble():
	tree = parse_source("val x = 1")
	preamble = tree.child("preamble")

	assert preamble is not None
	assert preamble.children == []
	assert preamble.start is None and preamble.stop is None
	assert import_headers(tree) == []


def test_keyword_prefix_is_still_an_identifier():
	tree = parse_source("val funny = 1")

	assert [n.text for n in tree.terminals() if n.kind == "NAME"] == ["funny"]


def test_comments_and_semicolons_are_accepted():
	source = """
// leading comment
val a = 1; val b = 2 /* trailing */
fun g() = a + b
"""
	tree = parse_source(source)

	names = [n.text for n in tree.terminals() if n.kind == "NAME"]
	assert names == ["a", "b", "g", "a", "b"]


def test_control_flow_parses():
	source = """
fun loop(n: Int) {
    var i = 0
    while (i < n) {
        if (i == 2) { i = i + 2 } else if (!(i > 5)) { i = i + 1 } else { return }
    }
}
"""
	tree = parse_source(source)

	kinds = {n.kind for n in tree.walk()}
	assert {"while_statement", "if_statement", "assignment", "return_statement", "unary_expression"} <= kinds


def test_syntax_error_raises_unexpected_input():
	with pytest.raises(UnexpectedInput):
		parse_source("fun (")


def test_terminal_at_prefers_identifiers_at_token_boundaries():
	tree = parse_source("fun greet() {}\ngreet()\n")

	call = terminal_at(tree, 1, 0)
	assert call is not None and call.text == "greet" and call.token.line == 2

	# Caret right after `greet` also touches `(`.
	boundary = terminal_at(tree, 1, 5)
	assert boundary is not None and boundary.kind == "NAME"

	keyword = terminal_at(tree, 0, 1)
	assert keyword is not None and keyword.kind == "FUN"

	assert terminal_at(tree, 5, 0) is None


def test_deeply_nested_expression_converts_without_recursion():
	depth = 600
	source = "val y = " + "(" * depth + "1" + ")" * depth + "\n"

	tree = parse_source(source)
	decl = next(n for n in tree.walk() if n.kind == "variable_declaration")

	assert sum(1 for n in tree.walk() if n.kind == "parenthesized_expression") == depth
	assert decl.start.text == "val"
	assert decl.stop.text == ")"
	assert decl.stop.column == len(source) - 2
	assert terminal_at(tree, 0, len(source) - 1).text == ")"
