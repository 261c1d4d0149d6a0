# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration lookup along the lexical scope chain.

Given the identifier under the cursor: climb the syntax tree to the nearest
node that anchors a scope (the global scope if none does), then search that
scope and each enclosing one for a symbol with the identifier's name. Names
are matched across all symbol kinds.

"Not found" is a result (`None`), not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lsprotocol import types as lsp

from myktls.parser.tree import SyntaxNode, terminal_at

from .ranges import range_of
from .scope import DeclarationLocation, Scope, Symbol, SymbolTable

IDENTIFIER_KINDS = frozenset({"NAME", "simple_identifier"})


@dataclass(frozen=True)
class Definition:
	"""A resolved reference: the declaration and the span of the identifier that named it."""

	symbol: Symbol
	location: DeclarationLocation
	origin_selection_range: lsp.Range

	def to_location_link(self) -> lsp.LocationLink:
		return self.location.to_location_link(self.origin_selection_range)


def enclosing_scope(node: SyntaxNode, table: SymbolTable) -> Scope:
	for ancestor in node.ancestors():
		scope = table.scope_for(ancestor)
		if scope is not None:
			return scope
	return table.root


def find_declaration(name: str, scope: Scope) -> Optional[Symbol]:
	for candidate in scope.chain():
		sym = candidate.lookup_local(name)
		# Entries without a recorded location cannot be navigated to.
		if sym is not None and sym.location is not None:
			return sym
	return None


def locate(identifier: SyntaxNode, table: SymbolTable) -> Optional[Definition]:
	sym = find_declaration(identifier.text, enclosing_scope(identifier, table))
	if sym is None:
		return None
	return Definition(symbol=sym, location=sym.location, origin_selection_range=range_of(identifier))


def definition_at(tree: SyntaxNode, table: SymbolTable, position: lsp.Position) -> Optional[Definition]:
	"""Resolve the identifier at a zero-based editor position, if there is one."""
	node = terminal_at(tree, position.line, position.character)
	if node is None or node.kind not in IDENTIFIER_KINDS:
		return None
	return locate(node, table)


__all__ = ["Definition", "definition_at", "enclosing_scope", "find_declaration", "locate"]
