# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tree-walking symbol builder.

Walks a syntax tree depth-first in document order and registers one symbol
per declaration. A routine's own symbol lands in the enclosing scope before
its body is walked; the body is walked inside a fresh child scope anchored at
the routine node.

The owning document URI and the current scope are arguments of the walk, not
fields on the builder, so one builder can fold several files (the main
document plus its imports) into a shared table without any rebinding.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from myktls.parser.tree import SyntaxNode

from .ranges import range_of
from .scope import DeclarationLocation, Scope, Symbol, SymbolKind, SymbolTable

logger = logging.getLogger(__name__)


class SymbolTableBuilder:
	def __init__(self, table: SymbolTable | None = None) -> None:
		self.table = table if table is not None else SymbolTable()
		# A handler returns the scope its node's children are walked in, or
		# None when they hold nothing to declare.
		self._handlers: Dict[str, Callable[[SyntaxNode, Scope, str], Optional[Scope]]] = {
			"variable_declaration": self._visit_variable_declaration,
			"function_declaration": self._visit_function_declaration,
			"function_value_parameter": self._visit_function_value_parameter,
		}

	def visit(self, tree: SyntaxNode, document_uri: str) -> SymbolTable:
		"""Fold every declaration of `tree` into the table's global scope."""
		stack = [(tree, self.table.root)]
		while stack:
			node, scope = stack.pop()
			handler = self._handlers.get(node.kind)
			inner = handler(node, scope, document_uri) if handler is not None else scope
			if inner is None:
				continue
			# Reversed so that children pop in document order.
			stack.extend((child, inner) for child in reversed(node.children) if child.token is None)
		return self.table

	def _visit_variable_declaration(self, node: SyntaxNode, scope: Scope, uri: str) -> Scope:
		self._declare(node, scope, uri, SymbolKind.VARIABLE)
		return scope

	def _visit_function_value_parameter(self, node: SyntaxNode, scope: Scope, uri: str) -> None:
		self._declare(node, scope, uri, SymbolKind.PARAMETER)

	def _visit_function_declaration(self, node: SyntaxNode, scope: Scope, uri: str) -> Scope:
		sym = self._declare(node, scope, uri, SymbolKind.ROUTINE)
		sym.scope = self.table.new_scope(scope, node)
		return sym.scope

	def _declare(self, node: SyntaxNode, scope: Scope, uri: str, kind: SymbolKind) -> Symbol:
		name_node = node.child("simple_identifier")
		if name_node is None:
			raise ValueError(f"{node.kind} without a name")
		location = DeclarationLocation(uri=uri, range=range_of(node), name_range=range_of(name_node))
		if name_node.text in scope.symbols:
			logger.debug("redeclaration of '%s' in %r replaces the earlier entry", name_node.text, scope)
		return scope.define(Symbol(name=name_node.text, kind=kind, location=location))


def build_symbol_table(tree: SyntaxNode, document_uri: str) -> SymbolTable:
	"""Build a fresh table for a single tree (no import resolution)."""
	return SymbolTableBuilder().visit(tree, document_uri)


__all__ = ["SymbolTableBuilder", "build_symbol_table"]
