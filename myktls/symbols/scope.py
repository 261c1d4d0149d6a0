# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Scope/symbol model.

A `SymbolTable` owns every `Scope` built for one analysis session. Scopes
nest through a weak `parent` link; the root (global) scope has no parent and
no anchor node. Imported files fold their declarations into the same root,
so there is no per-module namespace.

Whether an entry introduces a scope is plain data (`Symbol.scope`), not a
subclass relationship.
"""

from __future__ import annotations

import enum
import weakref
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from lsprotocol import types as lsp

from myktls.parser.tree import SyntaxNode


class SymbolKind(enum.Enum):
	VARIABLE = "variable"
	ROUTINE = "routine"
	PARAMETER = "parameter"


@dataclass(frozen=True)
class DeclarationLocation:
	"""Where a symbol is declared: whole declaration, just its name, and the owning document."""

	uri: str
	range: lsp.Range
	name_range: lsp.Range

	def to_location_link(self, origin_selection_range: Optional[lsp.Range] = None) -> lsp.LocationLink:
		return lsp.LocationLink(
			target_uri=self.uri,
			target_range=self.range,
			target_selection_range=self.name_range,
			origin_selection_range=origin_selection_range,
		)


@dataclass(eq=False)
class Symbol:
	name: str
	kind: SymbolKind
	location: Optional[DeclarationLocation] = None
	# Scope opened by this declaration (routine bodies); None for plain entries.
	scope: Optional["Scope"] = field(default=None, repr=False)

	@property
	def introduces_scope(self) -> bool:
		return self.scope is not None


class Scope:
	"""A lexical container of symbols."""

	def __init__(self, anchor: Optional[SyntaxNode] = None, parent: Optional["Scope"] = None) -> None:
		self.anchor = anchor
		self.symbols: Dict[str, Symbol] = {}
		self.children: List[Scope] = []
		self._parent = weakref.ref(parent) if parent is not None else None

	@property
	def parent(self) -> Optional["Scope"]:
		return self._parent() if self._parent is not None else None

	@property
	def is_root(self) -> bool:
		return self._parent is None

	def define(self, sym: Symbol) -> Symbol:
		# Redeclaring a name in the same scope replaces the earlier entry.
		self.symbols[sym.name] = sym
		return sym

	def lookup_local(self, name: str) -> Optional[Symbol]:
		return self.symbols.get(name)

	def chain(self) -> Iterator["Scope"]:
		"""This scope, then each enclosing scope up to the root."""
		cur: Optional[Scope] = self
		while cur is not None:
			yield cur
			cur = cur.parent

	def __repr__(self) -> str:
		anchor = self.anchor.kind if self.anchor is not None else "<global>"
		return f"Scope({anchor}, symbols={list(self.symbols)})"


class SymbolTable:
	"""The scope tree for one analysis session, rooted at the global scope."""

	def __init__(self) -> None:
		self.root = Scope()
		self._by_anchor: Dict[SyntaxNode, Scope] = {}

	def new_scope(self, parent: Scope, anchor: SyntaxNode) -> Scope:
		scope = Scope(anchor=anchor, parent=parent)
		parent.children.append(scope)
		self._by_anchor[anchor] = scope
		return scope

	def scope_for(self, node: SyntaxNode) -> Optional[Scope]:
		"""The scope anchored at exactly this node, if any."""
		return self._by_anchor.get(node)

	def scopes(self) -> Iterator[Scope]:
		"""Every scope, root first, in declaration order."""
		stack = [self.root]
		while stack:
			scope = stack.pop()
			yield scope
			stack.extend(reversed(scope.children))

	def symbols(self) -> Iterator[Symbol]:
		for scope in self.scopes():
			yield from scope.symbols.values()

	def dump(self) -> Dict[str, Any]:
		"""JSON-friendly nested view of the scope tree."""

		def _range(rng: lsp.Range) -> List[int]:
			return [rng.start.line, rng.start.character, rng.end.line, rng.end.character]

		def _scope(scope: Scope) -> Dict[str, Any]:
			entries = []
			for sym in scope.symbols.values():
				entry: Dict[str, Any] = {"name": sym.name, "kind": sym.kind.value}
				if sym.location is not None:
					entry["uri"] = sym.location.uri
					entry["range"] = _range(sym.location.range)
					entry["name_range"] = _range(sym.location.name_range)
				entries.append(entry)
			return {
				"anchor": scope.anchor.kind if scope.anchor is not None else None,
				"symbols": entries,
				"scopes": [_scope(child) for child in scope.children],
			}

		return _scope(self.root)


__all__ = ["DeclarationLocation", "Scope", "Symbol", "SymbolKind", "SymbolTable"]
