# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parent-linked syntax tree consumed by the symbol layer.

Lark trees carry no parent links and use 1-based columns. The adapter here
rebuilds the parse as `SyntaxNode`s whose tokens follow the usual
parser-generator convention: 1-based line, 0-based column. Rule nodes remember
their first and last token (`start`/`stop`); terminal nodes carry a single
`token`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from lark import Token as LarkToken, Tree


@dataclass(frozen=True)
class Token:
	"""A lexical token with its source position (line is 1-based, column 0-based)."""

	type: str
	text: str
	line: int
	column: int

	@classmethod
	def from_lark(cls, tok: LarkToken) -> "Token":
		return cls(type=tok.type, text=str(tok), line=tok.line, column=tok.column - 1)


@dataclass(eq=False)
class SyntaxNode:
	"""
	One node of the syntax tree.

	`kind` is the grammar rule name for rule nodes and the token type for
	terminals. Nodes compare by identity so they can key scope lookups.
	"""

	kind: str
	children: List["SyntaxNode"] = field(default_factory=list)
	start: Optional[Token] = None
	stop: Optional[Token] = None
	token: Optional[Token] = None
	parent: Optional["SyntaxNode"] = field(default=None, repr=False)

	@property
	def is_terminal(self) -> bool:
		return self.token is not None

	@property
	def text(self) -> str:
		"""Concatenated text of every token under this node (whitespace is not kept)."""
		if self.token is not None:
			return self.token.text
		return "".join(t.token.text for t in self.terminals())

	def child(self, kind: str) -> Optional["SyntaxNode"]:
		return next((c for c in self.children if c.kind == kind), None)

	def children_of_kind(self, kind: str) -> List["SyntaxNode"]:
		return [c for c in self.children if c.kind == kind]

	def walk(self) -> Iterator["SyntaxNode"]:
		"""Pre-order traversal in document order."""
		stack = [self]
		while stack:
			node = stack.pop()
			yield node
			stack.extend(reversed(node.children))

	def terminals(self) -> Iterator["SyntaxNode"]:
		return (n for n in self.walk() if n.token is not None)

	def ancestors(self) -> Iterator["SyntaxNode"]:
		"""This node followed by each parent up to the root."""
		node: Optional[SyntaxNode] = self
		while node is not None:
			yield node
			node = node.parent


def _node_for(item: Tree | LarkToken, parent: Optional[SyntaxNode]) -> SyntaxNode:
	if isinstance(item, LarkToken):
		tok = Token.from_lark(item)
		return SyntaxNode(kind=tok.type, start=tok, stop=tok, token=tok, parent=parent)
	return SyntaxNode(kind=str(item.data), parent=parent)


def from_lark(tree: Tree | LarkToken, parent: Optional[SyntaxNode] = None) -> SyntaxNode:
	"""
	Convert a lark parse (built with `keep_all_tokens`) into a `SyntaxNode` tree.

	Runs on an explicit stack: deeply nested expressions must not hit the
	interpreter's recursion limit.
	"""
	root = _node_for(tree, parent)
	order: List[SyntaxNode] = []
	stack = [(root, tree)]
	while stack:
		node, source = stack.pop()
		order.append(node)
		if isinstance(source, Tree):
			node.children = [_node_for(child, node) for child in source.children]
			stack.extend(zip(node.children, source.children))
	# Parents precede their descendants in `order`, so walk it backwards.
	for node in reversed(order):
		if node.children:
			# Empty rule nodes (e.g. a file without imports) have no tokens at all.
			node.start = next((c.start for c in node.children if c.start is not None), None)
			node.stop = next((c.stop for c in reversed(node.children) if c.stop is not None), None)
	return root


def terminal_at(root: SyntaxNode, line: int, character: int) -> Optional[SyntaxNode]:
	"""
	Find the terminal under a zero-based caret position.

	A caret touching the end of a token still counts as inside it (the caret
	right after `foo` resolves `foo`). When two tokens touch the caret, a NAME
	token wins over punctuation.
	"""
	target_line = line + 1
	best: Optional[SyntaxNode] = None
	for node in root.walk():
		tok = node.token
		if tok is None or tok.line < target_line:
			continue
		if tok.line > target_line:
			break
		if tok.column <= character <= tok.column + len(tok.text):
			if best is None or (best.kind != "NAME" and node.kind == "NAME"):
				best = node
		elif tok.column > character:
			break
	return best


__all__ = ["Token", "SyntaxNode", "from_lark", "terminal_at"]
