# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax-tree spans to editor ranges.

Tree tokens use 1-based lines and 0-based columns, inclusive of the stop
token. Editor ranges are 0-based on both axes and end-exclusive, so the end
is the stop token's column plus its length.
"""

from __future__ import annotations

from lsprotocol import types as lsp

from myktls.parser.tree import SyntaxNode


class MalformedNode(ValueError):
	"""
	A syntax node has no position metadata.

	Only empty rule nodes can end up here; the caller decides whether the
	missing range matters.
	"""

	def __init__(self, node: SyntaxNode) -> None:
		super().__init__(f"syntax node '{node.kind}' has no start/stop token")
		self.node = node


def range_of(node: SyntaxNode) -> lsp.Range:
	if node.token is not None:
		start = stop = node.token
	else:
		start, stop = node.start, node.stop
	if start is None or stop is None:
		raise MalformedNode(node)
	return lsp.Range(
		start=lsp.Position(line=start.line - 1, character=start.column),
		end=lsp.Position(line=stop.line - 1, character=stop.column + len(stop.text)),
	)


__all__ = ["MalformedNode", "range_of"]
