"""
Parser front-end for `.mykt` sources.

Wraps a lark LALR parser and adapts its output to the parent-linked
`SyntaxNode` tree the symbol layer walks.
"""

from __future__ import annotations

from .parser import import_headers, import_name, parse_file, parse_source
from .tree import SyntaxNode, Token, terminal_at

__all__ = [
	"SyntaxNode",
	"Token",
	"import_headers",
	"import_name",
	"parse_file",
	"parse_source",
	"terminal_at",
]
