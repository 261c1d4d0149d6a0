# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source spans attached to import and syntax diagnostics.

Positions are zero-based and end-exclusive, matching what editors expect.
Every field is optional: a diagnostic about a file that could not be found
has a file but no line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lsprotocol import types as lsp


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None

	@classmethod
	def from_range(cls, file: Optional[str], rng: Optional[lsp.Range]) -> "Span":
		if rng is None:
			return cls(file=file)
		return cls(
			file=file,
			line=rng.start.line,
			column=rng.start.character,
			end_line=rng.end.line,
			end_column=rng.end.character,
		)

	def to_range(self) -> Optional[lsp.Range]:
		"""LSP range for this span, or None when the span has no position."""
		if self.line is None or self.column is None:
			return None
		end_line = self.end_line if self.end_line is not None else self.line
		end_column = self.end_column if self.end_column is not None else self.column
		return lsp.Range(
			start=lsp.Position(line=self.line, character=self.column),
			end=lsp.Position(line=end_line, character=end_column),
		)

	def format_short(self) -> str:
		"""`file:line:column` with 1-based numbers, for terminal output."""
		f = self.file or "<unknown>"
		if self.line is None:
			return f
		col = (self.column or 0) + 1
		return f"{f}:{self.line + 1}:{col}"


__all__ = ["Span"]
