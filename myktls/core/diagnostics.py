"""
Common diagnostic structure for parsing and import resolution.

None of these are fatal: a diagnostic describes why a scope tree is
incomplete, it never aborts the analysis session.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lsprotocol import types as lsp

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a user-facing diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Where the diagnostic came from: "parser" or "imports".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def message_type(self) -> lsp.MessageType:
		"""`window/showMessage` type for this severity."""
		if self.severity == "error":
			return lsp.MessageType.Error
		if self.severity == "warning":
			return lsp.MessageType.Warning
		return lsp.MessageType.Info

	def format(self) -> str:
		"""One-line human form: `file:line:col: severity: message`."""
		text = f"{self.span.format_short()}: {self.severity}: {self.message}"
		if self.notes:
			text += "".join(f"\n  note: {n}" for n in self.notes)
		return text


__all__ = ["Diagnostic"]
