"""
Top-level document analysis: parse, resolve imports, build the scope tree.

Imports are folded before the document's own declarations, so the main file
can use an imported symbol regardless of where the use appears. Imports and
the main file share one `SymbolTable`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from lark.exceptions import UnexpectedInput
from lsprotocol import types as lsp

from myktls.config import Settings
from myktls.core.diagnostics import Diagnostic
from myktls.core.span import Span
from myktls.parser import SyntaxNode, import_headers, parse_source
from myktls.symbols import Definition, ImportResolver, SymbolTable, SymbolTableBuilder, definition_at

logger = logging.getLogger(__name__)


@dataclass
class AnalyzedDocument:
	uri: str
	source: str
	# None when the document itself failed to parse.
	tree: Optional[SyntaxNode]
	table: SymbolTable
	diagnostics: List[Diagnostic] = field(default_factory=list)

	def definition(self, position: lsp.Position) -> Optional[Definition]:
		if self.tree is None:
			return None
		return definition_at(self.tree, self.table, position)


def _syntax_diagnostic(uri: str, err: UnexpectedInput) -> Diagnostic:
	line = getattr(err, "line", None)
	column = getattr(err, "column", None)
	span = Span(file=uri)
	if isinstance(line, int) and isinstance(column, int) and line > 0:
		# lark reports 1-based line and column.
		span = Span(file=uri, line=line - 1, column=max(column - 1, 0))
	first_line = str(err).strip().splitlines()[0] if str(err).strip() else "syntax error"
	return Diagnostic(message=f"syntax error: {first_line}", code="syntax", phase="parser", span=span)


def analyze_document(uri: str, source: str, settings: Optional[Settings] = None) -> AnalyzedDocument:
	settings = settings or Settings()
	table = SymbolTable()
	try:
		tree = parse_source(source)
	except UnexpectedInput as err:
		logger.info("parse of %s failed: %s", uri, err)
		return AnalyzedDocument(uri=uri, source=source, tree=None, table=table, diagnostics=[_syntax_diagnostic(uri, err)])

	builder = SymbolTableBuilder(table)
	resolver = ImportResolver(
		extension=settings.file_extension,
		transitive=settings.follow_transitive_imports,
	)
	resolver.mark_visited(uri)
	resolver.resolve_imports(import_headers(tree), builder, uri)
	builder.visit(tree, uri)
	logger.debug("analyzed %s: %d scopes", uri, sum(1 for _ in table.scopes()))
	return AnalyzedDocument(uri=uri, source=source, tree=tree, table=table, diagnostics=list(resolver.diagnostics))


__all__ = ["AnalyzedDocument", "analyze_document"]
