"""
mykt language server.

Registers the LSP handlers on a pygls server: document lifecycle events keep
the analysis cache honest, and `textDocument/definition` answers with a
`LocationLink` (reference span + declaration span).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterable, List, Optional

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from myktls import __version__
from myktls.cache import DocumentCache
from myktls.config import Settings, apply_log_level
from myktls.core.diagnostics import Diagnostic

logger = logging.getLogger(__name__)


class MyktLanguageServer(LanguageServer):
	def __init__(self, settings: Optional[Settings] = None) -> None:
		super().__init__(
			"myktls",
			__version__,
			text_document_sync_kind=lsp.TextDocumentSyncKind.Incremental,
		)
		self.cache = DocumentCache(settings, reporter=self.report_diagnostics)

	def report_diagnostics(self, uri: str, diagnostics: Iterable[Diagnostic]) -> None:
		"""Surface non-fatal analysis problems as user-visible messages."""
		for diag in diagnostics:
			logger.info("%s", diag.format())
			self.window_show_message(lsp.ShowMessageParams(type=diag.message_type, message=diag.message))

	def document_source(self, uri: str) -> str:
		return self.workspace.get_text_document(uri).source

	def find_definition(self, uri: str, position: lsp.Position) -> Optional[List[lsp.LocationLink]]:
		analyzed = self.cache.ensure_parsed(uri, self.document_source(uri))
		found = analyzed.definition(position)
		if found is None:
			return None
		return [found.to_location_link()]


server = MyktLanguageServer()


@server.feature(lsp.INITIALIZE)
def on_initialize(ls: MyktLanguageServer, params: lsp.InitializeParams) -> None:
	options = params.initialization_options
	if isinstance(options, Mapping):
		settings = ls.cache.settings.merged(options)
		apply_log_level(settings.log_level)
		ls.cache.configure(settings)
		logger.info("settings: %s", settings)


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: MyktLanguageServer, params: lsp.DidOpenTextDocumentParams) -> None:
	ls.cache.invalidate(params.text_document.uri)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: MyktLanguageServer, params: lsp.DidChangeTextDocumentParams) -> None:
	ls.cache.invalidate(params.text_document.uri)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: MyktLanguageServer, params: lsp.DidCloseTextDocumentParams) -> None:
	ls.cache.discard(params.text_document.uri)


@server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
def definition(ls: MyktLanguageServer, params: lsp.DefinitionParams) -> Optional[List[lsp.LocationLink]]:
	return ls.find_definition(params.text_document.uri, params.position)


__all__ = ["MyktLanguageServer", "server"]
