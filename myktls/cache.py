# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-document analysis cache.

Maps a document URI to its latest `AnalyzedDocument`. Entries are built
lazily on the first query and dropped unconditionally when the document
changes; there is no incremental update. All access happens on the server's
single request thread, so there is no locking.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Optional

from myktls.analysis import AnalyzedDocument, analyze_document
from myktls.config import Settings
from myktls.core.diagnostics import Diagnostic

logger = logging.getLogger(__name__)

Reporter = Callable[[str, Iterable[Diagnostic]], None]


class DocumentCache:
	def __init__(self, settings: Optional[Settings] = None, reporter: Optional[Reporter] = None) -> None:
		self.settings = settings or Settings()
		self._reporter = reporter
		self._entries: Dict[str, AnalyzedDocument] = {}

	def get(self, uri: str) -> Optional[AnalyzedDocument]:
		return self._entries.get(uri)

	def ensure_parsed(self, uri: str, source: str) -> AnalyzedDocument:
		"""Return the cached analysis of `uri`, analyzing `source` if there is none."""
		entry = self._entries.get(uri)
		if entry is not None:
			return entry
		entry = analyze_document(uri, source, self.settings)
		self._entries[uri] = entry
		if entry.diagnostics and self._reporter is not None:
			self._reporter(uri, entry.diagnostics)
		return entry

	def invalidate(self, uri: str) -> None:
		"""Forget the analysis of `uri`; the next query re-parses."""
		if self._entries.pop(uri, None) is not None:
			logger.debug("invalidated %s", uri)

	def discard(self, uri: str) -> None:
		self._entries.pop(uri, None)

	def clear(self) -> None:
		self._entries.clear()

	def configure(self, settings: Settings) -> None:
		"""Swap settings; cached analyses were built with the old ones, so drop them."""
		self.settings = settings
		self.clear()

	def __contains__(self, uri: object) -> bool:
		return uri in self._entries

	def __len__(self) -> int:
		return len(self._entries)


__all__ = ["DocumentCache", "Reporter"]
