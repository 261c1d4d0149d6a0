# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Cross-file import resolution.

`import foo` names the file `foo.mykt` next to the importing document;
`import lib.foo` names `lib/foo.mykt` under the same directory. A found file
is parsed and its declarations are folded into the importing session's global
scope, each symbol carrying the imported file's own URI.

Missing or unreadable imports never abort the session: they become warning
diagnostics and the file's symbols are simply absent.

Each file is folded at most once per session. That covers diamonds
(`a -> b, a -> c, b -> c`) and cycles (`a -> b -> a`) alike.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Callable, List, Sequence, Set
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from lark.exceptions import UnexpectedInput

from myktls.core.diagnostics import Diagnostic
from myktls.core.span import Span
from myktls.parser import SyntaxNode, import_headers, import_name, parse_source

from .builder import SymbolTableBuilder
from .ranges import range_of

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".mykt"

# `/C:/x` or `\C:\x`: a drive path with one separator too many in front.
_SPURIOUS_DRIVE_PREFIX = re.compile(r"^[\\/](?=[A-Za-z]:)")


class ImportResolutionError(Exception):
	"""Base for recoverable import failures; carries the candidate path."""

	def __init__(self, message: str, *, path: Path) -> None:
		super().__init__(message)
		self.path = path


class ImportNotFound(ImportResolutionError):
	def __init__(self, path: Path) -> None:
		super().__init__(f"Imported file not found: {path}", path=path)


class ImportReadFailure(ImportResolutionError):
	def __init__(self, path: Path, cause: BaseException) -> None:
		super().__init__(f"Cannot read from imported file {path}: {cause}", path=path)
		self.cause = cause


def compute_base_uri(uri: str) -> str:
	"""Strip the last path segment, keeping the trailing separator (`""` if there is none)."""
	sep = uri.rfind("/")
	if sep < 0:
		return ""
	return uri[: sep + 1]


def ensure_path(uri_or_path: str) -> Path:
	"""
	Turn a `file:` URI or a plain path into an absolute filesystem path.

	Percent-decoding a Windows file URI yields `/C:/...`; the leading separator
	is dropped. UNC paths (`\\\\server\\share`) are left alone.
	"""
	if uri_or_path.startswith("file:"):
		parsed = urlparse(uri_or_path)
		raw = unquote(parsed.path)
		if parsed.netloc and parsed.netloc != "localhost":
			raw = f"//{parsed.netloc}{raw}"
		decoded = url2pathname(raw) if os.name == "nt" else raw
		if not decoded.startswith(("\\\\", "//")):
			decoded = _SPURIOUS_DRIVE_PREFIX.sub("", decoded)
		return Path(decoded)
	if not os.path.isabs(uri_or_path):
		return Path(os.path.abspath(uri_or_path))
	return Path(uri_or_path)


def import_relative_path(name: str, extension: str = DEFAULT_EXTENSION) -> str:
	"""`lib.helper` -> `lib/helper.mykt` (always `/`-separated, URI friendly)."""
	return "/".join(name.split(".")) + extension


class ImportResolver:
	"""
	Per-session import resolver.

	Holds the visited set and the collected diagnostics for one analysis of a
	top-level document; create a new resolver for every re-analysis.
	"""

	def __init__(
		self,
		*,
		extension: str = DEFAULT_EXTENSION,
		transitive: bool = True,
		parse: Callable[[str], SyntaxNode] = parse_source,
	) -> None:
		self.extension = extension
		self.transitive = transitive
		self._parse = parse
		self.diagnostics: List[Diagnostic] = []
		self._visited: Set[str] = set()

	def mark_visited(self, uri: str) -> None:
		self._visited.add(self._key(ensure_path(uri)))

	def resolve_imports(
		self,
		imports: Sequence[SyntaxNode],
		builder: SymbolTableBuilder,
		document_uri: str,
	) -> None:
		"""Fold every import of `document_uri` into `builder`'s table, in order."""
		base_uri = compute_base_uri(document_uri)
		base_path = ensure_path(base_uri)
		for header in imports:
			relative = import_relative_path(import_name(header), self.extension)
			path = base_path.joinpath(*relative.split("/"))
			import_uri = base_uri + relative
			try:
				self._process_import(path, import_uri, builder)
			except ImportResolutionError as err:
				if isinstance(err, ImportReadFailure):
					logger.warning("%s", err, exc_info=err.cause)
				else:
					logger.info("%s", err)
				self.diagnostics.append(
					Diagnostic(
						message=str(err),
						code="import-not-found" if isinstance(err, ImportNotFound) else "import-read-failure",
						phase="imports",
						severity="warning",
						span=Span.from_range(document_uri, range_of(header)),
					)
				)

	def _process_import(self, path: Path, import_uri: str, builder: SymbolTableBuilder) -> None:
		try:
			exists = path.exists()
		except OSError as err:
			# e.g. a name longer than the filesystem allows, or no search permission
			raise ImportReadFailure(path, err) from err
		if not exists:
			raise ImportNotFound(path)
		key = self._key(path)
		if key in self._visited:
			logger.debug("skipping %s: already folded into this session", path)
			return
		self._visited.add(key)
		tree = self._load(path)
		if self.transitive:
			self.resolve_imports(import_headers(tree), builder, import_uri)
		builder.visit(tree, import_uri)

	def _load(self, path: Path) -> SyntaxNode:
		try:
			return self._parse(path.read_text(encoding="utf-8"))
		except (OSError, UnicodeDecodeError, UnexpectedInput) as err:
			raise ImportReadFailure(path, err) from err

	@staticmethod
	def _key(path: Path) -> str:
		return os.path.normcase(os.path.abspath(path))


def resolve_imports(
	imports: Sequence[SyntaxNode],
	builder: SymbolTableBuilder,
	document_uri: str,
	*,
	extension: str = DEFAULT_EXTENSION,
) -> List[Diagnostic]:
	"""One-shot helper: resolve `imports` for `document_uri` and return the warnings."""
	resolver = ImportResolver(extension=extension)
	resolver.mark_visited(document_uri)
	resolver.resolve_imports(imports, builder, document_uri)
	return resolver.diagnostics


__all__ = [
	"DEFAULT_EXTENSION",
	"ImportNotFound",
	"ImportReadFailure",
	"ImportResolutionError",
	"ImportResolver",
	"compute_base_uri",
	"ensure_path",
	"import_relative_path",
	"resolve_imports",
]
