# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line entry point.

  python -m myktls serve [--tcp --host H --port P]   run the language server
  python -m myktls definition FILE LINE CHARACTER     resolve one position (0-based)
  python -m myktls symbols FILE                       dump the scope tree as JSON

Diagnostics go to stderr; JSON results go to stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from lsprotocol import types as lsp
from lsprotocol.converters import get_converter

from myktls import __version__
from myktls.analysis import AnalyzedDocument, analyze_document
from myktls.config import Settings, configure_logging


def _build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="myktls", description="mykt language server")
	parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	parser.add_argument("--log-level", default="warning", help="logging level (default: warning)")
	parser.add_argument("--log-file", default=None, help="write logs to this file instead of stderr")
	parser.add_argument("--extension", default=Settings.file_extension, help="import file extension")
	parser.add_argument(
		"--no-transitive-imports",
		action="store_true",
		help="only fold the main document's direct imports",
	)
	sub = parser.add_subparsers(dest="command")

	serve = sub.add_parser("serve", help="run the language server (default)")
	serve.add_argument("--tcp", action="store_true", help="listen on TCP instead of stdio")
	serve.add_argument("--host", default="127.0.0.1")
	serve.add_argument("--port", type=int, default=2087)

	definition = sub.add_parser("definition", help="print the declaration bound at a position")
	definition.add_argument("file", type=Path)
	definition.add_argument("line", type=int, help="0-based line")
	definition.add_argument("character", type=int, help="0-based character")

	symbols = sub.add_parser("symbols", help="print the scope tree of a file")
	symbols.add_argument("file", type=Path)
	return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
	return Settings(
		file_extension=args.extension,
		follow_transitive_imports=not args.no_transitive_imports,
		log_level=args.log_level.lower(),
	)


def _analyze_file(path: Path, settings: Settings) -> AnalyzedDocument:
	uri = path.resolve().as_uri()
	analyzed = analyze_document(uri, path.read_text(encoding="utf-8"), settings)
	for diag in analyzed.diagnostics:
		print(diag.format(), file=sys.stderr)
	return analyzed


def _serve(args: argparse.Namespace, settings: Settings) -> int:
	from myktls.server import server

	server.cache.configure(settings)
	if args.tcp:
		server.start_tcp(args.host, args.port)
	else:
		server.start_io()
	return 0


def main(argv: Optional[List[str]] = None) -> int:
	parser = _build_arg_parser()
	args = parser.parse_args(argv)
	settings = _settings_from_args(args)
	configure_logging(settings.log_level, args.log_file)

	command = args.command or "serve"
	if command == "serve":
		if args.command is None:
			args.tcp = False
		return _serve(args, settings)

	if not args.file.is_file():
		print(f"{args.file}: no such file", file=sys.stderr)
		return 2
	analyzed = _analyze_file(args.file, settings)
	if analyzed.tree is None:
		return 2

	if command == "symbols":
		print(json.dumps(analyzed.table.dump(), indent=2))
		return 0

	found = analyzed.definition(lsp.Position(line=args.line, character=args.character))
	if found is None:
		return 1
	print(json.dumps(get_converter().unstructure(found.to_location_link()), indent=2))
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
