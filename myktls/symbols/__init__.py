"""
Symbol layer: scope model, builder, import resolution and declaration lookup.
"""

from __future__ import annotations

from .builder import SymbolTableBuilder, build_symbol_table
from .imports import (
	ImportNotFound,
	ImportReadFailure,
	ImportResolutionError,
	ImportResolver,
	compute_base_uri,
	ensure_path,
	resolve_imports,
)
from .locator import Definition, definition_at, enclosing_scope, find_declaration, locate
from .ranges import MalformedNode, range_of
from .scope import DeclarationLocation, Scope, Symbol, SymbolKind, SymbolTable

__all__ = [
	"DeclarationLocation",
	"Definition",
	"ImportNotFound",
	"ImportReadFailure",
	"ImportResolutionError",
	"ImportResolver",
	"MalformedNode",
	"Scope",
	"Symbol",
	"SymbolKind",
	"SymbolTable",
	"SymbolTableBuilder",
	"build_symbol_table",
	"compute_base_uri",
	"definition_at",
	"enclosing_scope",
	"ensure_path",
	"find_declaration",
	"locate",
	"range_of",
	"resolve_imports",
]
