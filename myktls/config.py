# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Server settings.

Settings come from two places: command-line flags when the process starts,
and the client's `initializationOptions` during `initialize`. Options the
client does not send keep their current value.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from myktls.symbols.imports import DEFAULT_EXTENSION

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
	file_extension: str = DEFAULT_EXTENSION
	follow_transitive_imports: bool = True
	log_level: str = "warning"

	def merged(self, options: Optional[Mapping[str, Any]]) -> "Settings":
		"""Apply LSP `initializationOptions` (camelCase keys) on top of these settings."""
		if not options:
			return self
		updated = self
		ext = options.get("fileExtension")
		if isinstance(ext, str) and ext:
			updated = replace(updated, file_extension=ext if ext.startswith(".") else f".{ext}")
		follow = options.get("followTransitiveImports")
		if isinstance(follow, bool):
			updated = replace(updated, follow_transitive_imports=follow)
		level = options.get("logLevel")
		if isinstance(level, str) and _level_number(level) is not None:
			updated = replace(updated, log_level=level.lower())
		return updated


def _level_number(name: str) -> Optional[int]:
	level = getattr(logging, name.upper(), None)
	return level if isinstance(level, int) else None


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
	"""
	Route log records to stderr or `log_file`.

	stdout carries the LSP stream when serving over stdio, so nothing may log
	there. A root logger that already has handlers is left as it is.
	"""
	if log_file:
		logging.basicConfig(format=LOG_FORMAT, filename=log_file, encoding="utf-8")
	else:
		logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
	apply_log_level(level)


def apply_log_level(level: str) -> None:
	number = _level_number(level)
	if number is not None:
		logging.getLogger().setLevel(number)


__all__ = ["LOG_FORMAT", "Settings", "apply_log_level", "configure_logging"]
