# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Path-based suppression of symbols that must always be typed `?`."""

from __future__ import annotations

from typing import Callable, FrozenSet, Iterable

from typeshift.core.type_model import Symbol


class PathBlacklist:
	"""
	A set of source paths whose symbols never get a real type.

	A symbol is blacklisted only when *every* declaration lives under one of
	the paths; a symbol merged from a blacklisted file and a regular file stays
	translatable.
	"""

	def __init__(self, paths: Iterable[str]) -> None:
		self.paths: FrozenSet[str] = frozenset(paths)

	def __contains__(self, path: object) -> bool:
		return path in self.paths

	def __len__(self) -> int:
		return len(self.paths)

	def is_blacklisted(self, symbol: Symbol, warn: Callable[[str], None]) -> bool:
		declarations = symbol.declarations
		if not declarations:
			warn("symbol has no declarations")
			return True
		return all(decl.source_path in self.paths for decl in declarations)


__all__ = ["PathBlacklist"]
