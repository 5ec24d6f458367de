# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Helpers that look at where symbols are declared."""

from __future__ import annotations

import re
from typing import Any

from typeshift.errors import UncheckedSourceError

from .type_model import Symbol

# `lib.d.ts`, `lib.es2015.d.ts`, `node_modules/typescript/lib/lib.dom.d.ts`, ...
_BUILTIN_LIB_DTS = re.compile(r"\blib\.(?:[^/]+\.)?d\.ts$")


def is_builtin_lib_dts(path: str) -> bool:
	"""True when `path` names one of the engine's builtin lib definition files."""
	return _BUILTIN_LIB_DTS.search(path) is not None


def is_closure_provided_type(symbol: Symbol) -> bool:
	"""
	True when some declaration of `symbol` comes from a builtin lib file.

	Such types (`Array`, `Map`, DOM types) are assumed to line up with the
	annotation dialect's own definitions of the same name; nothing checks it.
	"""
	declarations = symbol.declarations
	if not declarations:
		return False
	return any(is_builtin_lib_dts(decl.source_path) for decl in declarations)


def assert_type_checked(source_file: Any) -> None:
	"""Raise unless the engine has resolved the modules of `source_file`."""
	if getattr(source_file, "resolved_modules", None) is None:
		name = getattr(source_file, "file_name", None) or getattr(source_file, "source_path", None) or "<source>"
		raise UncheckedSourceError(f"must provide typechecked program: {name} has no resolved modules")


__all__ = ["assert_type_checked", "is_builtin_lib_dts", "is_closure_provided_type"]
