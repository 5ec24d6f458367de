# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Compact one-line dumps of types and symbols for diagnostics and errors."""

from __future__ import annotations

import json

from .type_model import (
	PRIMITIVE_OBJECT_FLAGS,
	PRIMITIVE_SYMBOL_FLAGS,
	PRIMITIVE_TYPE_FLAGS,
	TYPE_LITERAL_SYMBOL_NAME,
	Symbol,
	Type,
	TypeFlags,
)


def _flag_label(flag) -> str:
	"""`STRING_LITERAL` -> `StringLiteral`, matching the engine's spelling."""
	return "".join(part.capitalize() for part in flag.name.split("_"))


def type_to_debug_string(ty: Type) -> str:
	"""
	Describe a type as `{type flags:0x.. Kind... object:Sub... symbol.name:".."}`.

	Object sub-kinds are only listed for plain object types (flags exactly
	OBJECT). The synthetic `__type` name of anonymous literals is omitted.
	"""
	flags = int(ty.flags)
	out = f"flags:0x{flags:x}"
	for flag in PRIMITIVE_TYPE_FLAGS:
		if flags & flag:
			out += f" {_flag_label(flag)}"

	if flags == TypeFlags.OBJECT:
		object_flags = int(getattr(ty, "object_flags", 0) or 0)
		for flag in PRIMITIVE_OBJECT_FLAGS:
			if object_flags & flag:
				out += f" object:{_flag_label(flag)}"

	symbol = getattr(ty, "symbol", None)
	if symbol is not None and symbol.name != TYPE_LITERAL_SYMBOL_NAME:
		out += f" symbol.name:{json.dumps(symbol.name)}"

	if getattr(ty, "pattern", None):
		out += " destructuring:true"

	return f"{{type {out}}}"


def symbol_to_debug_string(symbol: Symbol) -> str:
	"""Describe a symbol as `"name" flags:0x.. Role...`."""
	flags = int(symbol.flags)
	out = f"{json.dumps(symbol.name)} flags:0x{flags:x}"
	for flag in PRIMITIVE_SYMBOL_FLAGS:
		if flags & flag:
			out += f" {_flag_label(flag)}"
	return out


__all__ = ["symbol_to_debug_string", "type_to_debug_string"]
