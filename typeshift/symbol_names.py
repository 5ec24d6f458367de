# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Symbol -> output-dialect name.

Names come from two places: an explicit alias table (e.g. a symbol imported
under a generated module prefix), or the engine's own qualified display of the
symbol, captured fragment by fragment through a `StringSymbolWriter`.

The engine's plain `typeToString`-style helpers are not usable here: they
render `Array<T>` as `T[]` and drop namespace qualifiers.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from typeshift.core.type_model import Symbol, SymbolFlags, TypeChecker


class StringSymbolWriter:
	"""Single-line text accumulator for the engine's symbol display."""

	def __init__(self) -> None:
		self._parts: List[str] = []

	def text(self) -> str:
		return "".join(self._parts)

	def _write(self, text: str) -> None:
		self._parts.append(text)

	def write_keyword(self, text: str) -> None:
		self._write(text)

	def write_operator(self, text: str) -> None:
		self._write(text)

	def write_punctuation(self, text: str) -> None:
		self._write(text)

	def write_space(self, text: str) -> None:
		self._write(text)

	def write_string_literal(self, text: str) -> None:
		self._write(text)

	def write_parameter(self, text: str) -> None:
		self._write(text)

	def write_property(self, text: str) -> None:
		self._write(text)

	def write_symbol(self, text: str, symbol: Symbol | None = None) -> None:
		self._write(text)

	# Layout and bookkeeping signals carry no text.
	def write_line(self) -> None:
		return None

	def increase_indent(self) -> None:
		return None

	def decrease_indent(self) -> None:
		return None

	def clear(self) -> None:
		return None

	def track_symbol(self, symbol: Symbol, enclosing_declaration: Any = None, meaning: SymbolFlags | None = None) -> None:
		return None

	def report_inaccessible_this_error(self) -> None:
		return None


class SymbolAliases:
	"""
	Symbol -> name table keyed by object identity.

	Engine symbols are not required to be hashable, and two distinct symbols
	may compare equal structurally; only `is` identity counts here.
	"""

	def __init__(self, entries: Mapping[Any, str] | Iterable[Tuple[Any, str]] | None = None) -> None:
		self._by_id: Dict[int, Tuple[Symbol, str]] = {}
		if entries is None:
			return
		if isinstance(entries, SymbolAliases):
			self._by_id = dict(entries._by_id)
			return
		items = entries.items() if isinstance(entries, Mapping) else entries
		for symbol, name in items:
			self.set(symbol, name)

	def set(self, symbol: Symbol, name: str) -> None:
		self._by_id[id(symbol)] = (symbol, name)

	def get(self, symbol: Symbol) -> Optional[str]:
		entry = self._by_id.get(id(symbol))
		if entry is None or entry[0] is not symbol:
			return None
		return entry[1]

	def __contains__(self, symbol: object) -> bool:
		entry = self._by_id.get(id(symbol))
		return entry is not None and entry[0] is symbol

	def __len__(self) -> int:
		return len(self._by_id)

	def __iter__(self) -> Iterator[Tuple[Symbol, str]]:
		return iter(self._by_id.values())


class SymbolNamer:
	"""Resolves symbols to names relative to one anchor node."""

	def __init__(self, checker: TypeChecker, node: Any, aliases: SymbolAliases | None = None) -> None:
		self.checker = checker
		self.node = node
		self.aliases = aliases if aliases is not None else SymbolAliases()

	def symbol_to_string(self, symbol: Symbol) -> str:
		alias = self.aliases.get(symbol)
		if alias:
			return alias
		writer = StringSymbolWriter()
		self.checker.build_symbol_display(symbol, writer, self.node)
		return writer.text()


__all__ = ["StringSymbolWriter", "SymbolAliases", "SymbolNamer"]
