# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Load a type graph (plus translator configuration) from JSON.

Layout:

  {
    "symbols":    {"<id>": {"name": "Foo", "flags": ["class"],
                            "declarations": ["a.ts", {"path": "b.ts", "line": 3}],
                            "members": {"x": "<symbol id>"}, "parent": "<symbol id>",
                            "type": "<type id>"}},
    "types":      {"<id>": {"flags": ["object"], "object_flags": ["class"],
                            "symbol": "<symbol id>", "target": "<type id>",
                            "type_arguments": [...], "types": [...],
                            "call_signatures": [...], "construct_signatures": [...],
                            "string_index": "<type id>", "number_index": "<type id>"}},
    "signatures": {"<id>": {"parameters": ["<symbol id>"], "return_type": "<type id>"}},
    "translate":  ["<type id>", ...],
    "aliases":    {"<symbol id>": "prefix.Foo"},
    "blacklist":  ["<path>", ...]
  }

Flag names match enum members case-insensitively, with or without
underscores (`string_literal`, `StringLiteral`). Nodes are created first and
linked second, so the graph may be cyclic.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path
from typing import Any, Dict, List, Mapping, Type as PyType, TypeVar

from typeshift.core.type_graph import GraphDeclaration, GraphSignature, GraphSymbol, GraphType, TypeGraph
from typeshift.core.type_model import ObjectFlags, SymbolFlags, TypeFlags
from typeshift.errors import GraphFormatError
from typeshift.symbol_names import SymbolAliases
from typeshift.type_translator import TranslatorOptions

F = TypeVar("F", bound=IntFlag)


@dataclass
class LoadedGraph:
	"""A parsed graph plus the translator configuration stored alongside it."""

	graph: TypeGraph
	types: Dict[str, GraphType] = field(default_factory=dict)
	symbols: Dict[str, GraphSymbol] = field(default_factory=dict)
	signatures: Dict[str, GraphSignature] = field(default_factory=dict)
	translate: List[str] = field(default_factory=list)
	aliases: SymbolAliases = field(default_factory=SymbolAliases)
	blacklist: List[str] | None = None

	def options(self, extra_blacklist: List[str] | None = None) -> TranslatorOptions:
		paths: frozenset[str] | None = None
		if self.blacklist is not None or extra_blacklist:
			paths = frozenset([*(self.blacklist or []), *(extra_blacklist or [])])
		return TranslatorOptions(path_blacklist=paths, symbol_aliases=self.aliases)


def _norm(name: str) -> str:
	return name.replace("_", "").lower()


def parse_flags(enum_cls: PyType[F], raw: Any, where: str) -> F:
	"""Parse a list of flag names (or a raw int) into `enum_cls`."""
	if raw is None:
		return enum_cls(0)
	if isinstance(raw, int) and not isinstance(raw, bool):
		return enum_cls(raw)
	if isinstance(raw, str):
		raw = [raw]
	if not isinstance(raw, list):
		raise GraphFormatError(f"{where}: flags must be a list of names or an integer")
	by_name = {_norm(member.name): member for member in enum_cls.__members__.values()}
	value = enum_cls(0)
	for item in raw:
		member = by_name.get(_norm(str(item)))
		if member is None:
			raise GraphFormatError(f"{where}: unknown {enum_cls.__name__} name {item!r}")
		value |= member
	return value


class _Linker:
	def __init__(self, doc: Mapping[str, Any]) -> None:
		self.doc = doc
		self.out = LoadedGraph(graph=TypeGraph())

	def _section(self, name: str) -> Mapping[str, Any]:
		section = self.doc.get(name, {})
		if not isinstance(section, Mapping):
			raise GraphFormatError(f"'{name}' must be an object keyed by id")
		return section

	def _type(self, ref: Any, where: str) -> GraphType:
		ty = self.out.types.get(str(ref))
		if ty is None:
			raise GraphFormatError(f"{where}: unknown type id {ref!r}")
		return ty

	def _symbol(self, ref: Any, where: str) -> GraphSymbol:
		sym = self.out.symbols.get(str(ref))
		if sym is None:
			raise GraphFormatError(f"{where}: unknown symbol id {ref!r}")
		return sym

	def _signature(self, ref: Any, where: str) -> GraphSignature:
		sig = self.out.signatures.get(str(ref))
		if sig is None:
			raise GraphFormatError(f"{where}: unknown signature id {ref!r}")
		return sig

	def create(self) -> None:
		for sid, entry in self._section("symbols").items():
			where = f"symbols.{sid}"
			if not isinstance(entry, Mapping) or "name" not in entry:
				raise GraphFormatError(f"{where}: symbol needs a name")
			self.out.symbols[sid] = GraphSymbol(
				name=str(entry["name"]),
				flags=parse_flags(SymbolFlags, entry.get("flags"), where),
				declarations=self._declarations(entry.get("declarations"), where),
			)
		for tid, entry in self._section("types").items():
			where = f"types.{tid}"
			if not isinstance(entry, Mapping):
				raise GraphFormatError(f"{where}: type entry must be an object")
			self.out.types[tid] = GraphType(
				flags=parse_flags(TypeFlags, entry.get("flags"), where),
				object_flags=parse_flags(ObjectFlags, entry.get("object_flags"), where),
				value=entry.get("value"),
				pattern=entry.get("pattern"),
			)
		for gid, entry in self._section("signatures").items():
			if not isinstance(entry, Mapping):
				raise GraphFormatError(f"signatures.{gid}: signature entry must be an object")
			self.out.signatures[gid] = GraphSignature()

	def _id_list(self, entry: Mapping[str, Any], key: str, where: str) -> List[Any]:
		refs = entry.get(key)
		if refs is None:
			return []
		if not isinstance(refs, list):
			raise GraphFormatError(f"{where}: '{key}' must be a list of ids")
		return refs

	def _declarations(self, raw: Any, where: str) -> List[GraphDeclaration] | None:
		if raw is None:
			return None
		if not isinstance(raw, list):
			raise GraphFormatError(f"{where}: declarations must be a list")
		decls: List[GraphDeclaration] = []
		for item in raw:
			if isinstance(item, str):
				decls.append(GraphDeclaration(source_path=item))
			elif isinstance(item, Mapping) and "path" in item:
				decls.append(GraphDeclaration(source_path=str(item["path"]), line=item.get("line"), column=item.get("column")))
			else:
				raise GraphFormatError(f"{where}: declaration must be a path or an object with 'path'")
		return decls

	def link(self) -> None:
		graph = self.out.graph
		for sid, entry in self._section("symbols").items():
			where = f"symbols.{sid}"
			sym = self.out.symbols[sid]
			if entry.get("parent") is not None:
				sym.parent = self._symbol(entry["parent"], where)
			members = entry.get("members")
			if members is not None:
				if not isinstance(members, Mapping):
					raise GraphFormatError(f"{where}: members must be an object")
				sym.members = {str(name): self._symbol(ref, f"{where}.members.{name}") for name, ref in members.items()}
			if entry.get("type") is not None:
				graph.set_symbol_type(sym, self._type(entry["type"], where))

		for tid, entry in self._section("types").items():
			where = f"types.{tid}"
			ty = self.out.types[tid]
			if entry.get("symbol") is not None:
				ty.symbol = self._symbol(entry["symbol"], where)
			if entry.get("target") is not None:
				ty.target = self._type(entry["target"], where)
			if entry.get("type_arguments") is not None:
				ty.type_arguments = [self._type(ref, where) for ref in self._id_list(entry, "type_arguments", where)]
			ty.types = [self._type(ref, where) for ref in self._id_list(entry, "types", where)]
			ty.call_signatures = [self._signature(ref, where) for ref in self._id_list(entry, "call_signatures", where)]
			ty.construct_signatures = [self._signature(ref, where) for ref in self._id_list(entry, "construct_signatures", where)]
			if entry.get("string_index") is not None:
				ty.string_index_type = self._type(entry["string_index"], where)
			if entry.get("number_index") is not None:
				ty.number_index_type = self._type(entry["number_index"], where)

		for gid, entry in self._section("signatures").items():
			where = f"signatures.{gid}"
			sig = self.out.signatures[gid]
			sig.parameters = [self._symbol(ref, where) for ref in self._id_list(entry, "parameters", where)]
			if entry.get("return_type") is not None:
				sig.return_type = self._type(entry["return_type"], where)

		translate = self.doc.get("translate")
		if translate is None:
			translate = list(self.out.types)
		elif not isinstance(translate, list):
			raise GraphFormatError("'translate' must be a list of type ids")
		for ref in translate:
			self._type(ref, "translate")
		self.out.translate = [str(ref) for ref in translate]

		for sid, name in self._section("aliases").items():
			self.out.aliases.set(self._symbol(sid, "aliases"), str(name))

		blacklist = self.doc.get("blacklist")
		if blacklist is not None:
			if not isinstance(blacklist, list):
				raise GraphFormatError("'blacklist' must be a list of paths")
			self.out.blacklist = [str(path) for path in blacklist]


def load_graph(doc: Mapping[str, Any]) -> LoadedGraph:
	"""Build a LoadedGraph from an already-decoded JSON document."""
	if not isinstance(doc, Mapping):
		raise GraphFormatError("type graph document must be a JSON object")
	linker = _Linker(doc)
	linker.create()
	linker.link()
	return linker.out


def load_graph_file(path: Path) -> LoadedGraph:
	try:
		doc = json.loads(path.read_text(encoding="utf-8"))
	except UnicodeDecodeError as err:
		raise GraphFormatError(f"{path}: not UTF-8 text: {err}") from err
	except json.JSONDecodeError as err:
		raise GraphFormatError(f"{path}: invalid JSON: {err}") from err
	return load_graph(doc)


__all__ = ["LoadedGraph", "load_graph", "load_graph_file", "parse_flags"]
