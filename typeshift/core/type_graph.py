# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
In-memory type graph implementing the engine-facing protocols.

`TypeGraph` plays the role of the type-checking engine for the CLI (which
loads graphs from JSON) and for tests. It owns plain mutable node objects and
answers the `TypeChecker` queries the translator makes. Nodes compare by
identity (`eq=False`), so they behave like engine handles: two structurally
equal literals are still two different types.

Canonical intrinsics (`any`, `string`, `boolean`, ...) are created once per
graph, mirroring how the engine shares them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .debug_strings import type_to_debug_string
from .type_model import (
	CALL_MEMBER_NAME,
	INDEX_MEMBER_NAME,
	TYPE_LITERAL_SYMBOL_NAME,
	IndexKind,
	ObjectFlags,
	SignatureKind,
	SymbolFlags,
	SymbolWriter,
	TypeFlags,
)

NEW_MEMBER_NAME = "__new"
FUNCTION_SYMBOL_NAME = "__function"


@dataclass(eq=False)
class GraphDeclaration:
	source_path: str
	line: Optional[int] = None
	column: Optional[int] = None


DeclSpec = Union[str, GraphDeclaration]


@dataclass(eq=False)
class GraphSymbol:
	name: str
	flags: SymbolFlags = SymbolFlags.NONE
	declarations: Optional[List[GraphDeclaration]] = None
	members: Optional[Dict[str, "GraphSymbol"]] = None
	# Enclosing namespace/module symbol, used for qualified display names.
	parent: Optional["GraphSymbol"] = None

	def __repr__(self) -> str:
		return f"GraphSymbol({self.name!r}, flags=0x{int(self.flags):x})"


@dataclass(eq=False)
class GraphSignature:
	parameters: List[GraphSymbol] = field(default_factory=list)
	return_type: Optional["GraphType"] = None


@dataclass(eq=False)
class GraphType:
	flags: TypeFlags
	object_flags: ObjectFlags = ObjectFlags.NONE
	symbol: Optional[GraphSymbol] = None
	target: Optional["GraphType"] = None
	type_arguments: Optional[List["GraphType"]] = None
	types: List["GraphType"] = field(default_factory=list)
	pattern: Any = None
	call_signatures: List[GraphSignature] = field(default_factory=list)
	construct_signatures: List[GraphSignature] = field(default_factory=list)
	string_index_type: Optional["GraphType"] = None
	number_index_type: Optional["GraphType"] = None
	value: Any = None  # literal value for literal types

	def get_construct_signatures(self) -> List[GraphSignature]:
		return list(self.construct_signatures)

	def __repr__(self) -> str:
		return f"GraphType{type_to_debug_string(self)}"


def _declarations(declared_in: Sequence[DeclSpec] | DeclSpec | None) -> Optional[List[GraphDeclaration]]:
	if declared_in is None:
		return None
	if isinstance(declared_in, (str, GraphDeclaration)):
		declared_in = [declared_in]
	out: List[GraphDeclaration] = []
	for decl in declared_in:
		out.append(decl if isinstance(decl, GraphDeclaration) else GraphDeclaration(source_path=decl))
	return out


class TypeGraph:
	"""Factory for graph nodes plus the `TypeChecker` view over them."""

	def __init__(self) -> None:
		self._intrinsics: Dict[TypeFlags, GraphType] = {}
		self._boolean: GraphType | None = None
		self._true: GraphType | None = None
		self._false: GraphType | None = None
		# id(symbol) -> (symbol, type); the symbol is kept alive so ids stay unique.
		self._symbol_types: Dict[int, Tuple[GraphSymbol, GraphType]] = {}

	# --- intrinsics -------------------------------------------------------

	def _intrinsic(self, flags: TypeFlags) -> GraphType:
		ty = self._intrinsics.get(flags)
		if ty is None:
			ty = GraphType(flags=flags)
			self._intrinsics[flags] = ty
		return ty

	def ensure_any(self) -> GraphType:
		return self._intrinsic(TypeFlags.ANY)

	def ensure_string(self) -> GraphType:
		return self._intrinsic(TypeFlags.STRING)

	def ensure_number(self) -> GraphType:
		return self._intrinsic(TypeFlags.NUMBER)

	def ensure_es_symbol(self) -> GraphType:
		return self._intrinsic(TypeFlags.ES_SYMBOL)

	def ensure_void(self) -> GraphType:
		return self._intrinsic(TypeFlags.VOID)

	def ensure_undefined(self) -> GraphType:
		return self._intrinsic(TypeFlags.UNDEFINED)

	def ensure_null(self) -> GraphType:
		return self._intrinsic(TypeFlags.NULL)

	def ensure_never(self) -> GraphType:
		return self._intrinsic(TypeFlags.NEVER)

	def ensure_true(self) -> GraphType:
		if self._true is None:
			self._true = GraphType(flags=TypeFlags.BOOLEAN_LITERAL, value=True)
		return self._true

	def ensure_false(self) -> GraphType:
		if self._false is None:
			self._false = GraphType(flags=TypeFlags.BOOLEAN_LITERAL, value=False)
		return self._false

	def ensure_boolean(self) -> GraphType:
		"""`boolean` is the union `false|true`, flagged BOOLEAN|UNION."""
		if self._boolean is None:
			self._boolean = GraphType(
				flags=TypeFlags.BOOLEAN | TypeFlags.UNION,
				types=[self.ensure_false(), self.ensure_true()],
			)
		return self._boolean

	# --- literals, enums, combinators --------------------------------------

	def new_string_literal(self, value: str) -> GraphType:
		return GraphType(flags=TypeFlags.STRING_LITERAL, value=value)

	def new_number_literal(self, value: float) -> GraphType:
		return GraphType(flags=TypeFlags.NUMBER_LITERAL, value=value)

	def new_enum(self, name: str, declared_in: Sequence[DeclSpec] | DeclSpec | None = None) -> GraphType:
		sym = self.new_symbol(name, SymbolFlags.REGULAR_ENUM, declared_in=declared_in)
		return GraphType(flags=TypeFlags.ENUM, symbol=sym)

	def new_enum_literal(self, enum_type: GraphType, member: str, value: int) -> GraphType:
		sym = self.new_symbol(member, SymbolFlags.ENUM_MEMBER, parent=enum_type.symbol)
		return GraphType(flags=TypeFlags.ENUM_LITERAL, symbol=sym, value=value)

	def new_type_parameter(self, name: str) -> GraphType:
		sym = self.new_symbol(name, SymbolFlags.TYPE_PARAMETER)
		return GraphType(flags=TypeFlags.TYPE_PARAMETER, symbol=sym)

	def new_union(self, types: Sequence[GraphType]) -> GraphType:
		return GraphType(flags=TypeFlags.UNION, types=list(types))

	def new_intersection(self, types: Sequence[GraphType]) -> GraphType:
		return GraphType(flags=TypeFlags.INTERSECTION, types=list(types))

	def new_index(self, operand: GraphType) -> GraphType:
		"""`keyof operand`."""
		return GraphType(flags=TypeFlags.INDEX, target=operand)

	def new_indexed_access(self, object_type: GraphType, index_type: GraphType) -> GraphType:
		"""`object_type[index_type]`."""
		return GraphType(flags=TypeFlags.INDEXED_ACCESS, target=object_type, types=[index_type])

	# --- symbols --------------------------------------------------------------

	def new_symbol(
		self,
		name: str,
		flags: SymbolFlags,
		*,
		declared_in: Sequence[DeclSpec] | DeclSpec | None = None,
		parent: GraphSymbol | None = None,
	) -> GraphSymbol:
		return GraphSymbol(name=name, flags=flags, declarations=_declarations(declared_in), parent=parent)

	def new_namespace(self, name: str, declared_in: Sequence[DeclSpec] | DeclSpec | None = None, parent: GraphSymbol | None = None) -> GraphSymbol:
		return self.new_symbol(name, SymbolFlags.NAMESPACE_MODULE, declared_in=declared_in, parent=parent)

	def set_symbol_type(self, symbol: GraphSymbol, ty: GraphType) -> None:
		"""Record the type `symbol` resolves to at any anchor."""
		self._symbol_types[id(symbol)] = (symbol, ty)

	# --- nominal object types -----------------------------------------------

	def new_class(
		self,
		name: str,
		*,
		declared_in: Sequence[DeclSpec] | DeclSpec | None = "input.ts",
		parent: GraphSymbol | None = None,
	) -> GraphType:
		sym = self.new_symbol(name, SymbolFlags.CLASS, declared_in=declared_in, parent=parent)
		return GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.CLASS, symbol=sym)

	def new_interface(
		self,
		name: str,
		*,
		declared_in: Sequence[DeclSpec] | DeclSpec | None = "input.ts",
		parent: GraphSymbol | None = None,
		also_value: bool = False,
		generic: bool = False,
	) -> GraphType:
		"""
		Create an interface type.

		`also_value` adds a same-named variable declaration to the symbol (the
		`interface Foo {}; const Foo = ...` shape). `generic` also flags the
		type as a Reference, as the engine does for generic interface targets.
		"""
		flags = SymbolFlags.INTERFACE
		if also_value:
			flags |= SymbolFlags.BLOCK_SCOPED_VARIABLE
		sym = self.new_symbol(name, flags, declared_in=declared_in, parent=parent)
		object_flags = ObjectFlags.INTERFACE
		if generic:
			object_flags |= ObjectFlags.REFERENCE
		return GraphType(flags=TypeFlags.OBJECT, object_flags=object_flags, symbol=sym)

	def new_reference(self, target: GraphType, type_arguments: Sequence[GraphType] | None = None) -> GraphType:
		return GraphType(
			flags=TypeFlags.OBJECT,
			object_flags=ObjectFlags.REFERENCE,
			symbol=target.symbol,
			target=target,
			type_arguments=list(type_arguments) if type_arguments is not None else None,
		)

	def new_tuple(self, element_types: Sequence[GraphType]) -> GraphType:
		"""A tuple: a reference whose target is flagged TUPLE."""
		target = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.TUPLE | ObjectFlags.REFERENCE)
		target.target = target
		return self.new_reference(target, element_types)

	# --- structural shapes ----------------------------------------------------

	def new_type_literal(
		self,
		fields: Mapping[str, GraphType] | None = None,
		*,
		call_signatures: Sequence[GraphSignature] = (),
		construct_signatures: Sequence[GraphSignature] = (),
		string_index: GraphType | None = None,
		number_index: GraphType | None = None,
		declared_in: Sequence[DeclSpec] | DeclSpec | None = "input.ts",
	) -> GraphType:
		"""
		Create an anonymous `{...}` type literal.

		Fields can also be added afterwards with `add_property`, which is how
		self-referential literals are built.
		"""
		sym = self.new_symbol(TYPE_LITERAL_SYMBOL_NAME, SymbolFlags.TYPE_LITERAL, declared_in=declared_in)
		sym.members = {}
		ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.ANONYMOUS, symbol=sym)
		for sig in call_signatures:
			self.add_call_signature(ty, sig)
		for sig in construct_signatures:
			self.add_construct_signature(ty, sig)
		if string_index is not None or number_index is not None:
			self.set_index_types(ty, string_index=string_index, number_index=number_index)
		for name, field_type in (fields or {}).items():
			self.add_property(ty, name, field_type)
		return ty

	def add_property(self, literal: GraphType, name: str, ty: GraphType, *, optional: bool = False) -> GraphSymbol:
		"""
		Add a named member. Optional members get `ty|undefined` as their type,
		which is how the engine represents them.
		"""
		flags = SymbolFlags.PROPERTY
		if optional:
			flags |= SymbolFlags.OPTIONAL
			ty = self.new_union([ty, self.ensure_undefined()])
		member = GraphSymbol(name=name, flags=flags, parent=literal.symbol)
		self._members_of(literal)[name] = member
		self.set_symbol_type(member, ty)
		return member

	def add_call_signature(self, literal: GraphType, signature: GraphSignature) -> None:
		literal.call_signatures.append(signature)
		self._members_of(literal).setdefault(CALL_MEMBER_NAME, GraphSymbol(name=CALL_MEMBER_NAME, flags=SymbolFlags.SIGNATURE))

	def add_construct_signature(self, literal: GraphType, signature: GraphSignature) -> None:
		literal.construct_signatures.append(signature)
		self._members_of(literal).setdefault(NEW_MEMBER_NAME, GraphSymbol(name=NEW_MEMBER_NAME, flags=SymbolFlags.SIGNATURE))

	def set_index_types(self, literal: GraphType, *, string_index: GraphType | None = None, number_index: GraphType | None = None) -> None:
		literal.string_index_type = string_index
		literal.number_index_type = number_index
		self._members_of(literal).setdefault(INDEX_MEMBER_NAME, GraphSymbol(name=INDEX_MEMBER_NAME, flags=SymbolFlags.SIGNATURE))

	def _members_of(self, literal: GraphType) -> Dict[str, GraphSymbol]:
		sym = literal.symbol
		if sym is None:
			raise ValueError("type literal has no symbol to hold members")
		if sym.members is None:
			sym.members = {}
		return sym.members

	def new_signature(self, params: Sequence[Tuple[str, GraphType]], return_type: GraphType) -> GraphSignature:
		"""Build a signature from `(name, type)` parameter pairs."""
		param_symbols: List[GraphSymbol] = []
		for name, ty in params:
			param = GraphSymbol(name=name, flags=SymbolFlags.FUNCTION_SCOPED_VARIABLE)
			self.set_symbol_type(param, ty)
			param_symbols.append(param)
		return GraphSignature(parameters=param_symbols, return_type=return_type)

	def new_function_type(
		self,
		params: Sequence[Tuple[str, GraphType]],
		return_type: GraphType,
		*,
		method_name: str | None = None,
		declared_in: Sequence[DeclSpec] | DeclSpec | None = "input.ts",
	) -> GraphType:
		"""
		The anonymous type of a function expression (or of a method when
		`method_name` is given).
		"""
		if method_name is None:
			sym = self.new_symbol(FUNCTION_SYMBOL_NAME, SymbolFlags.FUNCTION, declared_in=declared_in)
		else:
			sym = self.new_symbol(method_name, SymbolFlags.METHOD, declared_in=declared_in)
		ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.ANONYMOUS, symbol=sym)
		ty.call_signatures.append(self.new_signature(params, return_type))
		return ty

	# --- TypeChecker protocol ----------------------------------------------

	def get_type_of_symbol_at_location(self, symbol: GraphSymbol, node: Any) -> GraphType:
		entry = self._symbol_types.get(id(symbol))
		if entry is None:
			# The engine answers unresolvable lookups with its error type, which is `any`.
			return self.ensure_any()
		return entry[1]

	def get_signatures_of_type(self, ty: GraphType, kind: SignatureKind) -> List[GraphSignature]:
		if kind is SignatureKind.CONSTRUCT:
			return list(ty.construct_signatures)
		return list(ty.call_signatures)

	def get_index_type_of_type(self, ty: GraphType, kind: IndexKind) -> Optional[GraphType]:
		if kind is IndexKind.STRING:
			return ty.string_index_type
		return ty.number_index_type

	def get_return_type_of_signature(self, signature: GraphSignature) -> GraphType:
		if signature.return_type is None:
			return self.ensure_any()
		return signature.return_type

	def build_symbol_display(self, symbol: GraphSymbol, writer: SymbolWriter, enclosing_declaration: Any = None) -> None:
		"""Write `outer.inner.Name`, walking `parent` links outwards."""
		chain: List[GraphSymbol] = []
		seen: set[int] = set()
		cur: GraphSymbol | None = symbol
		while cur is not None and id(cur) not in seen:
			seen.add(id(cur))
			chain.append(cur)
			cur = cur.parent
		for idx, sym in enumerate(reversed(chain)):
			if idx:
				writer.write_punctuation(".")
			writer.track_symbol(sym, enclosing_declaration, SymbolFlags.TYPE)
			writer.write_symbol(sym.name, sym)


__all__ = [
	"FUNCTION_SYMBOL_NAME",
	"GraphDeclaration",
	"GraphSignature",
	"GraphSymbol",
	"GraphType",
	"NEW_MEMBER_NAME",
	"TypeGraph",
]
