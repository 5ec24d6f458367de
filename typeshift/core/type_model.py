# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Read-only view over the type-checking engine's resolved types.

The translator never owns or mutates any of these objects; it only walks them.
Everything here is a Protocol so that any engine binding (or the in-memory
`TypeGraph` used by the CLI and tests) can be plugged in as long as it exposes
the same attributes and queries.

Flag values follow the engine's public numbering. Bits above
`TypeFlags.INDEXED_ACCESS` are engine-internal and are masked away by the
translator before classification.
"""

from __future__ import annotations

from enum import Enum, IntFlag, auto
from typing import Any, Mapping, Optional, Protocol, Sequence


class TypeFlags(IntFlag):
	"""Kind tag of a type. Usually a single bit; `boolean` is BOOLEAN|UNION."""

	NONE = 0
	ANY = 1 << 0
	STRING = 1 << 1
	NUMBER = 1 << 2
	BOOLEAN = 1 << 3
	ENUM = 1 << 4
	STRING_LITERAL = 1 << 5
	NUMBER_LITERAL = 1 << 6
	BOOLEAN_LITERAL = 1 << 7
	ENUM_LITERAL = 1 << 8
	ES_SYMBOL = 1 << 9
	VOID = 1 << 10
	UNDEFINED = 1 << 11
	NULL = 1 << 12
	NEVER = 1 << 13
	TYPE_PARAMETER = 1 << 14
	OBJECT = 1 << 15
	UNION = 1 << 16
	INTERSECTION = 1 << 17
	INDEX = 1 << 18
	INDEXED_ACCESS = 1 << 19
	# Engine-internal bits; they leak into `flags` but carry no kind meaning.
	FRESH_LITERAL = 1 << 20
	CONTAINS_WIDENING_TYPE = 1 << 21
	CONTAINS_OBJECT_LITERAL = 1 << 22
	CONTAINS_ANY_FUNCTION_TYPE = 1 << 23


# Every kind bit up to and including the last one the translator handles.
TRANSLATABLE_TYPE_FLAGS = TypeFlags((TypeFlags.INDEXED_ACCESS << 1) - 1)


class ObjectFlags(IntFlag):
	"""Sub-kind of an OBJECT type. A type may carry several at once."""

	NONE = 0
	CLASS = 1 << 0
	INTERFACE = 1 << 1
	REFERENCE = 1 << 2
	TUPLE = 1 << 3
	ANONYMOUS = 1 << 4
	MAPPED = 1 << 5
	INSTANTIATED = 1 << 6
	OBJECT_LITERAL = 1 << 7
	EVOLVING_ARRAY = 1 << 8
	OBJECT_LITERAL_PATTERN_WITH_COMPUTED_PROPERTIES = 1 << 9


class SymbolFlags(IntFlag):
	"""Roles a symbol plays (value, type, member kind, ...)."""

	NONE = 0
	FUNCTION_SCOPED_VARIABLE = 1 << 0
	BLOCK_SCOPED_VARIABLE = 1 << 1
	PROPERTY = 1 << 2
	ENUM_MEMBER = 1 << 3
	FUNCTION = 1 << 4
	CLASS = 1 << 5
	INTERFACE = 1 << 6
	CONST_ENUM = 1 << 7
	REGULAR_ENUM = 1 << 8
	VALUE_MODULE = 1 << 9
	NAMESPACE_MODULE = 1 << 10
	TYPE_LITERAL = 1 << 11
	OBJECT_LITERAL = 1 << 12
	METHOD = 1 << 13
	CONSTRUCTOR = 1 << 14
	GET_ACCESSOR = 1 << 15
	SET_ACCESSOR = 1 << 16
	SIGNATURE = 1 << 17
	TYPE_PARAMETER = 1 << 18
	TYPE_ALIAS = 1 << 19
	EXPORT_VALUE = 1 << 20
	EXPORT_TYPE = 1 << 21
	EXPORT_NAMESPACE = 1 << 22
	ALIAS = 1 << 23
	INSTANTIATED = 1 << 24
	MERGED = 1 << 25
	TRANSIENT = 1 << 26
	PROTOTYPE = 1 << 27
	SYNTHETIC_PROPERTY = 1 << 28
	OPTIONAL = 1 << 29
	EXPORT_STAR = 1 << 30

	# Composites.
	VARIABLE = FUNCTION_SCOPED_VARIABLE | BLOCK_SCOPED_VARIABLE
	ENUM = REGULAR_ENUM | CONST_ENUM
	VALUE = (
		VARIABLE
		| PROPERTY
		| ENUM_MEMBER
		| FUNCTION
		| CLASS
		| ENUM
		| VALUE_MODULE
		| METHOD
		| GET_ACCESSOR
		| SET_ACCESSOR
	)
	TYPE = CLASS | INTERFACE | ENUM | ENUM_MEMBER | TYPE_LITERAL | OBJECT_LITERAL | TYPE_PARAMETER | TYPE_ALIAS


# Single-bit role flags, in declaration order (composites excluded).
PRIMITIVE_SYMBOL_FLAGS = tuple(SymbolFlags(1 << bit) for bit in range(31))

# Single-bit kind flags the translator understands, in declaration order.
PRIMITIVE_TYPE_FLAGS = tuple(TypeFlags(1 << bit) for bit in range(20))

PRIMITIVE_OBJECT_FLAGS = tuple(ObjectFlags(1 << bit) for bit in range(10))

# Reserved member names the engine uses for call and index signatures.
CALL_MEMBER_NAME = "__call"
INDEX_MEMBER_NAME = "__index"
# Name the engine gives the symbol of an anonymous type literal.
TYPE_LITERAL_SYMBOL_NAME = "__type"


class SignatureKind(Enum):
	CALL = auto()
	CONSTRUCT = auto()


class IndexKind(Enum):
	STRING = auto()
	NUMBER = auto()


class Declaration(Protocol):
	"""A declaration site; only its source path matters to the translator."""

	source_path: str
	line: Optional[int]
	column: Optional[int]


class Symbol(Protocol):
	name: str
	flags: SymbolFlags
	declarations: Optional[Sequence[Declaration]]
	members: Optional[Mapping[str, "Symbol"]]


class Signature(Protocol):
	parameters: Sequence[Symbol]


class Type(Protocol):
	"""
	A resolved type node.

	`object_flags` is only meaningful for OBJECT types, `target` and
	`type_arguments` only for references, `types` only for unions and
	intersections. `pattern` is set on types inferred from destructuring.
	"""

	flags: TypeFlags
	object_flags: ObjectFlags
	symbol: Optional[Symbol]
	target: Optional["Type"]
	type_arguments: Optional[Sequence["Type"]]
	types: Sequence["Type"]
	pattern: Any

	def get_construct_signatures(self) -> Sequence[Signature]:
		...


class SymbolWriter(Protocol):
	"""
	Fragment sink driven by the engine's symbol display.

	Text-bearing calls append to the output; layout calls (`write_line`,
	indentation, `clear`) and the bookkeeping callbacks are allowed to ignore
	their input.
	"""

	def write_keyword(self, text: str) -> None: ...

	def write_operator(self, text: str) -> None: ...

	def write_punctuation(self, text: str) -> None: ...

	def write_space(self, text: str) -> None: ...

	def write_string_literal(self, text: str) -> None: ...

	def write_parameter(self, text: str) -> None: ...

	def write_property(self, text: str) -> None: ...

	def write_symbol(self, text: str, symbol: Symbol | None = None) -> None: ...

	def write_line(self) -> None: ...

	def increase_indent(self) -> None: ...

	def decrease_indent(self) -> None: ...

	def clear(self) -> None: ...

	def track_symbol(self, symbol: Symbol, enclosing_declaration: Any = None, meaning: SymbolFlags | None = None) -> None: ...

	def report_inaccessible_this_error(self) -> None: ...


class TypeChecker(Protocol):
	"""Queries the translator needs from the type-checking engine."""

	def get_type_of_symbol_at_location(self, symbol: Symbol, node: Any) -> Type:
		"""Return the type `symbol` has when viewed from `node`."""
		...

	def get_signatures_of_type(self, ty: Type, kind: SignatureKind) -> Sequence[Signature]:
		...

	def get_index_type_of_type(self, ty: Type, kind: IndexKind) -> Optional[Type]:
		"""Return the value type of the string/number index signature, if any."""
		...

	def get_return_type_of_signature(self, signature: Signature) -> Type:
		...

	def build_symbol_display(self, symbol: Symbol, writer: SymbolWriter, enclosing_declaration: Any = None) -> None:
		"""Write the (qualified) display name of `symbol` into `writer`."""
		...


__all__ = [
	"CALL_MEMBER_NAME",
	"Declaration",
	"INDEX_MEMBER_NAME",
	"IndexKind",
	"ObjectFlags",
	"PRIMITIVE_OBJECT_FLAGS",
	"PRIMITIVE_SYMBOL_FLAGS",
	"PRIMITIVE_TYPE_FLAGS",
	"Signature",
	"SignatureKind",
	"Symbol",
	"SymbolFlags",
	"SymbolWriter",
	"TRANSLATABLE_TYPE_FLAGS",
	"TYPE_LITERAL_SYMBOL_NAME",
	"Type",
	"TypeChecker",
	"TypeFlags",
]
