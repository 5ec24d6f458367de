# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Translate resolved engine types into annotation-dialect strings.

The dialect is far less expressive than the source type system, so the
mapping is lossy by construction. Whenever no faithful rendering exists the
translator reports a diagnostic and falls back to `?` (or a widened marker
such as `!Object<?,?>`), so that whole-program output can continue.

Two situations are not degradations but broken engine invariants, and raise
`TranslationError`: a kind tag the dispatch table does not know, and a
reference type whose target is itself.

One translator serves one anchor node. Its cycle guard (the set of type
literals already expanded) lives as long as the instance: a literal that was
expanded by an earlier `translate()` call renders as `?` in every later call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional

from typeshift.blacklist import PathBlacklist
from typeshift.core.debug_strings import type_to_debug_string
from typeshift.core.diagnostics import Diagnostic, DiagnosticSink, NullSink
from typeshift.core.source_files import is_closure_provided_type
from typeshift.core.span import Span
from typeshift.core.type_model import (
	CALL_MEMBER_NAME,
	INDEX_MEMBER_NAME,
	TRANSLATABLE_TYPE_FLAGS,
	IndexKind,
	ObjectFlags,
	Signature,
	SignatureKind,
	Symbol,
	SymbolFlags,
	Type,
	TypeChecker,
	TypeFlags,
)
from typeshift.errors import TranslationError
from typeshift.symbol_names import SymbolAliases, SymbolNamer

UNKNOWN = "?"


@dataclass(frozen=True)
class TranslatorOptions:
	"""
	Per-context configuration.

	path_blacklist: source paths whose symbols always translate to `?`
	  (None disables blacklisting entirely).
	symbol_aliases: symbol -> output name overrides, by identity.
	"""

	path_blacklist: Optional[FrozenSet[str]] = None
	symbol_aliases: SymbolAliases = field(default_factory=SymbolAliases)


class TypeTranslator:
	"""
	Converts engine types to annotation strings for one anchor node.

	Diagnostics go to `diagnostics` (default: dropped). Subclasses may instead
	override `warn()`.
	"""

	def __init__(
		self,
		checker: TypeChecker,
		node: Any,
		path_blacklist: Optional[FrozenSet[str] | PathBlacklist] = None,
		symbols_to_aliased_names: SymbolAliases | Mapping[Any, str] | None = None,
		diagnostics: DiagnosticSink | None = None,
	) -> None:
		self.checker = checker
		self.node = node
		if path_blacklist is not None and not isinstance(path_blacklist, PathBlacklist):
			path_blacklist = PathBlacklist(path_blacklist)
		self.path_blacklist: Optional[PathBlacklist] = path_blacklist
		if not isinstance(symbols_to_aliased_names, SymbolAliases):
			symbols_to_aliased_names = SymbolAliases(symbols_to_aliased_names)
		self.namer = SymbolNamer(checker, node, symbols_to_aliased_names)
		self.diagnostics: DiagnosticSink = diagnostics if diagnostics is not None else NullSink()
		# Type literals already expanded by this instance, keyed by identity.
		self._seen_type_literals: Dict[int, Type] = {}
		self._kind_handlers: Dict[TypeFlags, Callable[[Type], str]] = {
			TypeFlags.ANY: lambda t: UNKNOWN,
			TypeFlags.STRING: lambda t: "string",
			TypeFlags.STRING_LITERAL: lambda t: "string",
			TypeFlags.NUMBER: lambda t: "number",
			TypeFlags.NUMBER_LITERAL: lambda t: "number",
			# `boolean` alone arrives as BOOLEAN|UNION and goes through the union fallback.
			TypeFlags.BOOLEAN: lambda t: "boolean",
			TypeFlags.BOOLEAN_LITERAL: lambda t: "boolean",
			TypeFlags.ENUM: lambda t: "number",
			TypeFlags.ENUM_LITERAL: lambda t: "number",
			# The dialect's `symbol` is itself only a typedef for `?`.
			TypeFlags.ES_SYMBOL: lambda t: "symbol",
			TypeFlags.VOID: lambda t: "void",
			TypeFlags.UNDEFINED: lambda t: "undefined",
			TypeFlags.NULL: lambda t: "null",
			TypeFlags.NEVER: self._translate_never,
			TypeFlags.TYPE_PARAMETER: self._translate_unhandled_kind,
			TypeFlags.OBJECT: self.translate_object,
			TypeFlags.UNION: self.translate_union,
			TypeFlags.INTERSECTION: self._translate_unhandled_kind,
			TypeFlags.INDEX: self._translate_unhandled_kind,
			TypeFlags.INDEXED_ACCESS: self._translate_unhandled_kind,
		}

	@classmethod
	def from_options(
		cls,
		checker: TypeChecker,
		node: Any,
		options: TranslatorOptions,
		diagnostics: DiagnosticSink | None = None,
	) -> "TypeTranslator":
		return cls(
			checker,
			node,
			path_blacklist=options.path_blacklist,
			symbols_to_aliased_names=options.symbol_aliases,
			diagnostics=diagnostics,
		)

	# --- diagnostics ----------------------------------------------------------

	def warn(self, msg: str, code: str | None = None) -> None:
		self.diagnostics.report(Diagnostic(message=msg, code=code, span=Span.from_node(self.node)))

	def reset_session(self) -> None:
		"""Forget which type literals were expanded. Callers must opt in."""
		self._seen_type_literals.clear()

	# --- names --------------------------------------------------------------

	def symbol_to_string(self, symbol: Symbol) -> str:
		return self.namer.symbol_to_string(symbol)

	def is_blacklisted(self, symbol: Symbol) -> bool:
		"""True if `symbol` must always be typed `?`."""
		if self.path_blacklist is None:
			return False
		return self.path_blacklist.is_blacklisted(symbol, lambda msg: self.warn(msg, "TT-NO-DECLARATIONS"))

	# --- dispatch -------------------------------------------------------------

	def translate(self, ty: Type) -> str:
		kind = TypeFlags(ty.flags & TRANSLATABLE_TYPE_FLAGS)
		handler = self._kind_handlers.get(kind)
		if handler is not None:
			return handler(ty)
		# Several kind bits at once. `boolean` is BOOLEAN|UNION over true|false;
		# in a wider union (boolean|number) the BOOLEAN bit disappears and the
		# union simply has three members.
		if ty.flags & TypeFlags.UNION:
			return self.translate_union(ty)
		raise TranslationError(f"unknown type flags: {int(ty.flags)}")

	def _translate_never(self, ty: Type) -> str:
		self.warn("should not emit a 'never' type", "TT-NEVER")
		return UNKNOWN

	def _translate_unhandled_kind(self, ty: Type) -> str:
		# TYPE_PARAMETER is the T in Foo<T>; generics are erased.
		kind = TypeFlags(ty.flags & TRANSLATABLE_TYPE_FLAGS)
		code = "TT-TYPE-PARAM" if kind is TypeFlags.TYPE_PARAMETER else "TT-UNHANDLED-KIND"
		self.warn(f"unhandled type flags: {kind.name}", code)
		return UNKNOWN

	def translate_union(self, ty: Type) -> str:
		# true|boolean would otherwise come out as boolean|boolean.
		parts = list(dict.fromkeys(self.translate(member) for member in ty.types))
		if len(parts) == 1:
			return parts[0]
		return f"({'|'.join(parts)})"

	# --- object types ---------------------------------------------------------

	def translate_object(self, ty: Type) -> str:
		"""Classes, interfaces, references and anonymous object types."""
		symbol = ty.symbol
		if symbol is not None and self.is_blacklisted(symbol):
			return UNKNOWN

		# A type can carry several sub-kinds: Array<number>'s target is both
		# Interface and Reference. Order of the checks matters.
		object_flags = ty.object_flags
		if object_flags & ObjectFlags.CLASS:
			if symbol is None:
				self.warn("class has no symbol", "TT-NO-SYMBOL")
				return UNKNOWN
			return "!" + self.symbol_to_string(symbol)

		if object_flags & ObjectFlags.INTERFACE:
			# The interface's own type parameters are what it expects, not what
			# it was given; arguments live on the enclosing Reference.
			if symbol is None:
				self.warn("interface has no symbol", "TT-NO-SYMBOL")
				return UNKNOWN
			if symbol.flags & SymbolFlags.VALUE and not is_closure_provided_type(symbol):
				# A user type that is also a value has no usable dialect name.
				self.warn(f"type/symbol conflict for {symbol.name}, using {{?}} for now", "TT-TYPE-VALUE-CONFLICT")
				return UNKNOWN
			return "!" + self.symbol_to_string(symbol)

		if object_flags & ObjectFlags.REFERENCE:
			return self._translate_reference(ty)

		if object_flags & ObjectFlags.ANONYMOUS:
			return self._translate_anonymous(ty)

		self.warn(f"unhandled type {type_to_debug_string(ty)}", "TT-OBJECT-UNHANDLED")
		return UNKNOWN

	def _translate_reference(self, ty: Type) -> str:
		target = ty.target
		if target is None:
			raise TranslationError(f"reference without target in {type_to_debug_string(ty)}")
		# No tuples in the dialect; treat them as arrays of unknown.
		if target.object_flags & ObjectFlags.TUPLE:
			return "!Array<?>"
		if target is ty:
			# Recursing would never terminate; a more specific type should
			# have been handled before getting here.
			raise TranslationError(f"reference loop in {type_to_debug_string(ty)} {int(ty.flags)}")
		out = self.translate(target)
		if ty.type_arguments:
			args = [self.translate(arg) for arg in ty.type_arguments]
			out += f"<{', '.join(args)}>"
		return out

	def _translate_anonymous(self, ty: Type) -> str:
		symbol = ty.symbol
		if symbol is None:
			# Seen for arrow functions passed to generic functions: the inferred
			# type is anonymous and has nothing to go on.
			self.warn("anonymous type has no symbol", "TT-NO-SYMBOL")
			return UNKNOWN
		if symbol.flags == SymbolFlags.TYPE_LITERAL:
			return self.translate_type_literal(ty)
		if symbol.flags in (SymbolFlags.FUNCTION, SymbolFlags.METHOD):
			signatures = self.checker.get_signatures_of_type(ty, SignatureKind.CALL)
			if len(signatures) == 1:
				return self.signature_to_closure(signatures[0])
		self.warn("unhandled anonymous type", "TT-ANON-UNHANDLED")
		return UNKNOWN

	# --- structural shapes ----------------------------------------------------

	def translate_type_literal(self, ty: Type) -> str:
		"""The anonymous `{...}` type of e.g. `let x: {a: number}`."""
		if id(ty) in self._seen_type_literals:
			return UNKNOWN
		self._seen_type_literals[id(ty)] = ty

		symbol = ty.symbol
		if symbol is None or symbol.members is None:
			self.warn("type literal has no symbol", "TT-NO-SYMBOL")
			return UNKNOWN

		# Only the first constructor is rendered; extra constructors and
		# properties next to a constructor are not expressible.
		ctors = ty.get_construct_signatures()
		if ctors:
			params = self._convert_params(ctors[0])
			params_str = "".join(f", {p}" for p in params)
			constructed = self.translate(self.checker.get_return_type_of_signature(ctors[0]))
			# `function(new: !Bar)` does not parse in the dialect; `(!Bar)` does.
			return f"function(new: ({constructed}){params_str}): ?"

		callable_ = False
		indexable = False
		fields: List[str] = []
		for name, member in symbol.members.items():
			if name == CALL_MEMBER_NAME:
				callable_ = True
			elif name == INDEX_MEMBER_NAME:
				indexable = True
			else:
				# Optional members already carry `|undefined` in their type.
				# Names are not quoted; non-identifier names fail the grammar check.
				member_type = self.checker.get_type_of_symbol_at_location(member, self.node)
				fields.append(f"{name}: {self.translate(member_type)}")

		if not fields:
			if callable_ and not indexable:
				signatures = self.checker.get_signatures_of_type(ty, SignatureKind.CALL)
				if len(signatures) == 1:
					return self.signature_to_closure(signatures[0])
			elif indexable and not callable_:
				return self._translate_index_map(ty)
			elif not callable_ and not indexable:
				# `{}` is rejected by consumers; use the generic object.
				return "!Object"

		if not callable_ and not indexable:
			return f"{{{', '.join(fields)}}}"

		self.warn("unhandled type literal", "TT-LITERAL-UNHANDLED")
		return UNKNOWN

	def _translate_index_map(self, ty: Type) -> str:
		key_type = "string"
		value_type = self.checker.get_index_type_of_type(ty, IndexKind.STRING)
		if value_type is None:
			key_type = "number"
			value_type = self.checker.get_index_type_of_type(ty, IndexKind.NUMBER)
		if value_type is None:
			self.warn("unknown index key type", "TT-INDEX-KEY")
			return "!Object<?,?>"
		return f"!Object<{key_type},{self.translate(value_type)}>"

	def signature_to_closure(self, signature: Signature) -> str:
		"""`function(p1, p2): ret` for a call signature."""
		out = f"function({', '.join(self._convert_params(signature))})"
		ret = self.translate(self.checker.get_return_type_of_signature(signature))
		if ret:
			out += f": {ret}"
		return out

	def _convert_params(self, signature: Signature) -> List[str]:
		return [
			self.translate(self.checker.get_type_of_symbol_at_location(param, self.node))
			for param in signature.parameters
		]


__all__ = ["TranslatorOptions", "TypeTranslator", "UNKNOWN"]
