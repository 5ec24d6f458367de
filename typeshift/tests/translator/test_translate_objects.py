# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Classes, interfaces, references, tuples and anonymous object types."""

from __future__ import annotations

import re
from types import SimpleNamespace

import pytest

from typeshift.core.diagnostics import CollectingSink
from typeshift.core.type_graph import GraphSymbol, GraphType, TypeGraph
from typeshift.core.type_model import ObjectFlags, SymbolFlags, TypeFlags
from typeshift.errors import TranslationError
from typeshift.type_translator import TypeTranslator


def _tt(graph: TypeGraph, sink: CollectingSink | None = None) -> TypeTranslator:
	return TypeTranslator(graph, node=None, diagnostics=sink)


def _array(g: TypeGraph) -> GraphType:
	return g.new_interface("Array", declared_in="node_modules/typescript/lib/lib.es5.d.ts", also_value=True, generic=True)


def test_class_is_non_null_name():
	g = TypeGraph()
	assert _tt(g).translate(g.new_class("Foo")) == "!Foo"


def test_class_name_is_qualified_by_namespace():
	g = TypeGraph()
	outer = g.new_namespace("outer")
	inner = g.new_namespace("inner", parent=outer)
	assert _tt(g).translate(g.new_class("Foo", parent=inner)) == "!outer.inner.Foo"


def test_class_without_symbol():
	sink = CollectingSink()
	ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.CLASS)
	assert _tt(TypeGraph(), sink).translate(ty) == "?"
	assert sink.messages == ["class has no symbol"]


def test_interface_is_non_null_name():
	g = TypeGraph()
	assert _tt(g).translate(g.new_interface("Point")) == "!Point"


def test_interface_without_symbol():
	sink = CollectingSink()
	ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.INTERFACE)
	assert _tt(TypeGraph(), sink).translate(ty) == "?"
	assert sink.messages == ["interface has no symbol"]


def test_interface_that_is_also_a_value_degrades():
	g = TypeGraph()
	sink = CollectingSink()
	iface = g.new_interface("Shadowed", also_value=True)
	assert _tt(g, sink).translate(iface) == "?"
	assert sink.codes() == ["TT-TYPE-VALUE-CONFLICT"]
	assert sink.messages == ["type/symbol conflict for Shadowed, using {?} for now"]


def test_builtin_interface_that_is_also_a_value_keeps_its_name():
	g = TypeGraph()
	sink = CollectingSink()
	assert _tt(g, sink).translate(_array(g)) == "!Array"
	assert sink.diagnostics == []


def test_generic_reference_renders_arguments():
	g = TypeGraph()
	ref = g.new_reference(_array(g), [g.ensure_number()])
	assert _tt(g).translate(ref) == "!Array<number>"


def test_reference_with_several_arguments():
	g = TypeGraph()
	map_iface = g.new_interface("Map", declared_in="lib.es2015.collection.d.ts", also_value=True, generic=True)
	foo = g.new_class("Foo")
	ref = g.new_reference(map_iface, [g.ensure_string(), g.new_union([foo, g.ensure_null()])])
	assert _tt(g).translate(ref) == "!Map<string, (!Foo|null)>"


def test_reference_without_arguments():
	g = TypeGraph()
	assert _tt(g).translate(g.new_reference(g.new_class("Foo"))) == "!Foo"


def test_nested_references():
	g = TypeGraph()
	array = _array(g)
	inner = g.new_reference(array, [g.ensure_string()])
	assert _tt(g).translate(g.new_reference(array, [inner])) == "!Array<!Array<string>>"


def test_tuple_is_array_of_unknown():
	g = TypeGraph()
	tup = g.new_tuple([g.ensure_string(), g.ensure_number()])
	assert _tt(g).translate(tup) == "!Array<?>"


def test_self_referential_reference_is_fatal():
	ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.REFERENCE)
	ty.target = ty
	with pytest.raises(TranslationError, match=re.escape("reference loop in {type flags:0x8000 Object object:Reference} 32768")):
		_tt(TypeGraph()).translate(ty)


def test_function_type():
	g = TypeGraph()
	fn = g.new_function_type([("x", g.ensure_number())], g.ensure_string())
	assert _tt(g).translate(fn) == "function(number): string"


def test_method_type_with_several_params():
	g = TypeGraph()
	foo = g.new_class("Foo")
	fn = g.new_function_type([("a", foo), ("b", g.ensure_boolean())], g.ensure_void(), method_name="run")
	assert _tt(g).translate(fn) == "function(!Foo, boolean): void"


def test_function_type_with_two_signatures_is_unhandled():
	g = TypeGraph()
	sink = CollectingSink()
	fn = g.new_function_type([("x", g.ensure_number())], g.ensure_string())
	fn.call_signatures.append(g.new_signature([], g.ensure_void()))
	assert _tt(g, sink).translate(fn) == "?"
	assert sink.codes() == ["TT-ANON-UNHANDLED"]


def test_anonymous_without_symbol():
	sink = CollectingSink()
	ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.ANONYMOUS)
	assert _tt(TypeGraph(), sink).translate(ty) == "?"
	assert sink.messages == ["anonymous type has no symbol"]


def test_anonymous_with_other_symbol_role_is_unhandled():
	sink = CollectingSink()
	sym = GraphSymbol(name="Foo", flags=SymbolFlags.CLASS, declarations=None)
	ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.ANONYMOUS, symbol=sym)
	assert _tt(TypeGraph(), sink).translate(ty) == "?"
	assert sink.messages == ["unhandled anonymous type"]


def test_function_and_also_property_is_not_a_function_shape():
	g = TypeGraph()
	sink = CollectingSink()
	fn = g.new_function_type([], g.ensure_void())
	fn.symbol.flags |= SymbolFlags.PROPERTY
	assert _tt(g, sink).translate(fn) == "?"
	assert sink.codes() == ["TT-ANON-UNHANDLED"]


def test_unhandled_object_sub_kind():
	sink = CollectingSink()
	ty = GraphType(flags=TypeFlags.OBJECT, object_flags=ObjectFlags.MAPPED)
	assert _tt(TypeGraph(), sink).translate(ty) == "?"
	assert sink.codes() == ["TT-OBJECT-UNHANDLED"]
	assert sink.messages == ["unhandled type {type flags:0x8000 Object object:Mapped}"]


def test_diagnostics_carry_anchor_location():
	g = TypeGraph()
	sink = CollectingSink()
	anchor = SimpleNamespace(source_path="src/app.ts", line=12, column=4)
	TypeTranslator(g, anchor, diagnostics=sink).translate(g.ensure_never())
	span = sink.diagnostics[0].span
	assert (span.file, span.line, span.column) == ("src/app.ts", 12, 4)
	assert span.raw is anchor


def test_warn_can_be_overridden():
	class Recording(TypeTranslator):
		def __init__(self, *args, **kwargs):
			super().__init__(*args, **kwargs)
			self.seen: list[str] = []

		def warn(self, msg, code=None):
			self.seen.append(msg)

	g = TypeGraph()
	tt = Recording(g, None)
	assert tt.translate(g.new_type_parameter("T")) == "?"
	assert tt.seen == ["unhandled type flags: TYPE_PARAMETER"]
