# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Alias table, qualified display names and path blacklisting."""

from __future__ import annotations

from typeshift.blacklist import PathBlacklist
from typeshift.core.diagnostics import CollectingSink
from typeshift.core.type_graph import GraphSymbol, TypeGraph
from typeshift.core.type_model import SymbolFlags
from typeshift.symbol_names import StringSymbolWriter, SymbolAliases, SymbolNamer
from typeshift.type_translator import TranslatorOptions, TypeTranslator

GENERATED = "gen/externs.d.ts"


def test_string_writer_ignores_layout_signals():
	w = StringSymbolWriter()
	w.write_keyword("typeof")
	w.write_space(" ")
	w.write_line()
	w.increase_indent()
	w.write_symbol("ns")
	w.write_punctuation(".")
	w.write_property("x")
	w.decrease_indent()
	w.clear()
	w.track_symbol(GraphSymbol(name="ns"))
	w.report_inaccessible_this_error()
	assert w.text() == "typeof ns.x"


def test_namer_uses_engine_display():
	g = TypeGraph()
	ns = g.new_namespace("goog")
	sym = g.new_symbol("Promise", SymbolFlags.CLASS, parent=ns)
	assert SymbolNamer(g, None).symbol_to_string(sym) == "goog.Promise"


def test_alias_overrides_display_name():
	g = TypeGraph()
	foo = g.new_class("Foo", parent=g.new_namespace("ns"))
	tt = TypeTranslator(g, None, symbols_to_aliased_names={foo.symbol: "tsickle_import.Foo"})
	assert tt.translate(foo) == "!tsickle_import.Foo"


def test_alias_applies_inside_references():
	g = TypeGraph()
	box = g.new_interface("Box", generic=True)
	aliases = SymbolAliases()
	aliases.set(box.symbol, "mod_1.Box")
	tt = TypeTranslator(g, None, symbols_to_aliased_names=aliases)
	assert tt.translate(g.new_reference(box, [g.ensure_string()])) == "!mod_1.Box<string>"


def test_aliases_match_by_identity_only():
	g = TypeGraph()
	first = g.new_class("Foo")
	second = g.new_class("Foo")
	tt = TypeTranslator(g, None, symbols_to_aliased_names={first.symbol: "a.Foo"})
	assert tt.translate(first) == "!a.Foo"
	assert tt.translate(second) == "!Foo"


def test_alias_table_accepts_pairs():
	g = TypeGraph()
	sym = g.new_symbol("X", SymbolFlags.CLASS)
	other = GraphSymbol(name="X", flags=SymbolFlags.CLASS)
	aliases = SymbolAliases([(sym, "y.X")])
	assert aliases.get(sym) == "y.X"
	assert sym in aliases
	assert other not in aliases
	assert len(aliases) == 1
	assert list(aliases) == [(sym, "y.X")]


def test_blacklist_beats_alias_for_types_but_not_names():
	g = TypeGraph()
	foo = g.new_class("Foo", declared_in=GENERATED)
	tt = TypeTranslator(g, None, path_blacklist=frozenset({GENERATED}), symbols_to_aliased_names={foo.symbol: "imp.Foo"})
	assert tt.is_blacklisted(foo.symbol)
	assert tt.symbol_to_string(foo.symbol) == "imp.Foo"
	# The type itself is still suppressed: blacklisting is checked before naming.
	assert tt.translate(foo) == "?"


def test_blacklisted_class_interface_and_reference():
	g = TypeGraph()
	sink = CollectingSink()
	cls = g.new_class("Gen", declared_in=GENERATED)
	iface = g.new_interface("GenI", declared_in=GENERATED, generic=True)
	tt = TypeTranslator(g, None, path_blacklist=frozenset({GENERATED}), diagnostics=sink)
	assert tt.translate(cls) == "?"
	assert tt.translate(iface) == "?"
	assert tt.translate(g.new_reference(iface, [g.ensure_number()])) == "?"
	assert sink.diagnostics == []


def test_blacklisted_literal_is_not_traversed():
	g = TypeGraph()
	sink = CollectingSink()
	lit = g.new_type_literal({"bad": g.ensure_never()}, declared_in=GENERATED)
	tt = TypeTranslator(g, None, path_blacklist=frozenset({GENERATED}), diagnostics=sink)
	assert tt.translate(lit) == "?"
	# Never member would have warned had it been visited.
	assert sink.diagnostics == []


def test_partially_blacklisted_symbol_is_kept():
	g = TypeGraph()
	merged = g.new_interface("Merged", declared_in=[GENERATED, "src/merged.ts"])
	tt = TypeTranslator(g, None, path_blacklist=frozenset({GENERATED}))
	assert tt.translate(merged) == "!Merged"


def test_symbol_without_declarations_is_blacklisted():
	g = TypeGraph()
	sink = CollectingSink()
	orphan = g.new_class("Orphan", declared_in=[])
	tt = TypeTranslator(g, None, path_blacklist=frozenset({GENERATED}), diagnostics=sink)
	assert tt.translate(orphan) == "?"
	assert sink.codes() == ["TT-NO-DECLARATIONS"]
	assert sink.messages == ["symbol has no declarations"]


def test_without_blacklist_nothing_is_suppressed():
	g = TypeGraph()
	sink = CollectingSink()
	orphan = g.new_class("Orphan", declared_in=None)
	tt = TypeTranslator(g, None, diagnostics=sink)
	assert not tt.is_blacklisted(orphan.symbol)
	assert tt.translate(orphan) == "!Orphan"
	assert sink.diagnostics == []


def test_empty_blacklist_still_checks_declarations():
	g = TypeGraph()
	orphan = g.new_class("Orphan", declared_in=None)
	tt = TypeTranslator(g, None, path_blacklist=frozenset())
	assert tt.translate(orphan) == "?"
	assert tt.translate(g.new_class("Fine")) == "!Fine"


def test_path_blacklist_container():
	bl = PathBlacklist(["a.ts", "b.ts", "a.ts"])
	assert len(bl) == 2
	assert "a.ts" in bl
	assert "c.ts" not in bl


def test_from_options():
	g = TypeGraph()
	foo = g.new_class("Foo")
	gen = g.new_class("Gen", declared_in=GENERATED)
	opts = TranslatorOptions(path_blacklist=frozenset({GENERATED}), symbol_aliases=SymbolAliases({foo.symbol: "x.Foo"}))
	tt = TypeTranslator.from_options(g, None, opts)
	assert tt.translate(foo) == "!x.Foo"
	assert tt.translate(gen) == "?"
