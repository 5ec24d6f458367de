# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from typeshift.cli import main

GENERATED = "gen/externs.d.ts"


def _write_graph(tmp_path: Path, **extra) -> Path:
	doc = {
		"symbols": {
			"ns": {"name": "ns", "flags": ["namespace_module"], "declarations": ["src/ns.ts"]},
			"Foo": {"name": "Foo", "flags": ["class"], "declarations": ["src/foo.ts"]},
			"Bar": {"name": "Bar", "flags": ["class"], "declarations": ["src/bar.ts"], "parent": "ns"},
			"Gen": {"name": "Gen", "flags": ["class"], "declarations": [GENERATED]},
			"lit": {"name": "__type", "flags": ["type_literal"], "declarations": ["src/lit.ts"], "members": {"a": "lit.a", "b": "lit.b"}},
			"lit.a": {"name": "a", "flags": ["property"], "type": "number"},
			"lit.b": {"name": "b", "flags": ["property", "optional"], "type": "opt_string"},
		},
		"types": {
			"foo": {"flags": ["object"], "object_flags": ["class"], "symbol": "Foo"},
			"bar": {"flags": ["object"], "object_flags": ["class"], "symbol": "Bar"},
			"gen": {"flags": ["object"], "object_flags": ["class"], "symbol": "Gen"},
			"lit": {"flags": ["object"], "object_flags": ["anonymous"], "symbol": "lit"},
			"number": {"flags": ["number"]},
			"string": {"flags": ["string"]},
			"undefined": {"flags": ["undefined"]},
			"opt_string": {"flags": ["union"], "types": ["string", "undefined"]},
			"never": {"flags": ["never"]},
			"loop": {"flags": ["object"], "object_flags": ["reference"]},
		},
		"translate": ["foo", "bar", "lit", "never"],
	}
	doc["types"]["loop"]["target"] = "loop"
	doc.update(extra)
	path = tmp_path / "graph.json"
	path.write_text(json.dumps(doc), encoding="utf-8")
	return path


def test_prints_one_line_per_type(tmp_path, capsys):
	path = _write_graph(tmp_path)
	assert main([str(path)]) == 0
	out, err = capsys.readouterr()
	assert out.splitlines() == [
		"foo: !Foo",
		"bar: !ns.Bar",
		"lit: {a: number, b: (string|undefined)}",
		"never: ?",
	]
	assert err.splitlines() == [f"{path}:?:?: warning: should not emit a 'never' type"]


def test_blacklist_from_command_line(tmp_path, capsys):
	path = _write_graph(tmp_path, translate=["gen", "foo"])
	assert main([str(path)]) == 0
	assert capsys.readouterr().out.splitlines() == ["gen: !Gen", "foo: !Foo"]
	assert main([str(path), "--blacklist", GENERATED]) == 0
	assert capsys.readouterr().out.splitlines() == ["gen: ?", "foo: !Foo"]


def test_blacklist_from_graph_file(tmp_path, capsys):
	path = _write_graph(tmp_path, translate=["gen"], blacklist=[GENERATED])
	assert main([str(path)]) == 0
	assert capsys.readouterr().out.splitlines() == ["gen: ?"]


def test_aliases_from_graph_file(tmp_path, capsys):
	path = _write_graph(tmp_path, translate=["foo"], aliases={"Foo": "tsickle_import.Foo"})
	assert main([str(path)]) == 0
	assert capsys.readouterr().out.splitlines() == ["foo: !tsickle_import.Foo"]


def test_json_output(tmp_path, capsys):
	path = _write_graph(tmp_path)
	assert main([str(path), "--json"]) == 0
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 0
	assert payload["annotations"] == {
		"foo": "!Foo",
		"bar": "!ns.Bar",
		"lit": "{a: number, b: (string|undefined)}",
		"never": "?",
	}
	assert [d["code"] for d in payload["diagnostics"]] == ["TT-NEVER"]
	assert payload["diagnostics"][0]["file"] == str(path)
	assert payload["diagnostics"][0]["severity"] == "warning"


def test_reference_loop_is_fatal(tmp_path, capsys):
	path = _write_graph(tmp_path, translate=["foo", "loop", "bar"])
	assert main([str(path), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	assert payload["annotations"] == {"foo": "!Foo"}
	(diag,) = payload["diagnostics"]
	assert diag["code"] == "TT-FATAL"
	assert diag["severity"] == "error"
	assert diag["message"].startswith("reference loop in {type flags:0x8000 Object object:Reference}")
	assert diag["notes"] == ["type id loop"]


def test_fatal_error_in_text_mode(tmp_path, capsys):
	path = _write_graph(tmp_path, translate=["loop"])
	assert main([str(path)]) == 1
	out, err = capsys.readouterr()
	assert out == ""
	assert ": error: reference loop in" in err
	assert "  note: type id loop" in err


def test_check_accepts_translator_output(tmp_path, capsys):
	path = _write_graph(tmp_path)
	assert main([str(path), "--check"]) == 0
	capsys.readouterr()


def test_check_rejects_unparseable_names(tmp_path, capsys):
	path = _write_graph(tmp_path, translate=["foo"], aliases={"Foo": "not a name"})
	assert main([str(path), "--check", "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["annotations"] == {"foo": "!not a name"}
	assert [d["code"] for d in payload["diagnostics"]] == ["TT-MALFORMED"]


def test_missing_file_is_usage_error(tmp_path, capsys):
	with pytest.raises(SystemExit) as info:
		main([str(tmp_path / "missing.json")])
	assert info.value.code == 2
	capsys.readouterr()


def test_undecodable_graph_is_usage_error(tmp_path, capsys):
	path = tmp_path / "bad.json"
	path.write_bytes(b"\xff")
	with pytest.raises(SystemExit) as info:
		main([str(path)])
	assert info.value.code == 2
	assert "not UTF-8 text" in capsys.readouterr().err


def test_malformed_signature_is_usage_error(tmp_path, capsys):
	path = _write_graph(tmp_path, signatures={"s": []})
	with pytest.raises(SystemExit) as info:
		main([str(path)])
	assert info.value.code == 2
	assert "signatures.s: signature entry must be an object" in capsys.readouterr().err


def test_malformed_graph_is_usage_error(tmp_path, capsys):
	path = tmp_path / "bad.json"
	path.write_text(json.dumps({"types": {"t": {"flags": ["strng"]}}}), encoding="utf-8")
	with pytest.raises(SystemExit) as info:
		main([str(path)])
	assert info.value.code == 2
	assert "unknown TypeFlags name 'strng'" in capsys.readouterr().err
