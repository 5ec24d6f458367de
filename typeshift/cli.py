# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`typeshift` command: translate the types of a JSON type graph.

Prints `<type id>: <annotation>` per requested type and warnings on stderr.
With --json, prints one object with annotations, diagnostics and exit_code.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

from typeshift.annotation import parse_annotation
from typeshift.core.diagnostics import CollectingSink, Diagnostic
from typeshift.core.span import Span
from typeshift.errors import AnnotationSyntaxError, GraphFormatError, TranslationError
from typeshift.graph_json import load_graph_file
from typeshift.type_translator import TypeTranslator


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="typeshift", description="Translate a type graph into annotation strings")
	p.add_argument("graph", type=Path, help="Path to the type graph JSON file")
	p.add_argument(
		"--blacklist",
		dest="blacklist",
		action="append",
		default=None,
		help="Source path whose symbols are always typed '?' (repeatable; extends the file's list)",
	)
	p.add_argument("--check", action="store_true", help="Reject annotations that are not well-formed in the dialect")
	p.add_argument("--json", action="store_true", help="Emit annotations and diagnostics as JSON")
	return p


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	try:
		loaded = load_graph_file(args.graph)
	except (OSError, GraphFormatError) as err:
		p.error(str(err))
		return 2

	sink = CollectingSink()
	translator = TypeTranslator.from_options(
		loaded.graph,
		Span(file=str(args.graph)),
		loaded.options(args.blacklist),
		diagnostics=sink,
	)

	annotations: Dict[str, str] = {}
	exit_code = 0
	for type_id in loaded.translate:
		try:
			annotation = translator.translate(loaded.types[type_id])
		except TranslationError as err:
			sink.report(Diagnostic(message=str(err), code="TT-FATAL", severity="error", span=Span(file=str(args.graph)), notes=[f"type id {type_id}"]))
			exit_code = 1
			break
		if args.check:
			try:
				parse_annotation(annotation)
			except AnnotationSyntaxError as err:
				sink.report(Diagnostic(message=str(err), code="TT-MALFORMED", severity="error", span=Span(file=str(args.graph)), notes=[f"type id {type_id}"]))
				exit_code = 1
		annotations[type_id] = annotation

	if args.json:
		payload = {
			"exit_code": exit_code,
			"annotations": annotations,
			"diagnostics": [d.to_dict() for d in sink.diagnostics],
		}
		print(json.dumps(payload, sort_keys=True))
		return exit_code

	for type_id, annotation in annotations.items():
		print(f"{type_id}: {annotation}")
	_print_diagnostics(sink.diagnostics)
	return exit_code


def _print_diagnostics(diagnostics: List[Diagnostic]) -> None:
	for diag in diagnostics:
		print(diag.format_human(), file=sys.stderr)
		for note in diag.notes:
			print(f"  note: {note}", file=sys.stderr)


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
