# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser for emitted annotations.

Used to check translator output against the dialect subset it is supposed to
produce: `?`, primitives, `!Name<...>`, `(A|B)`, `{f: T}`, `function(...)`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from typeshift.errors import AnnotationSyntaxError

_GRAMMAR_PATH = Path(__file__).with_name("annotation.lark")


@lru_cache(maxsize=1)
def _parser() -> Lark:
	return Lark(_GRAMMAR_PATH.read_text(), parser="lalr", maybe_placeholders=True)


def parse_annotation(text: str) -> Tree:
	"""Parse `text`, raising AnnotationSyntaxError if it is not in the dialect."""
	try:
		return _parser().parse(text)
	except UnexpectedInput as err:
		detail = str(err).strip().splitlines()[0] if str(err).strip() else type(err).__name__
		raise AnnotationSyntaxError(text, getattr(err, "column", None), detail) from err


def is_well_formed(text: str) -> bool:
	try:
		parse_annotation(text)
	except AnnotationSyntaxError:
		return False
	return True


def nominal_names(tree: Tree) -> List[str]:
	"""Qualified names of every `!Name` reference, in source order."""
	names: List[str] = []
	for node in tree.iter_subtrees_topdown():
		if node.data == "qualified_name":
			names.append(".".join(str(tok) for tok in node.children if isinstance(tok, Token)))
	return names


__all__ = ["is_well_formed", "nominal_names", "parse_annotation"]
