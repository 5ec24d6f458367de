# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
typeshift: translate resolved source types into annotation-dialect strings.

Modules:
  core: engine-facing type model, in-memory type graph, diagnostics
  type_translator: the recursive type -> annotation translation
  symbol_names / blacklist: naming and path-based suppression
  annotation: grammar check for emitted annotations
  graph_json / cli: JSON type graphs and the `typeshift` command
"""

from typeshift.errors import TranslationError
from typeshift.type_translator import TranslatorOptions, TypeTranslator

__all__ = ["TranslationError", "TranslatorOptions", "TypeTranslator"]
