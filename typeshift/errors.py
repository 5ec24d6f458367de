# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Exceptions raised by typeshift."""

from __future__ import annotations


class TranslationError(RuntimeError):
	"""
	Engine state contradicts the translator's assumptions.

	Raised for an unrecognized kind tag and for a reference whose target is
	itself. Never raised for properties of the user's code; those degrade to
	`?` with a diagnostic instead.
	"""


class UncheckedSourceError(ValueError):
	"""A source file was handed over before the engine type-checked it."""


class GraphFormatError(ValueError):
	"""A JSON type-graph description is malformed."""


class AnnotationSyntaxError(ValueError):
	"""Text is not a well-formed annotation in the output dialect."""

	def __init__(self, text: str, column: int | None, detail: str) -> None:
		self.text = text
		self.column = column
		self.detail = detail
		where = f" at column {column}" if column is not None else ""
		super().__init__(f"malformed annotation {text!r}{where}: {detail}")


__all__ = ["AnnotationSyntaxError", "GraphFormatError", "TranslationError", "UncheckedSourceError"]
