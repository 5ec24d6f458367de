# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics emitted while translating types.

Translation never logs: every degraded case becomes a `Diagnostic` handed to a
`DiagnosticSink`. The default sink drops everything; embedders that want to
surface warnings pass a `CollectingSink` (or any callable-style sink of their
own).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

from .span import Span

TRANSLATE_PHASE = "typetranslate"


@dataclass
class Diagnostic:
	"""A translator diagnostic (warning for degraded output, error for fatal)."""

	message: str
	code: str | None = None
	phase: str | None = TRANSLATE_PHASE
	severity: str = "warning"
	span: Span = field(default_factory=Span)
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format_human(self) -> str:
		return f"{self.span.format_prefix()}: {self.severity}: {self.message}"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


class DiagnosticSink(Protocol):
	"""Receiver for translator diagnostics."""

	def report(self, diagnostic: Diagnostic) -> None:
		...


class NullSink:
	"""Default sink: discards every diagnostic."""

	def report(self, diagnostic: Diagnostic) -> None:
		return None


class CollectingSink:
	"""Keeps diagnostics in arrival order."""

	def __init__(self) -> None:
		self.diagnostics: List[Diagnostic] = []

	def report(self, diagnostic: Diagnostic) -> None:
		self.diagnostics.append(diagnostic)

	@property
	def messages(self) -> List[str]:
		return [d.message for d in self.diagnostics]

	def codes(self) -> List[str | None]:
		return [d.code for d in self.diagnostics]


__all__ = ["CollectingSink", "Diagnostic", "DiagnosticSink", "NullSink", "TRANSLATE_PHASE"]
