# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source location attached to translator diagnostics.

The translator only knows its anchor node, which is an engine object. A Span
keeps whatever file/line/column it can find on that object and stores the
object itself in `raw` so richer renderers can recover engine details.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort file/line/column plus the raw anchor object."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_node(cls, node: Any) -> "Span":
		"""
		Build a Span from an anchor node or declaration.

		Recognizes `source_path`/`file_name`/`file` for the path and
		`line`/`column` for the position. Unknown objects yield an empty Span
		that still remembers `raw`.
		"""
		if node is None:
			return cls()
		if isinstance(node, cls):
			return node
		file = getattr(node, "source_path", None) or getattr(node, "file_name", None) or getattr(node, "file", None)
		return cls(
			file=file,
			line=getattr(node, "line", None),
			column=getattr(node, "column", None),
			raw=node,
		)

	def format_prefix(self) -> str:
		"""Render as `file:line:column`, with `?` for unknown parts."""
		file = self.file if self.file else "<unknown>"
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{file}:{line}:{column}"


__all__ = ["Span"]
