"""
typeshift.core: engine-facing model and shared diagnostics.

Modules:
  - type_model: flag enums and the Type/Symbol/Signature/TypeChecker protocols
  - type_graph: in-memory TypeGraph implementing those protocols
  - diagnostics / span: Diagnostic records and sinks
  - debug_strings: one-line dumps of types and symbols
  - source_files: builtin-lib detection and type-checked source assertion
"""

__all__ = [
    "debug_strings",
    "diagnostics",
    "source_files",
    "span",
    "type_graph",
    "type_model",
]
