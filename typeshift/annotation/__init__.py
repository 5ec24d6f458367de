# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Grammar check for the annotation dialect emitted by the translator."""

from .parser import is_well_formed, nominal_names, parse_annotation

__all__ = ["is_well_formed", "nominal_names", "parse_annotation"]
