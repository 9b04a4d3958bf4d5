# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Token-tree parser and canonical printer for JavaScript with `module { }` blocks.
"""

from .ast import Group, Item, Leaf, ModuleExpr, Program, Template
from .errors import InternalConsistencyError, ParseError
from .parser import decode_string, parse_program, parse_snippet
from .printer import generate

__all__ = [
	"Group",
	"Item",
	"Leaf",
	"ModuleExpr",
	"Program",
	"Template",
	"InternalConsistencyError",
	"ParseError",
	"decode_string",
	"parse_program",
	"parse_snippet",
	"generate",
]
