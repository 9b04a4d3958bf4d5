# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
blockc: compiles `module { }` block literals into relocatable `ModuleBlock` values.
"""

from .parser import ParseError, InternalConsistencyError, generate, parse_program
from .transform import CompilerOptions, compile_source, extract_module_blocks

__all__ = [
	"CompilerOptions",
	"InternalConsistencyError",
	"ParseError",
	"compile_source",
	"extract_module_blocks",
	"generate",
	"parse_program",
]
