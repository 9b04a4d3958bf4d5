# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
from __future__ import annotations

import json
from typing import Sequence, Tuple

from ..parser.ast import Item, Program, is_group, is_name, is_string, with_newline
from ..parser.parser import decode_string, parse_snippet
from .options import CompilerOptions


def shim_import_items(options: CompilerOptions) -> Tuple[Item, ...]:
	"""Items of `import { <binding> } from "<specifier>";`."""
	return parse_snippet(f"import {{ {options.shim_binding} }} from {json.dumps(options.shim_specifier, ensure_ascii=False)};")


def _is_shim_import(items: Sequence[Item], i: int, options: CompilerOptions) -> bool:
	if i + 3 >= len(items):
		return False
	head, names, keyword, spec = items[i:i + 4]
	return (
		is_name(head, "import")
		and is_group(names, "{")
		and len(names.items) == 1
		and is_name(names.items[0], options.shim_binding)
		and is_name(keyword, "from")
		and is_string(spec)
		and decode_string(spec.text) == options.shim_specifier
	)


def has_shim_import(program: Program, options: CompilerOptions) -> bool:
	items = program.items
	return any(_is_shim_import(items, i, options) for i in range(len(items)))


def inject_shim_import(program: Program, options: CompilerOptions) -> Program:
	"""
	Prepend the shim import to `program`, once.

	A program that already imports the shim binding from the shim specifier is
	returned as is. Otherwise the result is a new (non-fresh) program whose
	original first item starts on its own line.
	"""
	if has_shim_import(program, options):
		return program
	items = program.items
	if items:
		items = (with_newline(items[0]),) + items[1:]
	return Program(shim_import_items(options) + items)


__all__ = ["shim_import_items", "has_shim_import", "inject_shim_import"]
