# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Dynamic `import()` call-site rewriting.

- `import("./x.js")` (one local path literal) resolves eagerly at the call
  site: `import(new URL("./x.js", import.meta.url))`;
- any other single argument is passed through the shim's `fixup`, so a module
  block that lost its class in a structured clone is recovered:
  `import(ModuleBlock.fixup(x))`;
- calls with zero or several arguments (import attributes) are left alone.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence, Tuple

from ..parser.ast import Group, Item, detach_all, is_group, is_name, is_punct, is_string, name, punct
from ..parser.parser import decode_string, parse_snippet
from .options import CompilerOptions
from .scanner import is_local_file_path

logger = logging.getLogger(__name__)


def split_arguments(items: Sequence[Item]) -> List[Tuple[Item, ...]]:
	"""Split call argument items on top-level commas; a trailing comma adds nothing."""
	args: List[Tuple[Item, ...]] = []
	current: List[Item] = []
	for item in items:
		if is_punct(item, ","):
			args.append(tuple(current))
			current = []
		else:
			current.append(item)
	if current or args:
		args.append(tuple(current))
	if args and not args[-1]:
		args.pop()
	return args


def _is_fixup_call(arg: Sequence[Item], options: CompilerOptions) -> bool:
	return (
		len(arg) == 4
		and is_name(arg[0], options.shim_binding)
		and is_punct(arg[1], ".")
		and is_name(arg[2], "fixup")
		and is_group(arg[3], "(")
	)


def _is_resolved_url(arg: Sequence[Item]) -> bool:
	"""`new URL("...", import.meta.url)`, the shape a local path literal is rewritten to."""
	if not (len(arg) == 3 and is_name(arg[0], "new") and is_name(arg[1], "URL") and is_group(arg[2], "(")):
		return False
	inner = arg[2].items
	return (
		len(inner) > 2
		and is_string(inner[0])
		and is_punct(inner[1], ",")
		and detach_all(inner[2:]) == parse_snippet("import.meta.url")
	)


def _with_items(group: Group, items: Tuple[Item, ...]) -> Group:
	return replace(group, items=items, start=None, end=None)


def rewrite_import_call(args: Group, options: CompilerOptions) -> Group:
	"""Rewrite the argument group of one `import(...)` call."""
	parts = split_arguments(args.items)
	if len(parts) != 1:
		return args
	(arg,) = parts
	if len(arg) == 1 and is_string(arg[0]) and is_local_file_path(decode_string(arg[0].text)):
		target = (name("new"), name("URL"), Group("(", (arg[0], punct(",")) + parse_snippet("import.meta.url")))
		return _with_items(args, target)
	if _is_fixup_call(arg, options) or _is_resolved_url(arg):
		return args
	return _with_items(args, (name(options.shim_binding), punct("."), name("fixup"), Group("(", arg)))


def rewrite_import_calls(items: Sequence[Item], options: CompilerOptions) -> Tuple[Item, ...]:
	"""Rewrite every `import(...)` call among `items` (one nesting level)."""
	out: List[Item] = []
	for i, item in enumerate(items):
		prev = items[i - 1] if i else None
		if (
			is_group(item, "(")
			and is_name(prev, "import")
			and not (i > 1 and (is_punct(items[i - 2], ".") or is_punct(items[i - 2], "?.")))
			# `import(x) { ... }` defines a method named `import`.
			and not (i + 1 < len(items) and is_group(items[i + 1], "{"))
		):
			rewritten = rewrite_import_call(item, options)
			if rewritten is not item:
				logger.debug("rewrote dynamic import() call")
			out.append(rewritten)
			continue
		out.append(item)
	return tuple(out)


__all__ = ["split_arguments", "rewrite_import_call", "rewrite_import_calls"]
