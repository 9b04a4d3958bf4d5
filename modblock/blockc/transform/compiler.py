# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Module-block compiler.

Pipeline for one compilation unit:

	parse -> rewrite items bottom-up -> inject shim import -> generate

Rewriting visits children before parents. Each `module { }` body is
compiled with the whole pipeline before it is replaced:

1. its dynamic `import()` calls are rewritten and nested blocks are already
   replaced by their artifacts (children first);
2. the shim import is injected into the body;
3. the body is regenerated and parsed again, so the offset scanner works on
   exactly the text that will be stitched;
4. the splits are stitched into a `new ModuleBlock(`...`)` artifact.

Nested block artifacts live inside their parent's body text, so the parent's
scan relocates the `import.meta.url` uses they carry: a nested block ends up
bound to the module that created the outermost block.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from ...runtime.module_block import Materializer, ModuleBlock
from ..parser.ast import Group, Item, Leaf, ModuleExpr, Program, Template, with_newline
from ..parser.parser import parse_program
from ..parser.printer import generate
from .call_sites import rewrite_import_calls
from .inject import inject_shim_import
from .options import CompilerOptions
from .scanner import scan_splits
from .splice import SplicePlan, build_artifact, build_splice_plan

logger = logging.getLogger(__name__)


def plan_module_body(items: Sequence[Item], options: CompilerOptions) -> SplicePlan:
	"""
	Splice plan for an already rewritten block body.

	The body must not contain uncompiled blocks any more; the scanner treats
	one as a compiler bug.
	"""
	body = inject_shim_import(Program(tuple(items)), options)
	text = generate(body)
	splits = scan_splits(parse_program(text))
	logger.debug("module block body: %d chars, %d splits", len(text), len(splits))
	return build_splice_plan(text, splits)


class _ModuleBlockRewriter:
	def __init__(self, options: CompilerOptions) -> None:
		self.options = options
		self.outer_plans: List[SplicePlan] = []
		self._depth = 0

	def items(self, items: Sequence[Item]) -> Tuple[Item, ...]:
		out: List[Item] = []
		for item in items:
			out.extend(self.item(item))
		return rewrite_import_calls(out, self.options)

	def item(self, item: Item) -> Tuple[Item, ...]:
		if isinstance(item, Leaf):
			return (item,)
		if isinstance(item, Group):
			return (replace(item, items=self.items(item.items), start=None, end=None),)
		if isinstance(item, Template):
			subs = tuple(self.items(sub) for sub in item.substitutions)
			return (replace(item, substitutions=subs, start=None, end=None),)
		if isinstance(item, ModuleExpr):
			return self.block(item)
		raise TypeError(f"unexpected item {type(item).__name__}")

	def block(self, expr: ModuleExpr) -> Tuple[Item, ...]:
		self._depth += 1
		try:
			body = self.items(expr.items)
		finally:
			self._depth -= 1
		plan = plan_module_body(body, self.options)
		if self._depth == 0:
			self.outer_plans.append(plan)
		artifact = build_artifact(plan, self.options)
		if expr.newline:
			artifact = (with_newline(artifact[0]),) + artifact[1:]
		return artifact


def compile_program(program: Program, options: Optional[CompilerOptions] = None) -> Program:
	"""Rewrite a parsed program; the result is a new, non-fresh program."""
	options = options or CompilerOptions()
	rewriter = _ModuleBlockRewriter(options)
	return inject_shim_import(Program(rewriter.items(program.items)), options)


def compile_source(source: str, options: Optional[CompilerOptions] = None) -> str:
	"""
	Compile JavaScript module source containing `module { }` literals.

	Raises `ParseError` for input that cannot be tokenized or whose brackets
	and template literals do not balance.
	"""
	program = parse_program(source)
	output = generate(compile_program(program, options))
	logger.debug("compiled unit: %d chars in, %d chars out", len(source), len(output))
	return output


def extract_module_blocks(
	source: str,
	meta_url: str,
	options: Optional[CompilerOptions] = None,
	materializer: Optional[Materializer] = None,
) -> List[ModuleBlock]:
	"""
	Outermost module blocks of `source`, as created by a module at `meta_url`.

	Each body is what the compiled artifact evaluates to at run time: every
	`import.meta` member and local import specifier is resolved against
	`meta_url`.
	"""
	options = options or CompilerOptions()
	rewriter = _ModuleBlockRewriter(options)
	rewriter.items(parse_program(source).items)
	return [ModuleBlock(plan.render(meta_url), materializer) for plan in rewriter.outer_plans]


__all__ = ["CompilerOptions", "plan_module_body", "compile_program", "compile_source", "extract_module_blocks"]
