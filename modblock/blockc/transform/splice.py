# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Split-stitcher.

A module block body is cut at its splits into literal text segments and
substitutions. Segments are collected back to front (largest `start` first),
slicing the tail off the remaining text each time, so every offset is used
against the text it was computed on:

	remainder = body
	for split in splits, descending start:
		literals.append(remainder[split.end:])
		substitutions.append(substitution for split)
		remainder = remainder[:split.start]
	literals.append(remainder)
	reverse both lists

The plan becomes the artifact `new ModuleBlock(`<template>`)`: literals are
the template's raw text (escaped so the cooked value equals the body text)
and each substitution is an expression evaluated when the block is created,
i.e. in the creator's module.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urljoin

from ..parser.ast import Group, Item, Template, name
from ..parser.errors import InternalConsistencyError
from ..parser.parser import decode_string, parse_snippet
from .options import CompilerOptions
from .scanner import Split, SplitKind


@dataclass(frozen=True)
class Substitution:
	kind: SplitKind
	specifier: Optional[str] = None  # STATIC_IMPORT only, decoded

	def expression(self) -> Tuple[Item, ...]:
		"""Items of the JS expression computing this substitution at creation time."""
		if self.kind is SplitKind.META_URL:
			return parse_snippet("JSON.stringify(import.meta.url)")
		if self.kind is SplitKind.STATIC_IMPORT:
			return parse_snippet(f"JSON.stringify(new URL({json.dumps(self.specifier, ensure_ascii=False)}, import.meta.url))")
		raise InternalConsistencyError(f"unknown split kind {self.kind!r}")

	def evaluate(self, meta_url: str) -> str:
		"""What `expression()` yields in a module whose `import.meta.url` is `meta_url`."""
		if self.kind is SplitKind.META_URL:
			return json.dumps(meta_url, ensure_ascii=False)
		if self.kind is SplitKind.STATIC_IMPORT:
			return json.dumps(urljoin(meta_url, self.specifier), ensure_ascii=False)
		raise InternalConsistencyError(f"unknown split kind {self.kind!r}")


@dataclass(frozen=True)
class SplicePlan:
	source: str
	literals: Tuple[str, ...]
	substitutions: Tuple[Substitution, ...]

	def __post_init__(self) -> None:
		if len(self.literals) != len(self.substitutions) + 1:
			raise InternalConsistencyError(
				f"splice plan shape mismatch: {len(self.literals)} literals for {len(self.substitutions)} substitutions"
			)

	def render(self, meta_url: str) -> str:
		"""Body text of the block as created in a module at `meta_url`."""
		parts = [self.literals[0]]
		for sub, literal in zip(self.substitutions, self.literals[1:]):
			parts.append(sub.evaluate(meta_url))
			parts.append(literal)
		return "".join(parts)


def _substitution(source: str, split: Split) -> Substitution:
	if split.kind is SplitKind.META_URL:
		return Substitution(SplitKind.META_URL)
	if split.kind is SplitKind.STATIC_IMPORT:
		return Substitution(SplitKind.STATIC_IMPORT, decode_string(source[split.start:split.end]))
	raise InternalConsistencyError(f"unknown split kind {split.kind!r}")


def build_splice_plan(source: str, splits: Sequence[Split]) -> SplicePlan:
	literals: List[str] = []
	substitutions: List[Substitution] = []
	remainder = source
	limit = len(source)
	for split in sorted(splits, key=lambda s: s.start, reverse=True):
		if not (0 <= split.start <= split.end <= limit):
			raise InternalConsistencyError(f"overlapping or out-of-range split {split!r}")
		literals.append(remainder[split.end:])
		substitutions.append(_substitution(source, split))
		remainder = remainder[:split.start]
		limit = split.start
	literals.append(remainder)
	literals.reverse()
	substitutions.reverse()
	return SplicePlan(source, tuple(literals), tuple(substitutions))


def escape_template_raw(text: str) -> str:
	"""Escape `text` so that a template literal with this raw text cooks back to `text`."""
	# Backslashes first; `\r` is escaped because raw CRs are normalized to LF.
	return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${").replace("\r", "\\r")


def build_artifact(plan: SplicePlan, options: CompilerOptions) -> Tuple[Item, ...]:
	"""`new <binding>(`<template>`)` items for `plan`."""
	template = Template(
		tuple(escape_template_raw(lit) for lit in plan.literals),
		tuple(sub.expression() for sub in plan.substitutions),
	)
	return (name("new"), name(options.shim_binding), Group("(", (template,)))


__all__ = ["Substitution", "SplicePlan", "build_splice_plan", "escape_template_raw", "build_artifact"]
