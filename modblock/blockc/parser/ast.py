# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Token-tree nodes.

A program is a sequence of items; an item is a token (`Leaf`), a bracketed
`Group`, a `Template` literal or a `ModuleExpr` (`module { ... }`).

Nodes are frozen and hold tuples: passes build new nodes from children and
never edit a node that might be shared. Offsets (`start`/`end`) index the
text a `Program` was parsed from and are only meaningful while that program
still carries its `source`; synthesized nodes have no offsets.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple, Union

# Bracket pairs by opening character.
CLOSERS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True)
class Leaf:
	kind: str  # lexer terminal: NAME, NUMBER, STRING, REGEX, PUNCT
	text: str
	start: Optional[int] = None
	end: Optional[int] = None
	newline: bool = False  # a line break precedes this token


@dataclass(frozen=True)
class Group:
	open: str
	items: Tuple["Item", ...]
	start: Optional[int] = None
	end: Optional[int] = None
	newline: bool = False
	close_newline: bool = False

	@property
	def close(self) -> str:
		return CLOSERS[self.open]


@dataclass(frozen=True)
class Template:
	"""
	Template literal.

	`quasis` hold the raw text between delimiters (escapes kept as written);
	`substitutions[i]` sits between `quasis[i]` and `quasis[i + 1]`.
	"""

	quasis: Tuple[str, ...]
	substitutions: Tuple[Tuple["Item", ...], ...] = ()
	start: Optional[int] = None
	end: Optional[int] = None
	newline: bool = False

	def __post_init__(self) -> None:
		if len(self.quasis) != len(self.substitutions) + 1:
			raise ValueError("template shape mismatch: quasis/substitutions")


@dataclass(frozen=True)
class ModuleExpr:
	"""`module { items }` block literal."""

	items: Tuple["Item", ...]
	start: Optional[int] = None
	end: Optional[int] = None
	newline: bool = False
	close_newline: bool = False


Item = Union[Leaf, Group, Template, ModuleExpr]


@dataclass(frozen=True)
class Program:
	items: Tuple[Item, ...]
	# Text this program was parsed from; None once any pass rebuilt it.
	source: Optional[str] = field(default=None, compare=False)

	@property
	def is_fresh(self) -> bool:
		return self.source is not None


def name(text: str) -> Leaf:
	return Leaf("NAME", text)


def punct(text: str) -> Leaf:
	return Leaf("PUNCT", text)


def is_name(item: object, text: Optional[str] = None) -> bool:
	return isinstance(item, Leaf) and item.kind == "NAME" and (text is None or item.text == text)


def is_punct(item: object, text: Optional[str] = None) -> bool:
	return isinstance(item, Leaf) and item.kind == "PUNCT" and (text is None or item.text == text)


def is_string(item: object) -> bool:
	return isinstance(item, Leaf) and item.kind == "STRING"


def is_group(item: object, opener: str) -> bool:
	return isinstance(item, Group) and item.open == opener


def detach(item: Item) -> Item:
	"""Copy of `item` without offsets or line breaks (for splicing snippets)."""
	if isinstance(item, Leaf):
		return Leaf(item.kind, item.text)
	if isinstance(item, Group):
		return Group(item.open, detach_all(item.items))
	if isinstance(item, Template):
		return Template(item.quasis, tuple(detach_all(sub) for sub in item.substitutions))
	return ModuleExpr(detach_all(item.items))


def detach_all(items: Iterable[Item]) -> Tuple[Item, ...]:
	return tuple(detach(item) for item in items)


def with_newline(item: Item, newline: bool = True) -> Item:
	return replace(item, newline=newline, start=None, end=None)


__all__ = [
	"CLOSERS",
	"Leaf",
	"Group",
	"Template",
	"ModuleExpr",
	"Item",
	"Program",
	"name",
	"punct",
	"is_name",
	"is_punct",
	"is_string",
	"is_group",
	"detach",
	"detach_all",
	"with_newline",
]
