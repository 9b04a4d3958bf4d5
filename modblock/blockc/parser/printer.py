# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Canonical JavaScript text from token trees.

Output is deterministic and depends only on the tree:
- a line break is printed wherever the tree records one (`newline` /
  `close_newline`), indented two spaces per bracket level, so automatic
  semicolon insertion sees exactly the line breaks of the input;
- otherwise tokens are separated by one space, except for the attachments in
  `_space_between` (member dots, call/index brackets, postfix `++`/`--`,
  unary `!`/`~`, spread, and before `,` `;` `)` `]`, and before `:` unless
  it belongs to a conditional `a ? b : c`).

Every attachment keeps the token boundaries the lexer would find, so
`generate(parse_program(generate(p))) == generate(p)`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from .ast import Group, Item, Leaf, ModuleExpr, Program, Template

INDENT = "  "

# Reserved words; `f (x)` vs `f(x)` only matters for readability, but a keyword
# is never an operand, so `(`/`[` after it stay detached.
_KEYWORDS = frozenset(
	{
		"break", "case", "catch", "class", "const", "continue", "debugger", "default",
		"delete", "do", "else", "export", "extends", "finally", "for", "function", "if",
		"in", "instanceof", "let", "new", "return", "switch", "throw", "try", "typeof",
		"var", "void", "while", "with", "yield", "await",
	}
)

_NO_SPACE_AFTER = frozenset({"(", "[", ".", "?.", "...", "!", "~"})
_NO_SPACE_BEFORE = frozenset({",", ";", ":", "?."})

_Piece = Tuple[str, str]


def _operand_end(piece: _Piece) -> bool:
	kind, text = piece
	if kind == "NAME":
		return text not in _KEYWORDS
	if kind == "CLOSE":
		return text in (")", "]")
	return kind in ("STRING", "TEMPLATE", "TEMPLATE_CLOSE")


def _space_between(prev: _Piece, cur: _Piece) -> bool:
	prev_kind, prev_text = prev
	kind, text = cur
	if prev_kind in ("PUNCT", "OPEN") and prev_text in _NO_SPACE_AFTER:
		return False
	if prev_kind in ("TEMPLATE_OPEN", "TEMPLATE_MID") or kind in ("TEMPLATE_MID", "TEMPLATE_CLOSE"):
		return False
	if prev_kind == "OPEN" and kind == "CLOSE":
		return False
	if kind == "CLOSE":
		return text == "}"
	if kind == "PUNCT":
		if text in _NO_SPACE_BEFORE:
			return False
		if text == ".":
			# `1 .toString()`: a dot right after an integer would join it.
			return prev_kind == "NUMBER"
		if text in ("++", "--"):
			return not _operand_end(prev)
		return True
	if kind == "OPEN" and text in ("(", "["):
		return not _operand_end(prev)
	if kind in ("TEMPLATE", "TEMPLATE_OPEN"):
		# Tagged template.
		return not (prev_kind == "NAME" and _operand_end(prev))
	return True


class _Printer:
	def __init__(self) -> None:
		self._out: List[str] = []
		self._prev: Optional[_Piece] = None
		# Unmatched `?` per nesting level; their `:` is spaced like an operator.
		self._ternaries: List[int] = []

	def text(self) -> str:
		return "".join(self._out)

	def _put(self, kind: str, text: str, *, newline: bool = False, depth: int = 0) -> None:
		if self._prev is not None:
			if newline:
				self._out.append("\n" + INDENT * depth)
			elif _space_between(self._prev, (kind, text)):
				self._out.append(" ")
		self._out.append(text)
		self._prev = (kind, text)

	def items(self, items: Sequence[Item], depth: int) -> None:
		self._ternaries.append(0)
		for item in items:
			self.item(item, depth)
		self._ternaries.pop()

	def _leaf(self, item: Leaf, depth: int) -> None:
		kind = item.kind
		if kind == "PUNCT" and item.text == "?":
			self._ternaries[-1] += 1
		elif kind == "PUNCT" and item.text == ":" and self._ternaries[-1]:
			self._ternaries[-1] -= 1
			kind = "TERNARY_ELSE"
		self._put(kind, item.text, newline=item.newline, depth=depth)

	def item(self, item: Item, depth: int) -> None:
		if isinstance(item, Leaf):
			self._leaf(item, depth)
		elif isinstance(item, Group):
			self._put("OPEN", item.open, newline=item.newline, depth=depth)
			self.items(item.items, depth + 1)
			self._put("CLOSE", item.close, newline=item.close_newline, depth=depth)
		elif isinstance(item, ModuleExpr):
			self._put("NAME", "module", newline=item.newline, depth=depth)
			self._put("OPEN", "{", depth=depth)
			self.items(item.items, depth + 1)
			self._put("CLOSE", "}", newline=item.close_newline, depth=depth)
		elif isinstance(item, Template):
			self._template(item, depth)
		else:
			raise TypeError(f"cannot print {type(item).__name__}")

	def _template(self, item: Template, depth: int) -> None:
		quasis = item.quasis
		if not item.substitutions:
			self._put("TEMPLATE", f"`{quasis[0]}`", newline=item.newline, depth=depth)
			return
		self._put("TEMPLATE_OPEN", f"`{quasis[0]}${{", newline=item.newline, depth=depth)
		last = len(item.substitutions) - 1
		for i, sub in enumerate(item.substitutions):
			self.items(sub, depth + 1)
			if i == last:
				self._put("TEMPLATE_CLOSE", f"}}{quasis[i + 1]}`", depth=depth)
			else:
				self._put("TEMPLATE_MID", f"}}{quasis[i + 1]}${{", depth=depth)


def generate(node: Union[Program, Sequence[Item]]) -> str:
	"""Render a program (or a bare item sequence) as canonical source text."""
	items = node.items if isinstance(node, Program) else tuple(node)
	printer = _Printer()
	printer.items(items, 0)
	return printer.text()


__all__ = ["generate", "INDENT"]
