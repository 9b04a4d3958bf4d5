# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput, UnexpectedToken

from .ast import Group, Item, Leaf, ModuleExpr, Program, Template, detach_all
from .errors import ParseError
from .lexer import JsLexer

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer=JsLexer,
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)

_STRING_ESCAPE = re.compile(
	"\\\\(?:"
	"(?P<cont>\r\n|[\n\r\u2028\u2029])"
	"|x(?P<hex>[0-9a-fA-F]{2})"
	"|u\\{(?P<code_point>[0-9a-fA-F]+)\\}"
	"|u(?P<unit>[0-9a-fA-F]{4})"
	"|(?P<octal>[0-3][0-7]{0,2}|[4-7][0-7]?)"
	"|(?P<char>.)"
	")",
	re.S,
)
_SINGLE_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v"}


def parse_program(source: str) -> Program:
	"""
	Parse `source` into a token tree.

	The returned program remembers `source`, which is what makes its offsets
	usable by the offset scanner. Raises `ParseError` on lexical errors and
	unbalanced brackets/templates; no partial tree is returned.
	"""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as err:
		raise ParseError(_describe(err), line=_as_int(getattr(err, "line", None)), column=_as_int(getattr(err, "column", None))) from err
	return _TreeBuilder().build_program(tree, source)


def parse_snippet(source: str) -> Tuple[Item, ...]:
	"""Parse a code fragment into position-free items ready to splice into another tree."""
	return detach_all(parse_program(source).items)


def decode_string(literal: str) -> str:
	"""
	Decode a JS string literal token (quotes included) into its value.

	Escapes are decoded in one left-to-right pass, so an escaped backslash
	never starts another escape. Unknown escapes (`\\N`, `\\U`) stand for the
	character itself; malformed `\\x` / `\\u` escapes are a `ParseError`.
	`\\uXXXX` surrogate pairs are joined into one code point.
	"""
	body = literal[1:-1]
	if "\\" not in body:
		return body

	def escape(m: re.Match) -> str:
		if m.group("cont") is not None:
			return ""
		if m.group("hex") is not None:
			return chr(int(m.group("hex"), 16))
		if m.group("code_point") is not None:
			value = int(m.group("code_point"), 16)
			if value > 0x10FFFF:
				raise ParseError(f"code point escape out of range in string literal {literal}")
			return chr(value)
		if m.group("unit") is not None:
			return chr(int(m.group("unit"), 16))
		if m.group("octal") is not None:
			return chr(int(m.group("octal"), 8))
		char = m.group("char")
		if char in ("x", "u"):
			raise ParseError(f"invalid escape sequence in string literal {literal}")
		return _SINGLE_ESCAPES.get(char, char)

	value = _STRING_ESCAPE.sub(escape, body)
	try:
		return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
	except UnicodeDecodeError:
		# Lone surrogates are valid in JS strings; keep them as they are.
		return value


def _describe(err: UnexpectedInput) -> str:
	if isinstance(err, UnexpectedToken):
		tok = err.token
		if tok.type == "$END":
			return "unexpected end of input: unclosed bracket, block or template literal"
		return f"unexpected {tok.value!r}: unbalanced bracket"
	return str(err)


def _as_int(value: object) -> Optional[int]:
	return value if isinstance(value, int) and value > 0 else None


class _TreeBuilder:
	"""
	Convert lark trees into token-tree nodes.

	Tokens are visited in document order so a token's `newline` flag can be
	derived from the end line of the token before it (comments included in
	the gap, which is what automatic semicolon insertion looks at as well).
	"""

	def __init__(self) -> None:
		self._last_line: Optional[int] = None

	def build_program(self, tree: Tree, source: str) -> Program:
		return Program(items=self._items(tree.children), source=source)

	def _breaks(self, tok: Token) -> bool:
		broke = self._last_line is not None and tok.line > self._last_line
		self._last_line = tok.end_line
		return broke

	def _items(self, children: Iterable[object]) -> Tuple[Item, ...]:
		return tuple(self._item(child) for child in children)

	def _item(self, node: object) -> Item:
		if isinstance(node, Token):
			return Leaf(node.type, node.value, start=node.start_pos, end=node.end_pos, newline=self._breaks(node))
		kind = _name(node)
		if kind in ("paren", "bracket", "brace"):
			open_tok, *inner, close_tok = node.children
			newline = self._breaks(open_tok)
			items = self._items(inner)
			return Group(
				open_tok.value,
				items,
				start=open_tok.start_pos,
				end=close_tok.end_pos,
				newline=newline,
				close_newline=self._breaks(close_tok),
			)
		if kind == "module_expr":
			keyword, lbrace, *inner, rbrace = node.children
			newline = self._breaks(keyword)
			self._breaks(lbrace)
			items = self._items(inner)
			return ModuleExpr(
				items,
				start=keyword.start_pos,
				end=rbrace.end_pos,
				newline=newline,
				close_newline=self._breaks(rbrace),
			)
		if kind == "template":
			return self._template(node)
		raise TypeError(f"unexpected tree node {kind!r}")

	def _template(self, node: Tree) -> Template:
		first = node.children[0]
		newline = self._breaks(first)
		if first.type == "NO_SUBST_TEMPLATE":
			return Template((first.value[1:-1],), (), start=first.start_pos, end=first.end_pos, newline=newline)
		quasis: List[str] = [first.value[1:-2]]
		substitutions: List[Tuple[Item, ...]] = []
		for child in node.children[1:]:
			if isinstance(child, Tree):
				substitutions.append(self._items(child.children))
				continue
			self._breaks(child)
			if child.type == "TEMPLATE_MIDDLE":
				quasis.append(child.value[1:-2])
			else:
				quasis.append(child.value[1:-1])
		last = node.children[-1]
		return Template(tuple(quasis), tuple(substitutions), start=first.start_pos, end=last.end_pos, newline=newline)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_program", "parse_snippet", "decode_string"]
