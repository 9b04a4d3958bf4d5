# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
JavaScript tokenizer for the token-tree grammar.

lark's regex lexers cannot tell a regular expression literal from a division
or a template continuation `}` from a block end, so tokenization is done here
and handed to lark through a custom `Lexer`. Decisions:

- regex vs. `/`: decided from the previous significant token; after `)` a
  regex may only start when the parentheses belong to `if`, `while`, `for`
  or `with`;
- templates: a brace stack tracks whether a `}` closes a block or resumes the
  enclosing template literal (`TEMPLATE_MIDDLE` / `TEMPLATE_TAIL`);
- `module {`: the identifier `module` followed on the same line by `{` (only
  blanks or single-line block comments in between) is the
  `MODULE` keyword, everywhere else it stays a plain `NAME`.

Comments and whitespace are dropped. Tokens keep lark positions
(`start_pos`/`end_pos`, 1-based `line`/`column`), which is how the tree
builder recovers line breaks between tokens.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, List, Optional, Tuple

from lark import Token
from lark.lexer import Lexer

from .errors import ParseError

# Terminals emitted by this lexer (mirrors `%declare` in grammar.lark).
TERMINALS = (
	"NAME",
	"NUMBER",
	"STRING",
	"REGEX",
	"PUNCT",
	"LPAR",
	"RPAR",
	"LSQB",
	"RSQB",
	"LBRACE",
	"RBRACE",
	"MODULE",
	"NO_SUBST_TEMPLATE",
	"TEMPLATE_HEAD",
	"TEMPLATE_MIDDLE",
	"TEMPLATE_TAIL",
)

_LINE_TERMINATORS = "\n\r\u2028\u2029"
_WHITESPACE = re.compile("[ \t\f\v\u00a0\ufeff\u1680\u2000-\u200a\u202f\u205f\u3000]+")
_NEWLINE = re.compile("\r\n?|[\n\u2028\u2029]")
_LINE_REST = re.compile("[^\n\r\u2028\u2029]*")
_NAME = re.compile("#?(?:[^\\W\\d]|\\$)(?:[\\w$\u200c\u200d])*")
_NUMBER = re.compile(
	r"(?:0[xX][\da-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+)n?"
	r"|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?n?"
)
_STRING = re.compile(r'"(?:[^"\\\n\r]|\\(?:\r\n|.))*"' r"|'(?:[^'\\\n\r]|\\(?:\r\n|.))*'", re.S)
_REGEX_FLAGS = re.compile(r"[\w$]*")
_MODULE_BRACE = re.compile(r"(?:[ \t]|/\*(?:(?!\*/)[^\n\r])*\*/)*\{")

_PUNCTUATORS = sorted(
	[
		">>>=", "...", "===", "!==", "**=", "<<=", ">>=", ">>>", "&&=", "||=", "??=",
		"=>", "==", "!=", "<=", ">=", "&&", "||", "??", "?.", "++", "--", "+=", "-=",
		"*=", "%=", "&=", "|=", "^=", "**", "<<", ">>",
		";", ",", "<", ">", "+", "-", "*", "%", "&", "|", "^", "!", "~", "?", ":", "=", ".", "@",
	],
	key=len,
	reverse=True,
)
_PUNCT = re.compile("|".join(re.escape(p) for p in _PUNCTUATORS))

# Keywords after which an expression (and hence a regex literal) may start.
_EXPR_KEYWORDS = frozenset(
	{
		"return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
		"throw", "case", "do", "else", "yield", "await", "extends",
	}
)

_SINGLE = {"[": "LSQB", "]": "RSQB"}

# Statement heads whose parenthesized part may be followed by a regex literal.
_PAREN_HEADS = frozenset({"if", "while", "for", "with"})

# Brace stack entries.
_BLOCK = "{"
_TEMPLATE = "`"


class _Scanner:
	"""Single-use cursor over one source text."""

	def __init__(self, text: str) -> None:
		self.text = text
		self.pos = 0
		self.line = 1
		self.column = 1
		self.prev: Optional[Token] = None
		self._braces: List[str] = []
		# One entry per open `(`: whether it follows a statement head.
		self._parens: List[bool] = []
		self._closed_head = False

	def tokens(self) -> Iterator[Token]:
		if self.text.startswith("#!"):
			self._advance(_LINE_REST.match(self.text, 0).end())
		while True:
			self._skip_trivia()
			if self.pos >= len(self.text):
				return
			tok = self._next_token()
			self.prev = tok
			yield tok

	# Cursor helpers ----------------------------------------------------

	def _advance(self, end: int) -> None:
		chunk = self.text[self.pos:end]
		last_break = None
		breaks = 0
		for m in _NEWLINE.finditer(chunk):
			breaks += 1
			last_break = m.end()
		if breaks:
			self.line += breaks
			self.column = len(chunk) - last_break + 1
		else:
			self.column += len(chunk)
		self.pos = end

	def _error(self, message: str) -> ParseError:
		return ParseError(message, line=self.line, column=self.column)

	def _emit(self, type_: str, end: int) -> Token:
		start, line, column = self.pos, self.line, self.column
		self._advance(end)
		return Token(
			type_,
			self.text[start:end],
			start_pos=start,
			line=line,
			column=column,
			end_line=self.line,
			end_column=self.column,
			end_pos=end,
		)

	def _skip_trivia(self) -> None:
		text = self.text
		while self.pos < len(text):
			m = _WHITESPACE.match(text, self.pos) or _NEWLINE.match(text, self.pos)
			if m:
				self._advance(m.end())
				continue
			if text.startswith("//", self.pos):
				self._advance(_LINE_REST.match(text, self.pos).end())
				continue
			if text.startswith("/*", self.pos):
				close = text.find("*/", self.pos + 2)
				if close < 0:
					raise self._error("unterminated block comment")
				self._advance(close + 2)
				continue
			return

	# Token dispatch ----------------------------------------------------

	def _next_token(self) -> Token:
		text = self.text
		pos = self.pos
		ch = text[pos]
		if ch == "(":
			prev = self.prev
			self._parens.append(prev is not None and prev.type == "NAME" and prev.value in _PAREN_HEADS)
			return self._emit("LPAR", pos + 1)
		if ch == ")":
			self._closed_head = self._parens.pop() if self._parens else False
			return self._emit("RPAR", pos + 1)
		if ch in _SINGLE:
			return self._emit(_SINGLE[ch], pos + 1)
		if ch == "{":
			self._braces.append(_BLOCK)
			return self._emit("LBRACE", pos + 1)
		if ch == "}":
			if self._braces and self._braces[-1] == _TEMPLATE:
				return self._template_continuation()
			if self._braces:
				self._braces.pop()
			return self._emit("RBRACE", pos + 1)
		if ch == "`":
			end, opens = self._scan_template_chars(pos + 1)
			if opens:
				self._braces.append(_TEMPLATE)
				return self._emit("TEMPLATE_HEAD", end)
			return self._emit("NO_SUBST_TEMPLATE", end)
		if ch in "\"'":
			m = _STRING.match(text, pos)
			if m is None:
				raise self._error("unterminated string literal")
			return self._emit("STRING", m.end())
		if ch.isdigit() or (ch == "." and text[pos + 1:pos + 2].isdigit()):
			return self._emit("NUMBER", _NUMBER.match(text, pos).end())
		m = _NAME.match(text, pos)
		if m:
			if m.group() == "module" and _MODULE_BRACE.match(text, m.end()) and not self._after_member_dot():
				return self._emit("MODULE", m.end())
			return self._emit("NAME", m.end())
		if ch == "/":
			if self._regex_allowed():
				return self._emit("REGEX", self._scan_regex())
			end = pos + 2 if text.startswith("/=", pos) else pos + 1
			return self._emit("PUNCT", end)
		m = _PUNCT.match(text, pos)
		if m:
			end = m.end()
			# `a?.5:b` is a conditional, not optional chaining.
			if m.group() == "?." and text[end:end + 1].isdigit():
				end = pos + 1
			return self._emit("PUNCT", end)
		raise self._error(f"unexpected character {ch!r}")

	def _after_member_dot(self) -> bool:
		prev = self.prev
		return prev is not None and prev.type == "PUNCT" and prev.value in (".", "?.")

	def _regex_allowed(self) -> bool:
		prev = self.prev
		if prev is None:
			return True
		if prev.type == "NAME":
			return prev.value in _EXPR_KEYWORDS
		if prev.type == "RPAR":
			# `if (a) /re/.test(b)`
			return self._closed_head
		if prev.type in ("NUMBER", "STRING", "REGEX", "RSQB", "NO_SUBST_TEMPLATE", "TEMPLATE_TAIL"):
			return False
		if prev.type == "PUNCT":
			return prev.value not in ("++", "--")
		return True

	def _scan_regex(self) -> int:
		text = self.text
		i = self.pos + 1
		in_class = False
		while i < len(text):
			c = text[i]
			if c in _LINE_TERMINATORS:
				break
			if c == "\\":
				i += 2
				continue
			if c == "[":
				in_class = True
			elif c == "]":
				in_class = False
			elif c == "/" and not in_class:
				return _REGEX_FLAGS.match(text, i + 1).end()
			i += 1
		raise self._error("unterminated regular expression literal")

	def _scan_template_chars(self, i: int) -> Tuple[int, bool]:
		"""Scan template text from `i`; return (end, whether `${` opened a substitution)."""
		text = self.text
		while i < len(text):
			c = text[i]
			if c == "\\":
				i += 2
				continue
			if c == "`":
				return i + 1, False
			if c == "$" and text.startswith("{", i + 1):
				return i + 2, True
			i += 1
		raise self._error("unterminated template literal")

	def _template_continuation(self) -> Token:
		end, opens = self._scan_template_chars(self.pos + 1)
		if opens:
			return self._emit("TEMPLATE_MIDDLE", end)
		self._braces.pop()
		return self._emit("TEMPLATE_TAIL", end)


def tokenize(text: str) -> Iterator[Token]:
	"""Yield lark tokens for `text`; raises `ParseError` on lexical errors."""
	return _Scanner(text).tokens()


class JsLexer(Lexer):
	"""lark custom-lexer adapter around `tokenize`."""

	def __init__(self, lexer_conf: Any = None) -> None:
		self.lexer_conf = lexer_conf

	def lex(self, data: Any) -> Iterator[Token]:  # type: ignore[override]
		# Newer lark releases hand custom lexers a TextSlice instead of a str.
		if not isinstance(data, str):
			data = data.text
		return tokenize(data)


__all__ = ["JsLexer", "TERMINALS", "tokenize"]
