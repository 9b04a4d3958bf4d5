# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from modblock.blockc.parser.errors import ParseError
from modblock.blockc.parser.lexer import tokenize


def _kinds(text: str) -> list[tuple[str, str]]:
	return [(tok.type, tok.value) for tok in tokenize(text)]


def test_module_keyword_needs_brace_on_same_line():
	assert [t for t, _ in _kinds("module {")] == ["MODULE", "LBRACE"]
	assert [t for t, _ in _kinds("module /* c */ {")] == ["MODULE", "LBRACE"]
	assert [t for t, _ in _kinds("module\n{")] == ["NAME", "LBRACE"]
	assert [t for t, _ in _kinds("module.exports = module")] == ["NAME", "PUNCT", "NAME", "PUNCT", "NAME"]


def test_member_named_module_is_not_a_block():
	assert _kinds("x.module {") == [("NAME", "x"), ("PUNCT", "."), ("NAME", "module"), ("LBRACE", "{")]


def test_regex_versus_division():
	assert _kinds("a = b / c / d") == [
		("NAME", "a"),
		("PUNCT", "="),
		("NAME", "b"),
		("PUNCT", "/"),
		("NAME", "c"),
		("PUNCT", "/"),
		("NAME", "d"),
	]
	toks = _kinds("r = /[/]x/g.test(s)")
	assert ("REGEX", "/[/]x/g") in toks
	assert _kinds("return /a/")[-1] == ("REGEX", "/a/")
	assert _kinds("(a) /= 2")[3] == ("PUNCT", "/=")


def test_regex_after_statement_head_parentheses():
	assert ("REGEX", "/re/") in _kinds("if (x) /re/.test(y)")
	assert ("REGEX", "/'/") in _kinds("if (x) /'/.test(y)")
	assert ("REGEX", "/a/") in _kinds("while (f(x)) /a/.exec(s)")
	assert ("REGEX", "/b/") in _kinds("for (;;) /b/")
	# Other parentheses end an operand.
	assert ("REGEX", "/re/") not in _kinds("f(x) /re/ 2")
	assert [t for t, _ in _kinds("(a) / b / c")].count("PUNCT") == 2
	assert [t for t, _ in _kinds("if (g(a) / b) c")].count("REGEX") == 0


def test_nested_templates_track_braces():
	kinds = [t for t, _ in _kinds("`a${ {b: `c${d}`} }e`")]
	assert kinds == [
		"TEMPLATE_HEAD",
		"LBRACE",
		"NAME",
		"PUNCT",
		"TEMPLATE_HEAD",
		"NAME",
		"TEMPLATE_TAIL",
		"RBRACE",
		"TEMPLATE_TAIL",
	]
	assert _kinds("`plain`") == [("NO_SUBST_TEMPLATE", "`plain`")]


def test_conditional_with_decimal_is_not_optional_chaining():
	assert _kinds("x?.5:y") == [("NAME", "x"), ("PUNCT", "?"), ("NUMBER", ".5"), ("PUNCT", ":"), ("NAME", "y")]
	assert _kinds("x?.y")[1] == ("PUNCT", "?.")


def test_comments_and_shebang_are_skipped():
	toks = list(tokenize("#!/usr/bin/env node\n// line\na /* block */ b"))
	assert [t.value for t in toks] == ["a", "b"]
	assert toks[0].line == 3


def test_token_positions():
	toks = list(tokenize("ab\n  cd"))
	assert (toks[1].start_pos, toks[1].end_pos, toks[1].line, toks[1].column) == (5, 7, 2, 3)


@pytest.mark.parametrize(
	"text, message",
	[
		('x = "abc', "unterminated string literal"),
		("`abc", "unterminated template literal"),
		("a /* b", "unterminated block comment"),
		("x = /abc", "unterminated regular expression literal"),
		("a \u0000 b", "unexpected character"),
	],
)
def test_lexical_errors(text: str, message: str):
	with pytest.raises(ParseError) as exc:
		list(tokenize(text))
	assert message in str(exc.value)
	assert exc.value.line == 1


def test_error_column_points_at_token_start():
	with pytest.raises(ParseError) as exc:
		list(tokenize('x = "abc'))
	assert exc.value.column == 5
