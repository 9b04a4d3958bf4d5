# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from modblock.blockc.parser import ParseError, decode_string, parse_program, parse_snippet
from modblock.blockc.parser.ast import Group, Leaf, ModuleExpr, Program, Template


def test_parse_builds_groups_templates_and_blocks():
	prog = parse_program("const x = module { f(`a${b}c`) };")
	assert [type(i).__name__ for i in prog.items] == ["Leaf", "Leaf", "Leaf", "ModuleExpr", "Leaf"]
	block = prog.items[3]
	assert isinstance(block, ModuleExpr)
	call = block.items[1]
	assert isinstance(call, Group) and call.open == "(" and call.close == ")"
	tpl = call.items[0]
	assert isinstance(tpl, Template)
	assert tpl.quasis == ("a", "c")
	assert [i.text for i in tpl.substitutions[0]] == ["b"]


def test_parse_keeps_offsets_into_source():
	src = "foo(bar)"
	prog = parse_program(src)
	assert prog.is_fresh and prog.source == src
	group = prog.items[1]
	assert src[group.start:group.end] == "(bar)"
	leaf = group.items[0]
	assert src[leaf.start:leaf.end] == "bar"


def test_newline_flags_follow_line_breaks():
	prog = parse_program("a\nb c /* x\n */ d\n(e\n)")
	a, b, c, d, paren = prog.items
	assert not a.newline
	assert b.newline and not c.newline
	assert d.newline
	assert paren.newline and paren.close_newline


def test_newline_before_module_keyword_is_recorded():
	prog = parse_program("x =\nmodule { }")
	block = prog.items[2]
	assert isinstance(block, ModuleExpr)
	assert block.newline
	assert block.items == ()


def test_template_without_substitutions():
	(tpl,) = parse_program("`a\\`b`").items
	assert isinstance(tpl, Template)
	assert tpl.quasis == ("a\\`b",)
	assert tpl.substitutions == ()


def test_empty_source_parses():
	assert parse_program("").items == ()
	assert parse_program("// only a comment\n").items == ()


def test_snippets_have_no_positions():
	items = parse_snippet("JSON.stringify(import.meta.url)")
	assert all(i.start is None and i.end is None for i in items)
	assert items[0] == Leaf("NAME", "JSON")


def test_programs_compare_by_items_only():
	assert parse_program("a(b)") == Program(parse_program("a(b)").items)


def test_unclosed_bracket_is_a_parse_error():
	with pytest.raises(ParseError) as exc:
		parse_program("f(")
	assert "unexpected end of input" in str(exc.value)


def test_stray_closer_is_a_parse_error():
	with pytest.raises(ParseError) as exc:
		parse_program("f)")
	assert "unbalanced" in str(exc.value)
	assert exc.value.line == 1
	assert exc.value.column == 2


def test_unclosed_module_block_is_a_parse_error():
	with pytest.raises(ParseError):
		parse_program("const x = module { f();")


@pytest.mark.parametrize(
	"literal, value",
	[
		("'./a.js'", "./a.js"),
		('"a\\x41\\u0042\\u{43}"', "aABC"),
		('"ż\\n"', "ż\n"),
		('"a\\\nb"', "ab"),
		('"q\\"q"', 'q"q'),
		(r'"\\u{41}"', "\\u{41}"),
		(r'"./\N.js"', "./N.js"),
		(r'"\U0041"', "U0041"),
		(r'"\0"', "\x00"),
		(r'"\101"', "A"),
		(r'"\ud83d\ude00"', "\U0001f600"),
		(r'"\v\b"', "\v\b"),
	],
)
def test_decode_string(literal: str, value: str):
	assert decode_string(literal) == value


@pytest.mark.parametrize("literal", [r'"\x4"', r'"\u12"', r'"\u{110000}"'])
def test_malformed_string_escape_is_a_parse_error(literal: str):
	with pytest.raises(ParseError):
		decode_string(literal)
