# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from modblock.blockc.parser import generate, parse_program
from modblock.blockc.transform.call_sites import rewrite_import_calls, split_arguments
from modblock.blockc.transform.compiler import compile_source
from modblock.blockc.transform.options import CompilerOptions


def _rewrite(src: str, options: CompilerOptions | None = None) -> str:
	items = parse_program(src).items
	return generate(rewrite_import_calls(items, options or CompilerOptions()))


@pytest.mark.parametrize(
	"src, expected",
	[
		('import("./a.js")', 'import(new URL("./a.js", import.meta.url))'),
		("import('../up.js')", "import(new URL('../up.js', import.meta.url))"),
		('import("/abs.js")', 'import(new URL("/abs.js", import.meta.url))'),
		('import("lib")', 'import(ModuleBlock.fixup("lib"))'),
		("import(x)", "import(ModuleBlock.fixup(x))"),
		("import(x,)", "import(ModuleBlock.fixup(x))"),
		("import(a.b[c])", "import(ModuleBlock.fixup(a.b[c]))"),
		("import(`./${name}.js`)", "import(ModuleBlock.fixup(`./${name}.js`))"),
	],
)
def test_single_argument_calls_are_rewritten(src: str, expected: str):
	assert _rewrite(src) == expected


@pytest.mark.parametrize(
	"src",
	[
		"import()",
		'import("./a.json", { with: { type: "json" } })',
		"import(ModuleBlock.fixup(x))",
		'import(new URL("./a.js", import.meta.url))',
		"import(x) { return x }",
		"a.import(x)",
		"a?.import(x)",
		"import.meta.url",
	],
)
def test_other_calls_are_untouched(src: str):
	assert _rewrite(src) == generate(parse_program(src))


def test_custom_shim_binding():
	opts = CompilerOptions(shim_binding="MB")
	assert _rewrite("import(x)", opts) == "import(MB.fixup(x))"
	assert _rewrite("import(MB.fixup(x))", opts) == "import(MB.fixup(x))"


def test_line_breaks_inside_argument_survive():
	assert _rewrite("import(a\n(b))") == "import(ModuleBlock.fixup(a\n    (b)))"


def test_split_arguments():
	(group,) = parse_program("(a, (b, c), d,)").items
	args = split_arguments(group.items)
	assert [generate(arg) for arg in args] == ["a", "(b, c)", "d"]
	assert split_arguments(()) == []


@pytest.mark.parametrize(
	"src",
	[
		"class A { import(x) { return x } }",
		"({ import(x) { return x } })",
		"({ async import(x) { return import(x) } })",
	],
)
def test_methods_named_import_are_not_calls(src: str):
	out = compile_source(src)
	assert out.count("fixup") == src.count("return import(")
	assert "import(x) {" in out
