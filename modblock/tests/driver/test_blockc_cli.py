# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

from modblock.blockc import blockc
from modblock.blockc.transform.compiler import compile_source

SOURCE = "const b = module { import('./dep.js'); export const u = import.meta.url };\nimport(b);"


def _write(tmp_path: Path, name: str, text: str) -> Path:
	path = tmp_path / name
	path.write_text(text, encoding="utf-8")
	return path


def test_compile_to_stdout(tmp_path: Path, capsys):
	src = _write(tmp_path, "main.js", SOURCE)
	assert blockc.main(["compile", str(src)]) == 0
	assert capsys.readouterr().out == compile_source(SOURCE) + "\n"


def test_compile_to_file(tmp_path: Path):
	src = _write(tmp_path, "main.js", SOURCE)
	out = tmp_path / "out.js"
	assert blockc.main(["compile", str(src), "-o", str(out)]) == 0
	assert out.read_text(encoding="utf-8") == compile_source(SOURCE) + "\n"


def test_compile_with_custom_shim(tmp_path: Path, capsys):
	src = _write(tmp_path, "main.js", "import(x)")
	assert blockc.main(["compile", str(src), "--shim-specifier", "/rt.js", "--shim-binding", "MB"]) == 0
	assert capsys.readouterr().out == 'import { MB } from "/rt.js";\nimport(MB.fixup(x))\n'


def test_parse_error_is_reported_on_stderr(tmp_path: Path, capsys):
	src = _write(tmp_path, "bad.js", "const x = module {\n  f(\n};")
	assert blockc.main(["compile", str(src)]) == 1
	err = capsys.readouterr().err
	assert err.startswith(f"{src}:3:1: error: ")


def test_parse_error_as_json(tmp_path: Path, capsys):
	src = _write(tmp_path, "bad.js", "f(")
	assert blockc.main(["compile", str(src), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	(diag,) = payload["diagnostics"]
	assert diag["code"] == "parse-error"
	assert diag["phase"] == "parser"
	assert diag["severity"] == "error"
	assert diag["file"] == str(src)
	assert diag["line"] == 1
	assert "unexpected end of input" in diag["message"]


def test_missing_source(tmp_path: Path, capsys):
	assert blockc.main(["compile", str(tmp_path / "nope.js")]) == 1
	assert "cannot read source" in capsys.readouterr().err


def test_extract_writes_one_file_per_block(tmp_path: Path):
	src = _write(tmp_path, "main.js", SOURCE + "\nconst c = module { 2 };")
	out_dir = tmp_path / "blocks"
	assert blockc.main(["extract", str(src), "--meta-url", "https://h/app/main.js", "-o", str(out_dir)]) == 0
	assert sorted(p.name for p in out_dir.iterdir()) == ["block-1.mjs", "block-2.mjs"]
	first = (out_dir / "block-1.mjs").read_text(encoding="utf-8")
	assert 'import(new URL(\'./dep.js\', "https://h/app/main.js"))' in first
	assert 'export const u = "https://h/app/main.js"' in first


def test_extract_as_json(tmp_path: Path, capsys):
	src = _write(tmp_path, "main.js", SOURCE)
	assert blockc.main(["extract", str(src), "--meta-url", "file:///srv/main.js", "--json"]) == 0
	(entry,) = json.loads(capsys.readouterr().out)
	assert entry["index"] == 1
	assert entry["body"].startswith('import { ModuleBlock } from "file:///module-blocks-shim.js";\n')
