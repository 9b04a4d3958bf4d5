# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
blockc: command line driver for the module-block compiler.

	blockc compile SRC [-o OUT] [--json]    compile one JavaScript module
	blockc extract SRC --meta-url URL       print/write the bodies of its blocks
	blockc serve STATIC_DIR                 dev server compiling .js on request

Errors are printed as `file:line:column: error: message` on stderr, or as a
JSON payload (`exit_code` plus `diagnostics`) on stdout with `--json`; the
exit code is 1 in both cases.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.diagnostics import Diagnostic, diagnostic_from_parse_error
from .core.span import Span
from .parser.errors import ParseError
from .transform.compiler import compile_source, extract_module_blocks
from .transform.options import DEFAULT_SHIM_BINDING, DEFAULT_SHIM_SPECIFIER, CompilerOptions

logger = logging.getLogger(__name__)


def _report(diags: List[Diagnostic], source: Path, as_json: bool) -> int:
	if as_json:
		payload = {
			"exit_code": 1,
			"diagnostics": [d.to_json(str(source)) for d in diags],
		}
		print(json.dumps(payload))
	else:
		for d in diags:
			print(d.render(str(source)), file=sys.stderr)
	return 1


def _read_source(path: Path, as_json: bool) -> Optional[str]:
	try:
		return path.read_text(encoding="utf-8")
	except OSError as err:
		_report([Diagnostic(message=f"cannot read source: {err.strerror or err}", code="source-unreadable", phase="driver", span=Span(file=str(path)))], path, as_json)
		return None


def _options(args: argparse.Namespace) -> CompilerOptions:
	return CompilerOptions(shim_specifier=args.shim_specifier, shim_binding=args.shim_binding)


def _cmd_compile(args: argparse.Namespace) -> int:
	source_text = _read_source(args.source, args.json)
	if source_text is None:
		return 1
	try:
		output = compile_source(source_text, _options(args))
	except ParseError as err:
		return _report([diagnostic_from_parse_error(err, str(args.source))], args.source, args.json)
	if args.output is not None:
		args.output.write_text(output + "\n", encoding="utf-8")
		logger.info("wrote %s", args.output)
	else:
		sys.stdout.write(output + "\n")
	return 0


def _cmd_extract(args: argparse.Namespace) -> int:
	source_text = _read_source(args.source, args.json)
	if source_text is None:
		return 1
	try:
		blocks = extract_module_blocks(source_text, args.meta_url, _options(args))
	except ParseError as err:
		return _report([diagnostic_from_parse_error(err, str(args.source))], args.source, args.json)
	if args.output is not None:
		args.output.mkdir(parents=True, exist_ok=True)
		for index, block in enumerate(blocks, start=1):
			target = args.output / f"block-{index}.mjs"
			target.write_text(block.body + "\n", encoding="utf-8")
			logger.info("wrote %s", target)
	elif args.json:
		print(json.dumps([{"index": index, "body": block.body} for index, block in enumerate(blocks, start=1)]))
	else:
		for index, block in enumerate(blocks, start=1):
			sys.stdout.write(f"// block {index}\n{block.body}\n")
	return 0


def _cmd_serve(args: argparse.Namespace) -> int:
	# uvicorn/fastapi are only needed here.
	from .server import serve

	serve(args.static_dir, host=args.host, port=args.port, options=_options(args))
	return 0


def _add_compiler_flags(parser: argparse.ArgumentParser) -> None:
	parser.add_argument(
		"--shim-specifier",
		default=DEFAULT_SHIM_SPECIFIER,
		help=f"Specifier the runtime shim is imported from (default: {DEFAULT_SHIM_SPECIFIER})",
	)
	parser.add_argument(
		"--shim-binding",
		default=DEFAULT_SHIM_BINDING,
		help=f"Local name of the shim class (default: {DEFAULT_SHIM_BINDING})",
	)


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="blockc", description="module-block relocation compiler")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	commands = parser.add_subparsers(dest="command", required=True)

	compile_cmd = commands.add_parser("compile", help="Compile a JavaScript module")
	compile_cmd.add_argument("source", type=Path, help="Path to the JavaScript source file")
	compile_cmd.add_argument("-o", "--output", type=Path, help="Write the compiled module here instead of stdout")
	compile_cmd.add_argument("--json", action="store_true", help="Emit diagnostics as JSON (phase/message/severity/file/line/column)")
	_add_compiler_flags(compile_cmd)
	compile_cmd.set_defaults(handler=_cmd_compile)

	extract_cmd = commands.add_parser("extract", help="Extract module block bodies as created at a given URL")
	extract_cmd.add_argument("source", type=Path, help="Path to the JavaScript source file")
	extract_cmd.add_argument("--meta-url", required=True, help="import.meta.url of the creating module")
	extract_cmd.add_argument("-o", "--output", type=Path, help="Directory to write block-<n>.mjs files into")
	extract_cmd.add_argument("--json", action="store_true", help="Emit blocks and diagnostics as JSON")
	_add_compiler_flags(extract_cmd)
	extract_cmd.set_defaults(handler=_cmd_extract)

	serve_cmd = commands.add_parser("serve", help="Serve a directory, compiling .js files on request")
	serve_cmd.add_argument("static_dir", type=Path, help="Directory to serve")
	serve_cmd.add_argument("--host", default="127.0.0.1")
	serve_cmd.add_argument("--port", type=int, default=8080)
	_add_compiler_flags(serve_cmd)
	serve_cmd.set_defaults(handler=_cmd_serve)
	return parser


def main(argv: list[str] | None = None) -> int:
	args = build_arg_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)
	return args.handler(args)


__all__ = ["build_arg_parser", "main"]
