# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Development server: static files with JavaScript compiled on the fly.

Every `.js` file under the static root is run through the module-block
compiler when requested; the runtime shim is served at the shim specifier;
everything else is served as-is. Nothing is cached, so edits show up on the
next request.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse, Response

from ..runtime import get_shim_source
from .core.diagnostics import diagnostic_from_parse_error
from .parser.errors import ParseError
from .transform.compiler import compile_source
from .transform.options import CompilerOptions

logger = logging.getLogger(__name__)

JS_MEDIA_TYPE = "text/javascript"


def resolve_asset(root: Path, asset_path: str) -> Optional[Path]:
	"""Map a request path to a file under `root`; None when it escapes `root`."""
	candidate = (root / asset_path).resolve()
	if candidate != root and root not in candidate.parents:
		return None
	if candidate.is_dir():
		candidate = candidate / "index.html"
	return candidate


def create_app(static_dir: Union[str, Path], options: Optional[CompilerOptions] = None) -> FastAPI:
	options = options or CompilerOptions()
	if not options.shim_specifier.startswith("/"):
		raise ValueError(f"shim specifier must be an absolute path to be served: {options.shim_specifier!r}")
	root = Path(static_dir).resolve()
	app = FastAPI(title="modblock dev server")

	@app.get(options.shim_specifier)
	def shim() -> Response:
		return Response(get_shim_source(), media_type=JS_MEDIA_TYPE)

	@app.get("/{asset_path:path}")
	def asset(asset_path: str) -> Response:
		path = resolve_asset(root, asset_path)
		if path is None or not path.is_file():
			raise HTTPException(status_code=404, detail="not found")
		if path.suffix != ".js":
			return FileResponse(path)
		try:
			compiled = compile_source(path.read_text(encoding="utf-8"), options)
		except ParseError as err:
			diag = diagnostic_from_parse_error(err, file=asset_path)
			logger.warning("failed to compile %s: %s", asset_path, err)
			return PlainTextResponse(diag.render(), status_code=500)
		logger.info("compiled %s", asset_path)
		return Response(compiled, media_type=JS_MEDIA_TYPE)

	return app


def serve(
	static_dir: Union[str, Path],
	host: str = "127.0.0.1",
	port: int = 8080,
	options: Optional[CompilerOptions] = None,
) -> None:
	app = create_app(static_dir, options)
	logger.info("serving %s on http://%s:%d", static_dir, host, port)
	uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "resolve_asset", "serve"]
