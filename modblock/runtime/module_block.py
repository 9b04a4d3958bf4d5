# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Python model of the runtime `ModuleBlock` value.

Mirrors `module-blocks-shim.js`: a block is its body text plus a lazily
materialized, memoized URL a module loader can import. Creating a block does
not touch any resource; the first `url` access does, exactly once per block
even under concurrent access. Materialized resources are never cleaned up.

Structured clone drops the class of a value, so a block travels as the
tagged mapping `{"kind": "module-block", "body": ...}` and `fixup` turns such
a mapping back into a block.
"""

from __future__ import annotations

import base64
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Dict, Optional

CLONE_MARKER = "kind"
MODULE_BLOCK_KIND = "module-block"

Materializer = Callable[[str], str]


def tempfile_materializer(body: str) -> str:
	"""Write `body` to a fresh `.mjs` file and return its `file://` URL."""
	with tempfile.NamedTemporaryFile("w", encoding="utf-8", suffix=".mjs", prefix="module-block-", delete=False) as fh:
		fh.write(body)
	return Path(fh.name).resolve().as_uri()


def data_url_materializer(body: str) -> str:
	encoded = base64.b64encode(body.encode("utf-8")).decode("ascii")
	return f"data:text/javascript;base64,{encoded}"


class ModuleBlock:
	def __init__(self, body: str, materializer: Optional[Materializer] = None) -> None:
		if not isinstance(body, str):
			raise TypeError(f"module block body must be a string, got {type(body).__name__}")
		self._body = body
		self._materializer = materializer or tempfile_materializer
		self._url: Optional[str] = None
		self._lock = threading.Lock()

	@property
	def body(self) -> str:
		return self._body

	@property
	def kind(self) -> str:
		return MODULE_BLOCK_KIND

	@property
	def url(self) -> str:
		"""
		URL of the materialized body, created on first access.

		Materializer errors propagate and nothing is memoized, so a later
		access tries again.
		"""
		if self._url is None:
			with self._lock:
				if self._url is None:
					self._url = self._materializer(self._body)
		return self._url

	@property
	def materialized(self) -> bool:
		return self._url is not None

	def __str__(self) -> str:
		return self.url

	def __repr__(self) -> str:
		return f"module {{ {self._body} }}"

	def to_clone(self) -> Dict[str, str]:
		"""Structured-clone form: the tag plus the body, nothing materialized."""
		return {CLONE_MARKER: MODULE_BLOCK_KIND, "body": self._body}

	@staticmethod
	def fixup(value: Any) -> Any:
		"""
		Recover a block from its structured-clone form.

		Blocks come back as themselves, mappings tagged as module blocks (with a
		string body) become new blocks, anything else is returned unchanged.
		"""
		if isinstance(value, ModuleBlock):
			return value
		if (
			isinstance(value, Mapping)
			and value.get(CLONE_MARKER) == MODULE_BLOCK_KIND
			and isinstance(value.get("body"), str)
		):
			return ModuleBlock(value["body"])
		return value


__all__ = [
	"CLONE_MARKER",
	"MODULE_BLOCK_KIND",
	"Materializer",
	"ModuleBlock",
	"tempfile_materializer",
	"data_url_materializer",
]
