# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import base64
import json
import threading
import time
from pathlib import Path
from urllib.parse import urlparse

import pytest

from modblock.runtime import (
	CLONE_MARKER,
	MODULE_BLOCK_KIND,
	ModuleBlock,
	data_url_materializer,
	get_shim_source,
	tempfile_materializer,
)


class _CountingMaterializer:
	def __init__(self, delay: float = 0.0) -> None:
		self.calls: list[str] = []
		self.delay = delay
		self._lock = threading.Lock()

	def __call__(self, body: str) -> str:
		time.sleep(self.delay)
		with self._lock:
			self.calls.append(body)
			return f"mem:{len(self.calls)}"


def test_body_must_be_a_string():
	with pytest.raises(TypeError):
		ModuleBlock(42)  # type: ignore[arg-type]


def test_url_is_lazy_and_memoized():
	materialize = _CountingMaterializer()
	block = ModuleBlock("export default 1", materialize)
	assert materialize.calls == []
	assert not block.materialized
	assert block.url == "mem:1"
	assert block.url == "mem:1"
	assert materialize.calls == ["export default 1"]


def test_concurrent_first_access_materializes_once():
	materialize = _CountingMaterializer(delay=0.01)
	block = ModuleBlock("x", materialize)
	barrier = threading.Barrier(8)
	seen: list[str] = []

	def worker() -> None:
		barrier.wait()
		seen.append(block.url)

	threads = [threading.Thread(target=worker) for _ in range(8)]
	for t in threads:
		t.start()
	for t in threads:
		t.join()
	assert seen == ["mem:1"] * 8
	assert len(materialize.calls) == 1


def test_materializer_failure_propagates_and_is_not_cached():
	attempts = []

	def broken(body: str) -> str:
		attempts.append(body)
		raise RuntimeError("no blob store")

	block = ModuleBlock("x", broken)
	with pytest.raises(RuntimeError):
		block.url
	with pytest.raises(RuntimeError):
		block.url
	assert len(attempts) == 2
	assert not block.materialized


def test_coercions():
	block = ModuleBlock("f()", lambda body: "mem:url")
	assert repr(block) == "module { f() }"
	assert str(block) == "mem:url"
	assert f"{block}" == "mem:url"


def test_clone_form_round_trips_through_json():
	block = ModuleBlock("f()")
	cloned = json.loads(json.dumps(block.to_clone()))
	assert cloned == {CLONE_MARKER: MODULE_BLOCK_KIND, "body": "f()"}
	assert not block.materialized
	recovered = ModuleBlock.fixup(cloned)
	assert isinstance(recovered, ModuleBlock)
	assert recovered.body == "f()"
	assert ModuleBlock.fixup(recovered) is recovered


@pytest.mark.parametrize(
	"value",
	[None, 5, "module-block", ["module-block"], {"kind": "other", "body": "x"}, {"kind": "module-block", "body": 3}, {"body": "x"}],
)
def test_fixup_leaves_foreign_values_alone(value):
	assert ModuleBlock.fixup(value) is value


def test_tempfile_materializer_writes_the_body():
	url = tempfile_materializer("export const a = 1;\n")
	assert url.startswith("file://") and url.endswith(".mjs")
	assert Path(urlparse(url).path).read_text(encoding="utf-8") == "export const a = 1;\n"


def test_data_url_materializer():
	url = data_url_materializer("console.log('ż')")
	prefix = "data:text/javascript;base64,"
	assert url.startswith(prefix)
	assert base64.b64decode(url[len(prefix):]).decode("utf-8") == "console.log('ż')"


def test_js_shim_exports_match_python_constants():
	source = get_shim_source()
	assert "export class ModuleBlock" in source
	assert f'export const CLONE_MARKER = "{CLONE_MARKER}";' in source
	assert f'export const MODULE_BLOCK_KIND = "{MODULE_BLOCK_KIND}";' in source
	assert "static fixup(value)" in source
	assert "toString()" in source and "Symbol.toPrimitive" in source
