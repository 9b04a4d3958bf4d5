# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Runtime support for compiled module blocks.

The JavaScript shim ships next to this package as a plain asset; hosts serve
it at the configured shim specifier. `ModuleBlock` is the Python model of the
same value.
"""

from pathlib import Path

from .module_block import (
	CLONE_MARKER,
	MODULE_BLOCK_KIND,
	ModuleBlock,
	data_url_materializer,
	tempfile_materializer,
)

SHIM_FILENAME = "module-blocks-shim.js"


def get_shim_path() -> Path:
	return Path(__file__).with_name(SHIM_FILENAME)


def get_shim_source() -> str:
	return get_shim_path().read_text(encoding="utf-8")


__all__ = [
	"CLONE_MARKER",
	"MODULE_BLOCK_KIND",
	"ModuleBlock",
	"SHIM_FILENAME",
	"data_url_materializer",
	"get_shim_path",
	"get_shim_source",
	"tempfile_materializer",
]
