# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SHIM_SPECIFIER = "/module-blocks-shim.js"
DEFAULT_SHIM_BINDING = "ModuleBlock"


@dataclass(frozen=True)
class CompilerOptions:
	"""
	Knobs shared by every rewriting pass.

	`shim_specifier` is where the runtime shim is imported from (it must be a
	local path so it is relocated like any other local import inside a block);
	`shim_binding` is the local name the shim class is imported under.
	"""

	shim_specifier: str = DEFAULT_SHIM_SPECIFIER
	shim_binding: str = DEFAULT_SHIM_BINDING


__all__ = ["CompilerOptions", "DEFAULT_SHIM_SPECIFIER", "DEFAULT_SHIM_BINDING"]
