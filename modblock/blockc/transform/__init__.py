# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module-block rewriting passes and the compiler that orders them.
"""

from .call_sites import rewrite_import_call, rewrite_import_calls, split_arguments
from .compiler import compile_program, compile_source, extract_module_blocks, plan_module_body
from .inject import has_shim_import, inject_shim_import, shim_import_items
from .options import CompilerOptions
from .scanner import Split, SplitKind, is_local_file_path, scan_splits
from .splice import SplicePlan, Substitution, build_artifact, build_splice_plan, escape_template_raw

__all__ = [
	"CompilerOptions",
	"Split",
	"SplitKind",
	"SplicePlan",
	"Substitution",
	"build_artifact",
	"build_splice_plan",
	"compile_program",
	"compile_source",
	"escape_template_raw",
	"extract_module_blocks",
	"has_shim_import",
	"inject_shim_import",
	"is_local_file_path",
	"plan_module_body",
	"rewrite_import_call",
	"rewrite_import_calls",
	"scan_splits",
	"shim_import_items",
	"split_arguments",
]
