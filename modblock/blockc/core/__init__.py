# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .diagnostics import Diagnostic, diagnostic_from_parse_error
from .span import Span

__all__ = ["Diagnostic", "Span", "diagnostic_from_parse_error"]
