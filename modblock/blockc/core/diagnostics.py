# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics reported by the command line driver and the dev server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..parser.errors import ParseError
from .span import Span


@dataclass
class Diagnostic:
	"""A compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes an unknown location.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self, fallback_file: Optional[str] = None) -> str:
		"""Human-readable `file:line:column: severity: message`."""
		file = self.span.file or fallback_file or "<input>"
		return f"{file}:{self.span.location()}: {self.severity}: {self.message}"

	def to_json(self, fallback_file: Optional[str] = None) -> Dict[str, Any]:
		return {
			"code": self.code,
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file or fallback_file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def diagnostic_from_parse_error(err: ParseError, file: Optional[str] = None) -> Diagnostic:
	return Diagnostic(message=str(err), code="parse-error", phase="parser", span=Span.from_loc(err, file=file))


__all__ = ["Diagnostic", "diagnostic_from_parse_error"]
