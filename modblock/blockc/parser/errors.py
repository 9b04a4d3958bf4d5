# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Parser-phase errors.

`ParseError` is user-facing: the driver turns it into a pinned parser
diagnostic. `InternalConsistencyError` is a compiler bug and is never
converted into a diagnostic.
"""

from __future__ import annotations

from typing import Optional


class ParseError(ValueError):
	"""
	Source text could not be tokenized or its brackets do not balance.

	Carries a best-effort 1-based `line`/`column` so callers can build a
	`Diagnostic` instead of crashing.
	"""

	def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None) -> None:
		super().__init__(message)
		self.line = line
		self.column = column


class InternalConsistencyError(AssertionError):
	"""Raised when two compiler passes disagree about data they share."""


__all__ = ["ParseError", "InternalConsistencyError"]
