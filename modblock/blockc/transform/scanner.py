# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-19
"""
Offset scanner: find the relocation-sensitive spans of a module block body.

Two kinds of spans are reported, both as offsets into the text the program
was parsed from:

- `META_URL`: a member access rooted at `import.meta` (`import.meta.url`,
  `import.meta.x`, `import.meta["x"]`, `import.meta?.x`), from `import` to the
  end of the member;
- `STATIC_IMPORT`: the specifier string of a static import declaration, or of
  a re-export (`export * from`, `export { a } from`), when the specifier is a
  local file path.

Offsets only make sense for a program that came straight out of
`parse_program`, so anything else is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..parser.ast import Group, Item, ModuleExpr, Program, Template, is_group, is_name, is_punct, is_string
from ..parser.errors import InternalConsistencyError
from ..parser.parser import decode_string

_LOCAL_PREFIXES = ("/", "./", "../")


class SplitKind(Enum):
	META_URL = "meta-url"
	STATIC_IMPORT = "static-import"


@dataclass(frozen=True)
class Split:
	kind: SplitKind
	start: int
	end: int


def is_local_file_path(specifier: str) -> bool:
	"""True for `/x`, `./x` and `../x`; bare specifiers and full URLs are not local."""
	return specifier.startswith(_LOCAL_PREFIXES)


def scan_splits(program: Program) -> List[Split]:
	"""Return all splits of a freshly parsed `program`, ordered by start offset."""
	if not program.is_fresh:
		raise InternalConsistencyError("offset scan needs a freshly parsed program; regenerate and re-parse it first")
	found: List[Split] = []
	_scan_items(program.items, found)
	return sorted(found, key=lambda s: s.start)


def _after_dot(items: Sequence[Item], i: int) -> bool:
	return i > 0 and (is_punct(items[i - 1], ".") or is_punct(items[i - 1], "?."))


def _at(items: Sequence[Item], i: int) -> Optional[Item]:
	return items[i] if i < len(items) else None


def _scan_items(items: Sequence[Item], found: List[Split]) -> None:
	i = 0
	while i < len(items):
		item = items[i]
		if is_name(item, "import") and not _after_dot(items, i):
			end = _meta_member_end(items, i)
			if end is not None:
				last, offset = end
				found.append(Split(SplitKind.META_URL, item.start, offset))
				i = last + 1
				continue
			spec = _import_specifier(items, i)
			if spec is not None:
				_add_static(spec, found)
		elif is_name(item, "export") and not _after_dot(items, i):
			spec = _reexport_specifier(items, i)
			if spec is not None:
				_add_static(spec, found)
		_scan_nested(item, found)
		i += 1


def _scan_nested(item: Item, found: List[Split]) -> None:
	if isinstance(item, Group):
		_scan_items(item.items, found)
	elif isinstance(item, Template):
		for sub in item.substitutions:
			_scan_items(sub, found)
	elif isinstance(item, ModuleExpr):
		raise InternalConsistencyError("uncompiled module block reached the offset scanner")


def _meta_member_end(items: Sequence[Item], i: int):
	"""
	Match `import.meta` plus one member access starting at `items[i]`.

	Returns (index of the last consumed item, end offset) or None. A bare
	`import.meta` is not a member access and is left alone.
	"""
	if not (is_punct(_at(items, i + 1), ".") and is_name(_at(items, i + 2), "meta")):
		return None
	access = _at(items, i + 3)
	member = _at(items, i + 4)
	if is_punct(access, ".") or is_punct(access, "?."):
		if is_name(member):
			return i + 4, member.end
		if is_punct(access, "?.") and is_group(member, "["):
			return i + 4, member.end
		return None
	if is_group(access, "["):
		return i + 3, access.end
	return None


def _import_specifier(items: Sequence[Item], i: int):
	"""Specifier leaf of the import declaration at `items[i]`, if it is one."""
	nxt = _at(items, i + 1)
	if nxt is None or is_punct(nxt, ".") or is_group(nxt, "("):
		return None
	if is_string(nxt):
		return nxt
	j = i + 1
	while j < len(items):
		item = items[j]
		if is_punct(item, ";") or is_name(item, "import") or is_name(item, "export"):
			return None
		if is_name(item, "from"):
			after = _at(items, j + 1)
			return after if is_string(after) else None
		j += 1
	return None


def _reexport_specifier(items: Sequence[Item], i: int):
	j = i + 1
	if is_punct(_at(items, j), "*"):
		j += 1
		if is_name(_at(items, j), "as"):
			j += 2
	elif is_group(_at(items, j), "{"):
		j += 1
	else:
		return None
	if is_name(_at(items, j), "from") and is_string(_at(items, j + 1)):
		return items[j + 1]
	return None


def _add_static(leaf, found: List[Split]) -> None:
	if is_local_file_path(decode_string(leaf.text)):
		found.append(Split(SplitKind.STATIC_IMPORT, leaf.start, leaf.end))


__all__ = ["SplitKind", "Split", "is_local_file_path", "scan_splits"]
