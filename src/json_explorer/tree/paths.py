"""
Path addressing for JSON documents.

A :class:`JsonPath` is an immutable sequence of segments (``str`` object
keys and ``int`` array indices). Its canonical form is the dot-joined
token string (``"a.0.b"``), used as the key of the expansion map and
produced only when a path crosses that boundary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from json_explorer.tree.document import Segment

WILDCARD = "*"
SEPARATOR = "."

_INDEX_RE = re.compile(r"^(0|[1-9][0-9]*)$")


class _Missing:
    """Sentinel for locations that do not exist in the document."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_index(segment: Segment) -> bool:
    """True if the segment is an array index (an int, or a token in index grammar)."""
    if isinstance(segment, bool):
        return False
    if isinstance(segment, int):
        return segment >= 0
    return bool(_INDEX_RE.fullmatch(segment))


@dataclass(frozen=True)
class JsonPath:
    segments: tuple[Segment, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "JsonPath":
        """Inverse of ``str(path)``; index-grammar tokens become ints."""
        if not text:
            return ROOT
        return cls(tuple(int(t) if _INDEX_RE.fullmatch(t) else t for t in text.split(SEPARATOR)))

    def __str__(self) -> str:
        return SEPARATOR.join(str(s) for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __getitem__(self, position: int) -> Segment:
        return self.segments[position]

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def last(self) -> Optional[Segment]:
        return self.segments[-1] if self.segments else None

    def child(self, segment: Segment) -> "JsonPath":
        return JsonPath(self.segments + (segment,))

    def prefix(self, length: int) -> "JsonPath":
        return JsonPath(self.segments[:length])


ROOT = JsonPath()

PathLike = Union[JsonPath, str]


def coerce_path(path: PathLike) -> JsonPath:
    if isinstance(path, JsonPath):
        return path
    return JsonPath.parse(path)


def join(parent: PathLike, segment: Segment) -> JsonPath:
    return coerce_path(parent).child(segment)


def parent_of(path: PathLike) -> Optional[JsonPath]:
    """Strip the last segment; None for single-segment (and root) paths."""
    p = coerce_path(path)
    if len(p) <= 1:
        return None
    return p.prefix(len(p) - 1)


def ancestors(path: PathLike) -> list[JsonPath]:
    """Strict ancestors of ``path``, outermost first. The root is not included."""
    p = coerce_path(path)
    return [p.prefix(n) for n in range(1, len(p))]


def pivot_positions(path: PathLike) -> list[int]:
    return [i for i, seg in enumerate(coerce_path(path)) if is_index(seg)]


def to_pattern(path: PathLike) -> str:
    return SEPARATOR.join(
        WILDCARD if is_index(seg) else str(seg) for seg in coerce_path(path)
    )


def with_index(path: PathLike, position: int, index: int) -> JsonPath:
    p = coerce_path(path)
    return JsonPath(p.segments[:position] + (index,) + p.segments[position + 1:])


def resolve(document: Any, path: PathLike) -> Any:
    """
    Walk ``document`` along ``path``.

    Returns the value found there, or :data:`MISSING` when any step cannot
    be taken (absent key, out-of-range or non-index token on an array,
    or a ``null``/scalar in the way). Never raises.
    """
    cur = document
    for seg in coerce_path(path):
        if isinstance(cur, list):
            if not is_index(seg):
                return MISSING
            idx = int(seg)
            if idx >= len(cur):
                return MISSING
            cur = cur[idx]
            continue

        if isinstance(cur, dict):
            key = seg if isinstance(seg, str) else str(seg)
            if key not in cur:
                return MISSING
            cur = cur[key]
            continue

        return MISSING

    return cur
