"""
Search over the keys and string values of a JSON document.

Matches are case-insensitive substring hits against the trimmed query,
ranked so that exact (case-insensitive) hits come first while ties keep
document order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

from json_explorer.settings import get_settings
from json_explorer.tree.document import is_container, iter_entries
from json_explorer.tree.paths import ROOT, JsonPath

logger = logging.getLogger(__name__)

MatchKind = Literal["key", "value"]


@dataclass(frozen=True)
class SearchMatch:
    kind: MatchKind
    path: JsonPath
    matched_text: str
    priority: int

    @property
    def path_key(self) -> str:
        return str(self.path)


class SearchIndexer:

    @classmethod
    def search(cls, root: Any, query: Optional[str]) -> list[SearchMatch]:
        needle = cls._normalize_query(query)
        if not needle:
            return []

        settings = get_settings()
        state: dict[str, Any] = {
            "query": needle,
            "matches": [],
            "exact": settings.EXACT_MATCH_PRIORITY,
            "partial": settings.PARTIAL_MATCH_PRIORITY,
            "array_indices": settings.SEARCH_ARRAY_INDICES,
        }

        cls._visit(root, ROOT, state)

        # sorted() is stable: equal priorities keep traversal order.
        ranked = sorted(state["matches"], key=lambda m: -m.priority)
        logger.debug("Query %r produced %d matches", needle, len(ranked))
        return ranked

    @classmethod
    def _visit(cls, node: Any, path: JsonPath, state: dict[str, Any]) -> None:
        if not is_container(node):
            return

        is_array = isinstance(node, list)
        for segment, value in iter_entries(node):
            child_path = path.child(segment)

            if not is_array or state["array_indices"]:
                cls._maybe_collect(str(segment), "key", child_path, state)
            if isinstance(value, str):
                cls._maybe_collect(value, "value", child_path, state)
            cls._visit(value, child_path, state)

    @classmethod
    def _maybe_collect(
        cls,
        text: str,
        kind: MatchKind,
        path: JsonPath,
        state: dict[str, Any],
    ) -> None:
        lowered = text.lower()
        if state["query"] not in lowered:
            return
        priority = state["exact"] if lowered == state["query"] else state["partial"]
        state["matches"].append(
            SearchMatch(kind=kind, path=path, matched_text=text, priority=priority)
        )

    @staticmethod
    def _normalize_query(query: Optional[str]) -> str:
        if query is None:
            return ""
        return str(query).strip().lower()


def search_matches(document: Any, query: Optional[str]) -> list[SearchMatch]:
    """
    Search keys and string values of ``document`` for ``query``.

    Args:
        document: The parsed JSON document (any JSON value).
        query: Free text. Trimmed and lowercased before matching; a blank
               query yields no matches.

    Returns:
        Matches sorted by descending priority, document order within a
        priority.
    """
    return SearchIndexer.search(document, query)
