"""
Structural similarity between array siblings.

Two paths are structurally similar when they differ only in the indices
at their array positions ("pivots"), e.g. ``items.0.meta`` and
``items.3.meta``. Toggling one of them can then be mirrored onto all of
its siblings with a single expansion update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from json_explorer.state.expansion import ExpansionState, ancestor_updates
from json_explorer.tree.paths import (
    JsonPath,
    PathLike,
    coerce_path,
    is_index,
    pivot_positions,
    resolve,
    to_pattern,
    with_index,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimilarityStatus:
    """What a renderer needs to label the "Open/Close Similar" control."""

    similar_paths: tuple[JsonPath, ...]
    all_expanded: bool

    @property
    def has_similar(self) -> bool:
        return bool(self.similar_paths)


def find_nested_siblings(document: Any, path: PathLike) -> list[JsonPath]:
    """
    Siblings of ``path`` at every array position along it, outer arrays first.

    For each pivot the enclosing array is resolved live against
    ``document``; every other index of that array is substituted at the
    pivot while the remaining segments are kept as they are. A pivot whose
    enclosing value is not an array contributes nothing.
    """
    p = coerce_path(path)
    pivots = pivot_positions(p)
    if not pivots:
        return []

    own_key = str(p)
    seen: set[str] = set()
    siblings: list[JsonPath] = []

    for position in pivots:
        container = resolve(document, p.prefix(position))
        if not isinstance(container, list):
            continue

        current_index = int(p[position])
        for index in range(len(container)):
            if index == current_index:
                continue
            candidate = with_index(p, position, index)
            key = str(candidate)
            if key == own_key or key in seen:
                continue
            seen.add(key)
            siblings.append(candidate)

    return siblings


def find_pattern_siblings(path: PathLike, known_paths: Iterable[PathLike]) -> list[JsonPath]:
    """
    Paths among ``known_paths`` that share ``path``'s shape.

    Only paths that are already known (typically the keys of the expansion
    map) can be found this way; siblings that were never toggled are not
    discovered.
    """
    p = coerce_path(path)
    pivots = pivot_positions(p)
    if not pivots:
        return []

    own_key = str(p)
    pattern = to_pattern(p)
    similar: list[JsonPath] = []
    seen: set[str] = set()

    for known in known_paths:
        candidate = coerce_path(known)
        key = str(candidate)
        if key == own_key or key in seen:
            continue
        if len(candidate) != len(p) or to_pattern(candidate) != pattern:
            continue
        if any(str(candidate[i]) != str(p[i]) for i in range(len(p)) if not is_index(p[i])):
            continue
        seen.add(key)
        similar.append(candidate)

    return similar


def find_similar_paths(
    document: Any, path: PathLike, known_paths: Iterable[PathLike]
) -> list[JsonPath]:
    """Live array siblings, falling back to shape matching over known paths."""
    siblings = find_nested_siblings(document, path)
    logger.debug("Found %d nested siblings for %s", len(siblings), path)
    if siblings:
        return siblings

    similar = find_pattern_siblings(path, known_paths)
    logger.debug("Pattern fallback found %d similar paths for %s", len(similar), path)
    return similar


def build_similarity_updates(
    path: PathLike, siblings: Iterable[PathLike], expand: bool
) -> dict[str, bool]:
    """
    Expansion batch for mirroring a toggle onto ``siblings``.

    ``path`` and every sibling get ``expand``. When expanding, every strict
    ancestor of each of them is forced open as well; collapsing leaves
    ancestors alone.
    """
    targets = [coerce_path(path)] + [coerce_path(s) for s in siblings]
    updates: dict[str, bool] = {}
    if expand:
        updates.update(ancestor_updates(targets))
    for target in targets:
        updates[str(target)] = expand
    return updates


def toggle_similar_structures(
    document: Any,
    expansion: ExpansionState,
    path: PathLike,
    expand: bool,
) -> dict[str, bool]:
    """
    Set ``path`` and all of its structural siblings to ``expand``.

    Returns:
        The batch that was applied, empty when the path has no siblings
        (in which case the expansion state is left untouched).
    """
    siblings = find_similar_paths(document, path, expansion.known_paths())
    if not siblings:
        logger.debug("No similar paths found for %s", path)
        return {}

    updates = build_similarity_updates(path, siblings, expand)
    expansion.set_many(updates)
    logger.debug(
        "Toggled %d similar paths to %s",
        len(siblings),
        "expanded" if expand else "collapsed",
    )
    return updates


def similarity_status(path: PathLike, expansion: ExpansionState) -> SimilarityStatus:
    similar = find_pattern_siblings(path, expansion.known_paths())
    all_expanded = bool(similar) and all(expansion.is_expanded(p) for p in similar)
    return SimilarityStatus(similar_paths=tuple(similar), all_expanded=all_expanded)
