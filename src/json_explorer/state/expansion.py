from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from json_explorer.tree.paths import PathLike, ancestors, coerce_path

logger = logging.getLogger(__name__)

ExpansionListener = Callable[[dict[str, bool]], None]


def merge_expansion(
    current: Mapping[str, bool], updates: Mapping[str, bool]
) -> dict[str, bool]:
    """
    Reducer for the expansion map.

    Returns a new mapping with ``updates`` layered over ``current``; for a
    path present in both, the update wins. Neither input is modified.
    """
    if not updates:
        return dict(current)
    return {**current, **updates}


def ancestor_updates(paths: Iterable[PathLike]) -> dict[str, bool]:
    """Batch forcing every strict ancestor of each path open."""
    updates: dict[str, bool] = {}
    for path in paths:
        for ancestor in ancestors(path):
            updates[str(ancestor)] = True
    return updates


class ExpansionState:
    """Expanded/collapsed flag per canonical path string; absent means collapsed."""

    def __init__(self) -> None:
        self._entries: dict[str, bool] = {}
        self._listeners: list[ExpansionListener] = []

    def is_expanded(self, path: PathLike) -> bool:
        return self._entries.get(str(coerce_path(path)), False)

    def toggle(self, path: PathLike) -> bool:
        key = str(coerce_path(path))
        value = not self._entries.get(key, False)
        self.set_many({key: value})
        return value

    def set_many(self, updates: Mapping[str, bool]) -> None:
        """Merge ``updates`` in one transition; listeners see the batch once."""
        if not updates:
            return
        batch = {str(coerce_path(k)): bool(v) for k, v in updates.items()}
        self._entries = merge_expansion(self._entries, batch)
        logger.debug("Applied %d expansion updates", len(batch))
        for listener in list(self._listeners):
            listener(batch)

    def reset(self) -> None:
        """Drop every entry. Only used when the document goes away.

        Listeners receive one batch collapsing every path that was known.
        """
        if not self._entries:
            return
        batch = {key: False for key in self._entries}
        self._entries = {}
        logger.debug("Reset %d expansion entries", len(batch))
        for listener in list(self._listeners):
            listener(batch)

    def known_paths(self) -> list[str]:
        return list(self._entries)

    def snapshot(self) -> Mapping[str, bool]:
        return MappingProxyType(dict(self._entries))

    def subscribe(self, listener: ExpansionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._entries)
