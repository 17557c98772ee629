from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from json_explorer.engine.search_index import MatchKind, SearchMatch, search_matches
from json_explorer.settings import get_settings
from json_explorer.state.expansion import ExpansionState, ancestor_updates
from json_explorer.tree.paths import JsonPath, PathLike, coerce_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlashEvent:
    """Request to scroll ``path`` into view and highlight it for a moment.

    ``settle_delay`` is how long to wait for the tree to lay out the nodes
    just expanded; ``duration`` is how long the highlight stays on.
    """

    path: JsonPath
    match: SearchMatch
    settle_delay: float
    duration: float


FlashListener = Callable[[FlashEvent], None]


class SearchNavigator:
    """Cursor over the ranked match list.

    Landing on a match opens every container above it and emits a
    :class:`FlashEvent`. The cursor is None exactly when there are no
    matches.
    """

    def __init__(self, expansion: ExpansionState) -> None:
        self._expansion = expansion
        self._matches: tuple[SearchMatch, ...] = ()
        self._cursor: Optional[int] = None
        self._listeners: list[FlashListener] = []

    @property
    def matches(self) -> tuple[SearchMatch, ...]:
        return self._matches

    @property
    def cursor(self) -> Optional[int]:
        return self._cursor

    @property
    def current(self) -> Optional[SearchMatch]:
        if self._cursor is None:
            return None
        return self._matches[self._cursor]

    def subscribe(self, listener: FlashListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def recompute(self, document: Any, query: Optional[str]) -> None:
        """Rebuild the match list from scratch and reset the cursor."""
        self._matches = tuple(search_matches(document, query))
        if self._matches:
            self._move_to(0)
        else:
            self._cursor = None

    def clear(self) -> None:
        self._matches = ()
        self._cursor = None

    def next(self) -> None:
        if not self._matches:
            return
        self._move_to((self._cursor + 1) % len(self._matches))

    def previous(self) -> None:
        if not self._matches:
            return
        if self._cursor == 0:
            self._move_to(len(self._matches) - 1)
        else:
            self._move_to(self._cursor - 1)

    def is_active_match(self, path: PathLike, kind: Optional[MatchKind] = None) -> bool:
        match = self.current
        if match is None:
            return False
        if kind is not None and match.kind != kind:
            return False
        return match.path_key == str(coerce_path(path))

    def _move_to(self, index: int) -> None:
        self._cursor = index
        match = self._matches[index]

        self._expansion.set_many(ancestor_updates([match.path]))

        settings = get_settings()
        event = FlashEvent(
            path=match.path,
            match=match,
            settle_delay=settings.SCROLL_SETTLE_SECONDS,
            duration=settings.HIGHLIGHT_DURATION_SECONDS,
        )
        logger.debug("Focused match %d/%d at %s", index + 1, len(self._matches), match.path)
        for listener in list(self._listeners):
            listener(event)
