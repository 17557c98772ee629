from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from json_explorer.engine.search_index import MatchKind, SearchMatch
from json_explorer.engine.similarity import (
    SimilarityStatus,
    similarity_status,
    toggle_similar_structures,
)
from json_explorer.state.expansion import ExpansionState
from json_explorer.state.navigator import FlashListener, SearchNavigator
from json_explorer.tree.document import InvalidJsonError, parse_document
from json_explorer.tree.paths import PathLike

logger = logging.getLogger(__name__)


class JsonExplorer:
    """
    State container behind one JSON tree view.

    Holds the current document, the expansion map and the search cursor,
    and is the only object a presentation layer needs to talk to.

    Example:
        >>> explorer = JsonExplorer()
        >>> explorer.set_input('{"a": [{"x": 1}, {"x": 2}]}')
        True
        >>> explorer.toggle_similar_structures("a.0", True)
        >>> explorer.is_expanded("a.1")
        True
    """

    def __init__(self) -> None:
        self._text: str = ""
        self._document: Any = None
        self._has_document = False
        self._error: Optional[str] = None
        self._query: str = ""
        self.expansion = ExpansionState()
        self.navigator = SearchNavigator(self.expansion)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def document(self) -> Any:
        return self._document

    @property
    def has_document(self) -> bool:
        """False for blank or invalid input; a literal ``null`` document counts."""
        return self._has_document

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def query(self) -> str:
        return self._query

    @property
    def matches(self) -> tuple[SearchMatch, ...]:
        return self.navigator.matches

    @property
    def cursor(self) -> Optional[int]:
        return self.navigator.cursor

    @property
    def current_match(self) -> Optional[SearchMatch]:
        return self.navigator.current

    def is_expanded(self, path: PathLike) -> bool:
        return self.expansion.is_expanded(path)

    def is_active_match(self, path: PathLike, kind: Optional[MatchKind] = None) -> bool:
        return self.navigator.is_active_match(path, kind)

    def similarity_status(self, path: PathLike) -> SimilarityStatus:
        return similarity_status(path, self.expansion)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_input(self, text: Optional[str]) -> bool:
        """
        Replace the document with freshly pasted text.

        Returns:
            True when a document is loaded. On blank or invalid input the
            document, matches and expansion map are all cleared and, for
            invalid input, ``error`` holds the parser's message.
        """
        self._text = text or ""
        try:
            document = parse_document(self._text)
        except InvalidJsonError as e:
            self._drop_document(str(e))
            return False

        if not self._text.strip():
            self._drop_document(None)
            return False

        self._document = document
        self._has_document = True
        self._error = None
        logger.info("Loaded %s document (%d chars)", type(document).__name__, len(self._text))
        self._refresh_matches()
        return True

    def set_query(self, text: Optional[str]) -> None:
        self._query = text or ""
        self._refresh_matches()

    def toggle(self, path: PathLike) -> bool:
        if not self._has_document:
            return False
        return self.expansion.toggle(path)

    def toggle_similar_structures(self, path: PathLike, expand: bool) -> None:
        if not self._has_document:
            return
        toggle_similar_structures(self._document, self.expansion, path, expand)

    def next(self) -> None:
        self.navigator.next()

    def previous(self) -> None:
        self.navigator.previous()

    def on_flash(self, listener: FlashListener) -> Callable[[], None]:
        return self.navigator.subscribe(listener)

    def _refresh_matches(self) -> None:
        if not self._has_document:
            self.navigator.clear()
            return
        self.navigator.recompute(self._document, self._query)

    def _drop_document(self, error: Optional[str]) -> None:
        self._document = None
        self._has_document = False
        self._error = error
        self.navigator.clear()
        self.expansion.reset()
