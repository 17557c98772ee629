from json_explorer.session import JsonExplorer
from json_explorer.engine import SearchMatch, SimilarityStatus
from json_explorer.state import FlashEvent, HighlightScheduler
from json_explorer.tree import MISSING, InvalidJsonError, JsonPath

__all__ = [
    "JsonExplorer",
    "SearchMatch",
    "SimilarityStatus",
    "FlashEvent",
    "HighlightScheduler",
    "MISSING",
    "InvalidJsonError",
    "JsonPath",
]
