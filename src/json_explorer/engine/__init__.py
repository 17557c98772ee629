from json_explorer.engine.search_index import SearchIndexer, SearchMatch, search_matches
from json_explorer.engine.similarity import (
    SimilarityStatus,
    build_similarity_updates,
    find_nested_siblings,
    find_pattern_siblings,
    find_similar_paths,
    similarity_status,
    toggle_similar_structures,
)

__all__ = [
    "SearchIndexer",
    "SearchMatch",
    "search_matches",
    "SimilarityStatus",
    "build_similarity_updates",
    "find_nested_siblings",
    "find_pattern_siblings",
    "find_similar_paths",
    "similarity_status",
    "toggle_similar_structures",
]
