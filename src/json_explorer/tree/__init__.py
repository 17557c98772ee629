from json_explorer.tree.document import (
    InvalidJsonError,
    Segment,
    describe_type,
    is_container,
    iter_entries,
    parse_document,
)
from json_explorer.tree.paths import (
    MISSING,
    ROOT,
    JsonPath,
    PathLike,
    ancestors,
    coerce_path,
    is_index,
    join,
    parent_of,
    pivot_positions,
    resolve,
    to_pattern,
    with_index,
)

__all__ = [
    "InvalidJsonError",
    "Segment",
    "describe_type",
    "is_container",
    "iter_entries",
    "parse_document",
    "MISSING",
    "ROOT",
    "JsonPath",
    "PathLike",
    "ancestors",
    "coerce_path",
    "is_index",
    "join",
    "parent_of",
    "pivot_positions",
    "resolve",
    "to_pattern",
    "with_index",
]
