from json_explorer.state.expansion import (
    ExpansionState,
    ancestor_updates,
    merge_expansion,
)
from json_explorer.state.navigator import FlashEvent, SearchNavigator
from json_explorer.state.highlight import HighlightScheduler, thread_timer

__all__ = [
    "ExpansionState",
    "ancestor_updates",
    "merge_expansion",
    "FlashEvent",
    "SearchNavigator",
    "HighlightScheduler",
    "thread_timer",
]
