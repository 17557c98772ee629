from .main import main
from .rich_display import (
    build_matches_table,
    build_tree,
    console,
    print_error_panel,
    print_json_panel,
    print_matches,
    print_tree,
)

__all__ = [
    "main",
    "build_matches_table",
    "build_tree",
    "console",
    "print_error_panel",
    "print_json_panel",
    "print_matches",
    "print_tree",
]
