import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.logging import RichHandler

from json_explorer.cli.rich_display import (
    console,
    print_error_panel,
    print_json_panel,
    print_matches,
    print_tree,
)
from json_explorer.session import JsonExplorer
from json_explorer.settings import get_settings
from json_explorer.tree.document import is_container, iter_entries
from json_explorer.tree.paths import ROOT, JsonPath


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="json-explorer",
        description="Explore a JSON document as a collapsible tree with search.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the top level of a document
  json-explorer --file data.json

  # Open every element of the "items" array like the first one
  json-explorer --file data.json --expand-similar items.0

  # Search and jump to the second result
  json-explorer --file data.json --query bob --step 1

  # Machine-readable search results
  json-explorer --text '{"name": "Bob"}' --query bob --json
""",
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        "--text", "-t", type=str, help="JSON text to explore"
    )
    input_group.add_argument(
        "--file", "-f", type=Path, help="JSON file to explore"
    )

    parser.add_argument(
        "--query", "-q", type=str, default="", help="Search keys and string values"
    )
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="PATH",
        help="Toggle a node open (dotted path, e.g. items.0). Repeatable.",
    )
    parser.add_argument(
        "--expand-similar",
        action="append",
        default=[],
        metavar="PATH",
        help="Expand a node and every structurally similar sibling. Repeatable.",
    )
    parser.add_argument(
        "--collapse-similar",
        action="append",
        default=[],
        metavar="PATH",
        help="Collapse a node and every structurally similar sibling. Repeatable.",
    )
    parser.add_argument(
        "--expand-all",
        action="store_true",
        help="Expand every object and array",
    )
    parser.add_argument(
        "--step",
        type=int,
        default=0,
        help="Move through search results: positive for next, negative for previous",
    )
    parser.add_argument(
        "--matches-only",
        action="store_true",
        help="Print only the search results, not the tree",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print search results as JSON",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Also print the document with syntax highlighting",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else get_settings().LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _read_input_text(args: argparse.Namespace) -> str:
    """Read the input text from args (direct text or file)."""
    if args.text is not None:
        return args.text

    if not args.file.exists():
        print_error_panel(f"File not found: {args.file}")
        sys.exit(1)
    try:
        return args.file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error_panel(f"Cannot read {args.file}: {e}")
        sys.exit(1)


def iter_container_paths(node: Any, path: JsonPath = ROOT) -> Iterator[JsonPath]:
    """Yield the path of every object/array below ``node``, parents first."""
    for segment, value in iter_entries(node):
        if is_container(value):
            child = path.child(segment)
            yield child
            yield from iter_container_paths(value, child)


def _apply_expansions(explorer: JsonExplorer, args: argparse.Namespace) -> None:
    if args.expand_all:
        explorer.expansion.set_many(
            {str(p): True for p in iter_container_paths(explorer.document)}
        )
    for path in args.expand:
        explorer.toggle(path)
    for path in args.expand_similar:
        explorer.toggle_similar_structures(path, True)
    for path in args.collapse_similar:
        explorer.toggle_similar_structures(path, False)


def _step(explorer: JsonExplorer, steps: int) -> None:
    move = explorer.next if steps > 0 else explorer.previous
    for _ in range(abs(steps)):
        move()


def _matches_as_json(explorer: JsonExplorer) -> str:
    return json.dumps(
        {
            "query": explorer.query,
            "cursor": explorer.cursor,
            "matches": [
                {
                    "kind": m.kind,
                    "path": m.path_key,
                    "text": m.matched_text,
                    "priority": m.priority,
                    "active": i == explorer.cursor,
                }
                for i, m in enumerate(explorer.matches)
            ],
        },
        indent=2,
        ensure_ascii=False,
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point of the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    explorer = JsonExplorer()
    if not explorer.set_input(_read_input_text(args)):
        print_error_panel(explorer.error or "No JSON document given")
        sys.exit(1)

    _apply_expansions(explorer, args)
    explorer.set_query(args.query)
    _step(explorer, args.step)

    if args.json:
        print(_matches_as_json(explorer))
        return

    if args.raw:
        print_json_panel(explorer.document)
    if not args.matches_only:
        print_tree(explorer)
    print_matches(explorer)
