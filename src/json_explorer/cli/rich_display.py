import json
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from json_explorer.engine.search_index import SearchMatch
from json_explorer.session import JsonExplorer
from json_explorer.settings import get_settings
from json_explorer.tree.document import describe_type, is_container, iter_entries
from json_explorer.tree.paths import ROOT, JsonPath

console = Console()

_SCALAR_STYLES = {
    "string": "green",
    "number": "cyan",
    "boolean": "magenta",
    "null": "dim italic",
}

_HIT_STYLE = "bold yellow"
_ACTIVE_HIT_STYLE = "bold black on yellow"


def _preview(value: Any, max_len: int) -> str:
    """Render a scalar the way the tree shows it, shortening long strings."""
    if isinstance(value, str):
        if len(value) > max_len:
            value = value[:max_len] + "…"
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(value)


def _hit_style(
    explorer: JsonExplorer,
    hits: set[tuple[str, str]],
    kind: str,
    path: JsonPath,
    default: str,
) -> str:
    key = str(path)
    if explorer.is_active_match(path, kind):
        return _ACTIVE_HIT_STYLE
    if (kind, key) in hits:
        return _HIT_STYLE
    return default


def _node_label(
    explorer: JsonExplorer,
    hits: set[tuple[str, str]],
    segment: Any,
    value: Any,
    path: JsonPath,
    max_len: int,
) -> Text:
    label = Text()
    label.append(str(segment), style=_hit_style(explorer, hits, "key", path, "bold"))
    label.append(": ")

    if is_container(value):
        if not explorer.is_expanded(path):
            label.append("[...]" if isinstance(value, list) else "{...}", style="dim")
            return label
        label.append(f"{describe_type(value)} ({len(value)})", style="dim")
        status = explorer.similarity_status(path)
        if status.has_similar:
            action = "Close Similar" if status.all_expanded else "Open Similar"
            label.append(f"  ⇆ {action} ({len(status.similar_paths)})", style="blue")
        return label

    style = _SCALAR_STYLES.get(describe_type(value), "white")
    if isinstance(value, str):
        style = _hit_style(explorer, hits, "value", path, style)
    label.append(_preview(value, max_len), style=style)
    return label


def _add_children(
    explorer: JsonExplorer,
    hits: set[tuple[str, str]],
    branch: Tree,
    node: Any,
    path: JsonPath,
    max_len: int,
) -> None:
    for segment, value in iter_entries(node):
        child_path = path.child(segment)
        child = branch.add(_node_label(explorer, hits, segment, value, child_path, max_len))
        if is_container(value) and explorer.is_expanded(child_path):
            _add_children(explorer, hits, child, value, child_path, max_len)


def build_tree(explorer: JsonExplorer) -> Tree:
    """Build a rich Tree of the explorer's document honoring its expansion map."""
    max_len = get_settings().PREVIEW_MAX_STRING_LENGTH
    document = explorer.document

    if not is_container(document):
        return Tree(Text(_preview(document, max_len), style=_SCALAR_STYLES.get(describe_type(document), "white")))

    hits = {(m.kind, m.path_key) for m in explorer.matches}
    root = Tree(Text(f"{describe_type(document)} ({len(document)})", style="bold cyan"))
    _add_children(explorer, hits, root, document, ROOT, max_len)
    return root


def build_matches_table(matches: tuple[SearchMatch, ...], cursor: Optional[int]) -> Table:
    table = Table(
        title="[bold cyan]Search results[/bold cyan]",
        box=box.ROUNDED,
        expand=True,
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Kind", width=6)
    table.add_column("Path", style="cyan")
    table.add_column("Text")
    table.add_column("Priority", justify="right", width=8)

    max_len = get_settings().PREVIEW_MAX_STRING_LENGTH
    for i, match in enumerate(matches):
        marker = "▶" if i == cursor else ""
        text = match.matched_text
        if len(text) > max_len:
            text = text[:max_len] + "…"
        table.add_row(
            f"{marker}{i + 1}",
            match.kind,
            match.path_key,
            Text(text, style=_ACTIVE_HIT_STYLE if i == cursor else ""),
            str(match.priority),
        )
    return table


def print_tree(explorer: JsonExplorer) -> None:
    console.print(build_tree(explorer))
    console.print()


def print_matches(explorer: JsonExplorer) -> None:
    """Print the match table, or a short note when nothing matched."""
    if not explorer.query.strip():
        return
    if not explorer.matches:
        console.print(f"[yellow]No matches for[/yellow] {explorer.query!r}")
        console.print()
        return
    console.print(build_matches_table(explorer.matches, explorer.cursor))
    console.print(f"[dim]Result {explorer.cursor + 1} of {len(explorer.matches)}[/dim]")
    console.print()


def print_error_panel(message: str) -> None:
    """Print the error panel."""
    console.print(
        Panel(
            f"[red]{message}[/red]",
            title="[bold red]Error[/bold red]",
            border_style="red",
        )
    )
    console.print()


def print_json_panel(json_document: Any) -> None:
    """Print the document in a panel with syntax highlighting."""
    syntax = Syntax(
        json.dumps(json_document, indent=2, ensure_ascii=False),
        "json",
        theme="monokai",
        line_numbers=True,
    )
    console.print(
        Panel(syntax, title="[bold]Document[/bold]", border_style="blue")
    )
