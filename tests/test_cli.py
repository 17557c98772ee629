"""Tests for the json-explorer command line."""

from __future__ import annotations

import io
import json

import pytest
from rich.console import Console

from json_explorer.cli import build_matches_table, build_tree, main
from json_explorer.cli.main import build_parser, iter_container_paths
from json_explorer.session import JsonExplorer


def _render(renderable) -> str:
    buffer = io.StringIO()
    Console(file=buffer, width=120, color_system=None).print(renderable)
    return buffer.getvalue()


@pytest.fixture
def catalog_file(tmp_path, catalog_doc):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_doc), encoding="utf-8")
    return path


class TestParser:

    def test_requires_input(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_text_and_file_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--text", "{}", "--file", "x.json"])

    def test_repeatable_paths(self):
        args = build_parser().parse_args(
            ["-t", "{}", "--expand", "a", "--expand", "b", "--expand-similar", "c.0"]
        )
        assert args.expand == ["a", "b"]
        assert args.expand_similar == ["c.0"]


class TestMain:

    def test_json_output(self, capsys, catalog_file):
        main(["--file", str(catalog_file), "--query", "tool", "--step", "1", "--json"])
        out = json.loads(capsys.readouterr().out)
        assert out["query"] == "tool"
        assert out["cursor"] == 1
        assert all(m["priority"] == 5 for m in out["matches"])
        assert [m["active"] for m in out["matches"]].count(True) == 1

    def test_negative_step_wraps(self, capsys):
        main(["--text", '{"a": "x", "b": "x"}', "--query", "x", "--step", "-1", "--json"])
        out = json.loads(capsys.readouterr().out)
        assert out["cursor"] == 1

    def test_invalid_json_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--text", "{not json"])
        assert exc.value.code == 1
        assert "Invalid JSON" in capsys.readouterr().out

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--file", str(tmp_path / "missing.json")])
        assert exc.value.code == 1

    def test_tree_output(self, capsys, catalog_file):
        main(["--file", str(catalog_file), "--expand-similar", "sections.0"])
        out = capsys.readouterr().out
        assert "Hardware" in out
        assert "Garden" in out


class TestRendering:

    def test_collapsed_containers(self, catalog_doc):
        explorer = JsonExplorer()
        explorer.set_input(json.dumps(catalog_doc))
        text = _render(build_tree(explorer))
        assert "metadata: {...}" in text
        assert "sections: [...]" in text
        assert "Alice" not in text

    def test_expanded_container_offers_similar(self, pair_doc):
        explorer = JsonExplorer()
        explorer.set_input(json.dumps(pair_doc))
        explorer.toggle_similar_structures("a.0", True)
        text = _render(build_tree(explorer))
        assert "x: 1" in text
        assert "x: 2" in text
        assert "Close Similar" in text

    def test_scalar_document(self):
        explorer = JsonExplorer()
        explorer.set_input('"just text"')
        assert '"just text"' in _render(build_tree(explorer))

    def test_matches_table(self, bob_doc):
        explorer = JsonExplorer()
        explorer.set_input(json.dumps(bob_doc))
        explorer.set_query("bob")
        text = _render(build_matches_table(explorer.matches, explorer.cursor))
        assert "nested.name" in text
        assert "▶1" in text

    def test_iter_container_paths(self, catalog_doc):
        paths = [str(p) for p in iter_container_paths(catalog_doc)]
        assert paths[:3] == ["metadata", "sections", "sections.0"]
        assert "sections.1.items.1.tags" in paths
