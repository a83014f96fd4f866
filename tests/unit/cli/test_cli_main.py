"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bindery.cli.main import build_arg_parser, main


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> Path:
    """Temp dir with a tree, an inventory and a document snapshot."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    (tmp_path / "tree.json").write_text(
        json.dumps(
            {
                "id": "root",
                "role": "form",
                "layout_mode": "VERTICAL",
                "children": [
                    {"id": "email", "role": "input", "properties": {"placeholder": "Email"}},
                    {"id": "submit", "role": "button", "variant": "primary", "text": "Sign in"},
                ],
            }
        )
    )
    (tmp_path / "inventory.yaml").write_text(
        "components:\n"
        "  - id: cmp-button\n"
        "    name: Button\n"
        "    role: button\n"
        "    anatomy:\n"
        "      layout_mode: HORIZONTAL\n"
        "      has_label: true\n"
        "    variant_properties:\n"
        "      Variant: [Primary, Secondary]\n"
        "tokens: []\n"
    )
    return tmp_path


class TestArgParser:
    def test_resolve_arguments(self):
        args = build_arg_parser().parse_args(
            ["resolve", "--tree", "t.json", "--inventory", "i.json", "--json"]
        )

        assert args.cmd == "resolve"
        assert args.json is True
        assert args.document is None
        assert args.config is None

    def test_score_arguments(self):
        args = build_arg_parser().parse_args(
            ["score", "--request", "a form", "--tree", "t.json", "--self-assessment", "0.4"]
        )

        assert args.self_assessment == 0.4

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args([])


class TestResolveCommand:
    """Tests for ``bindery resolve``."""

    def test_json_output(self, workspace: Path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["resolve", "--tree", "tree.json", "--inventory", "inventory.yaml", "--json"])

        assert exc.value.code == 0
        payload = json.loads(capsys.readouterr().out)
        outcomes = {o["node_id"]: o for o in payload["outcomes"]}
        assert list(outcomes) == ["root", "email", "submit"]
        assert outcomes["submit"]["tier"] == 1
        assert outcomes["submit"]["instructions"]["properties"] == {"Variant": "Primary"}
        assert outcomes["root"]["tier"] == 5
        assert payload["summary"]["stats"]["total_nodes"] == 3

    def test_table_output(self, workspace: Path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["resolve", "--tree", "tree.json", "--inventory", "inventory.yaml"])

        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert "Resolution Statistics" in out
        assert "Quality:" in out

    def test_missing_input_file(self, workspace: Path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["resolve", "--tree", "nope.json", "--inventory", "inventory.yaml"])

        assert exc.value.code == 1
        assert "ERROR" in capsys.readouterr().out

    def test_invalid_tree(self, workspace: Path, capsys):
        (workspace / "bad.json").write_text(json.dumps({"id": "root"}))

        with pytest.raises(SystemExit) as exc:
            main(["resolve", "--tree", "bad.json", "--inventory", "inventory.yaml"])

        assert exc.value.code == 1


class TestScoreCommand:
    """Tests for ``bindery score``."""

    def test_json_output(self, workspace: Path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(
                [
                    "score",
                    "--request",
                    "a login form with email and a sign in button",
                    "--tree",
                    "tree.json",
                    "--self-assessment",
                    "0.4",
                    "--json",
                ]
            )

        assert exc.value.code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["validation"]["valid"] is True
        assert payload["confidence"]["final_score"] == 0.4

    def test_trace_output(self, workspace: Path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["score", "--request", "login form", "--tree", "tree.json"])

        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert "No issues" in out
        assert "Final Score:" in out
