"""
Tests for the settings file and the command line entry point.

Usage:
    pytest tests/test_cli.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from src.settings import DEFAULT_SETTINGS, load_settings, save_settings


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep main() from installing console/file handlers during tests."""
    monkeypatch.setattr(main, "configure_logging", lambda level: None)


def test_settings_defaults_when_missing(tmp_path):
    settings = load_settings(tmp_path / "tiler.json")
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_settings_round_trip_merges_defaults(tmp_path):
    path = tmp_path / "tiler.json"
    save_settings({"executor": "serial", "seed": 9}, path)

    settings = load_settings(path)

    assert settings["executor"] == "serial"
    assert settings["seed"] == 9
    assert settings["max_solutions"] == DEFAULT_SETTINGS["max_solutions"]


def test_settings_invalid_file_falls_back(tmp_path):
    path = tmp_path / "tiler.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS

    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_select_strategy_prefers_flags():
    args = main.parse_args(["2", "2", "--graph"])
    assert main.select_strategy(args, {"strategy_name": "single"}) == "graph"

    args = main.parse_args(["2", "2"])
    assert args.board_type == "LBoard"
    assert args.tile_type == "LTile"
    assert main.select_strategy(args, {"strategy_name": "single"}) == "single"


def test_cli_count(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    code = main.main(["2", "2", "Rectangle", "LTile", "--width", "3", "--count", "--executor", "serial"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "2 tilings"


def test_cli_graph_json(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    code = main.main(["1", "2", "LBoard", "LTile", "--graph", "--json", "graph.json"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "1 tilings"
    data = json.loads((tmp_path / "graph.json").read_text(encoding="utf-8"))
    assert data["complete_index"] == 1
    assert len(data["nodes"]) == 2


def test_cli_single_and_image(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    code = main.main(["1", "2", "TBoard", "TTile", "--single", "--seed", "4", "--image", "t.png", "--steps", "steps"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "AAA\n A"
    assert (tmp_path / "t.png").exists()
    assert sorted(p.name for p in (tmp_path / "steps").iterdir()) == ["step_000.png", "step_001.png"]


def test_cli_single_without_tiling(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    code = main.main(["3", "2", "Rectangle", "--width", "3", "--single"])

    assert code == 1
    assert "No tilings found!" in capsys.readouterr().out


def test_cli_scaling(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    code = main.main(["1", "2", "--scaling", "--max-scale", "2", "--executor", "serial"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert code == 0
    assert lines[0] == "scale(1), 1 tilings"
    assert lines[1].startswith("scale(2), ")


def test_cli_invalid_size_returns_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert main.main(["2", "1", "Rectangle"]) == 2


def test_cli_zero_max_solutions_is_rejected(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    args = main.parse_args(["2", "2", "--single", "--max-solutions", "0"])
    assert main.build_context(args, {"max_solutions": 1000}).max_solutions == 0
    assert main.main(["2", "2", "--single", "--max-solutions", "0"]) == 2
