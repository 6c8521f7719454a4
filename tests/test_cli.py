import json

from marshrutka import cli, mapgen
from marshrutka.grid import load_map


def test_prints_route(tmp_path, capsys) -> None:
    config = str(tmp_path / "settings.json")
    assert cli.main(["B 1#1", "0#0", "--config", config, "--minimal"]) == 0
    out = capsys.readouterr().out
    assert "Itinerary" in out
    assert "Summary" in out


def test_invalid_cell(tmp_path, capsys) -> None:
    config = str(tmp_path / "settings.json")
    assert cli.main(["B 1#1", "nowhere", "--config", config]) == cli.EXIT_ERROR
    assert "Invalid input" in capsys.readouterr().out


def test_cell_outside_map(tmp_path, capsys) -> None:
    config = str(tmp_path / "settings.json")
    assert cli.main(["B 9#9", "0#0", "--config", config]) == cli.EXIT_ERROR
    assert "not on the map" in capsys.readouterr().out


def test_save_settings(tmp_path) -> None:
    config = tmp_path / "settings.json"
    argv = ["R 1#1", "R 3#3", "--config", str(config), "--homeland", "r", "--soe", "--soe-cost", "4", "--save-settings"]
    assert cli.main(argv) == 0
    saved = json.loads(config.read_text(encoding="utf-8"))
    assert saved["homeland"] == "R"
    assert saved["use_soe"] is True
    assert saved["scroll_of_escape_cost"] == 4


def test_broken_settings_file(tmp_path, capsys) -> None:
    config = tmp_path / "settings.json"
    config.write_text("{", encoding="utf-8")
    assert cli.main(["0#0", "BR 1", "--config", str(config)]) == cli.EXIT_ERROR


def test_mapgen_writes_loadable_map(tmp_path) -> None:
    output = tmp_path / "map.json"
    assert mapgen.main(["--homeland-size", "3", "--campfire", "B 1#2", "-o", str(output)]) == 0
    grid = load_map(output)
    assert grid.homeland_size == 3
    assert [str(c) for c in grid.campfires] == ["B 1#2"]


def test_route_on_map_file(tmp_path, capsys) -> None:
    output = tmp_path / "map.json"
    assert mapgen.main(["--homeland-size", "2", "-o", str(output)]) == 0
    config = str(tmp_path / "settings.json")
    assert cli.main(["G 2#2", "B 1#1", "--map", str(output), "--config", config, "--caravans"]) == 0
    assert "Summary" in capsys.readouterr().out


def test_mapgen_prints_json(capsys) -> None:
    assert mapgen.main(["--homeland-size", "1"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["homeland_size"] == 1
    assert len(data["rows"]) == 3


def test_mapgen_rejects_bad_campfire(capsys) -> None:
    assert mapgen.main(["--homeland-size", "1", "--campfire", "B 4#4"]) == 1


def test_wrongly_typed_settings_file(tmp_path, capsys) -> None:
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"homeland": 1}), encoding="utf-8")
    assert cli.main(["0#0", "BR 1", "--config", str(config)]) == cli.EXIT_ERROR
    assert "homeland" in capsys.readouterr().out
