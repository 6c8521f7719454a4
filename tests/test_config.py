import json
import os

import pytest

from marshrutka.config import Settings, load_settings, save_settings, user_config_path
from marshrutka.cost import CostComparator
from marshrutka.errors import ConfigError
from marshrutka.grid import MapGrid
from marshrutka.homeland import Homeland
from marshrutka.index import CENTER
from marshrutka.skill import Fleetfoot


def test_missing_file_gives_defaults(tmp_path) -> None:
    assert load_settings(str(tmp_path / "absent.json")) == Settings()


def test_round_trip(tmp_path) -> None:
    path = str(tmp_path / "nested" / "settings.json")
    settings = Settings(homeland="G", use_soe=True, hq_position="0#0", fleetfoot=1, sort_by=["money", "time"])
    assert save_settings(settings, path) == path
    assert load_settings(path) == settings


def test_malformed_files(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(path))
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(path))
    path.write_text(json.dumps({"homeland": "X"}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(path))


def test_unknown_keys_are_ignored(tmp_path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"homeland": "R", "colour": "red"}), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.homeland == "R"
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    "overrides",
    [
        {"route_guru": 2},
        {"fleetfoot": -1},
        {"sort_by": ["legs"]},
        {"sort_by": ["legs", "speed"]},
        {"hq_position": "B 0#x"},
        {"scroll_of_escape_cost": -3},
        {"scroll_of_escape_cost": True},
        {"homeland": 1},
        {"hq_position": 5},
        {"forum_position": ["0#0"]},
        {"route_guru": [1]},
        {"fleetfoot": True},
        {"sort_by": None},
        {"sort_by": ["legs", 3]},
        {"use_caravans": "false"},
        {"use_soe": 1},
    ],
)
def test_validate_rejects(overrides) -> None:
    with pytest.raises(ConfigError):
        Settings(**overrides).validate()


def test_to_find_path_settings() -> None:
    grid = MapGrid.generate(2)
    settings = Settings(homeland="y", use_caravans=True, forum_position="0#0", fleetfoot=1, sort_by=["time", "time"])
    find_settings = settings.to_find_path_settings(grid)
    assert find_settings.grid is grid
    assert find_settings.homeland is Homeland.YELLOW
    assert find_settings.use_caravans
    assert find_settings.forum_position == CENTER
    assert find_settings.hq_position is None
    assert find_settings.fleetfoot == Fleetfoot(1)
    assert find_settings.sort_by == (CostComparator.TIME, CostComparator.TIME)


@pytest.mark.skipif(os.name == "nt", reason="XDG lookup is POSIX only")
def test_user_config_path_follows_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert user_config_path() == os.path.join(str(tmp_path), "marshrutka", "settings.json")


@pytest.mark.parametrize(
    "data",
    [
        {"homeland": 1},
        {"sort_by": None},
        {"hq_position": 5},
        {"route_guru": [1]},
        {"use_caravans": "false"},
        {"scroll_of_escape_hq_cost": False},
    ],
)
def test_wrongly_typed_values(tmp_path, data) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(path))
