import json

import pytest

from marshrutka.errors import MapError, UnknownCellError
from marshrutka.grid import Cell, MapGrid, PoI, dump_map, homeland_size_for, load_map, map_payload
from marshrutka.homeland import Border, Homeland
from marshrutka.index import CENTER, border_cell, homeland_cell, parse_cell_index


def test_homeland_size_for() -> None:
    assert homeland_size_for(169) == 6
    assert homeland_size_for(1) == 0
    with pytest.raises(MapError):
        homeland_size_for(168)
    with pytest.raises(MapError):
        homeland_size_for(144)
    with pytest.raises(MapError):
        homeland_size_for(0)


def test_generated_layout() -> None:
    grid = MapGrid.generate(6)
    assert len(grid) == 169
    rows = grid.rows()
    assert rows[6][6].index == CENTER
    assert rows[0][0].index == homeland_cell(Homeland.BLUE, 6, 6)
    assert rows[12][0].index == homeland_cell(Homeland.RED, 6, 6)
    assert rows[12][12].index == homeland_cell(Homeland.GREEN, 6, 6)
    assert rows[0][12].index == homeland_cell(Homeland.YELLOW, 6, 6)
    assert rows[6][0].index == border_cell(Border.BR, 6)
    assert rows[0][6].index == border_cell(Border.YB, 6)


def test_distances() -> None:
    grid = MapGrid.generate(6)
    p = parse_cell_index
    assert grid.distance(p("B 6#6"), p("G 6#6")) == 24
    assert grid.distance(p("B 1#1"), p("R 1#1")) == 2
    assert grid.distance(p("BR 3"), p("YB 2")) == 5
    assert grid.distance(CENTER, p("Y 2#5")) == 7
    assert grid.distance(p("R 4#2"), p("R 4#2")) == 0


def test_default_campfires() -> None:
    grid = MapGrid.generate(6)
    assert grid.campfires == tuple(homeland_cell(h, 3, 3) for h in Homeland)
    assert grid.is_campfire(homeland_cell(Homeland.GREEN, 3, 3))
    assert not grid.is_campfire(CENTER)
    assert grid.nearest_campfire(CENTER, Homeland.RED) == homeland_cell(Homeland.RED, 3, 3)


def test_nearest_campfire_per_homeland() -> None:
    b11 = homeland_cell(Homeland.BLUE, 1, 1)
    b55 = homeland_cell(Homeland.BLUE, 5, 5)
    grid = MapGrid.generate(6, campfires=[b11, b55])
    assert grid.nearest_campfire(homeland_cell(Homeland.BLUE, 6, 6), Homeland.BLUE) == b55
    assert grid.nearest_campfire(CENTER, Homeland.BLUE) == b11
    assert grid.nearest_campfire(b55, Homeland.BLUE) == b55
    assert grid.nearest_campfire(CENTER, Homeland.RED) is None


def test_nearest_campfire_tie_goes_to_first() -> None:
    b13 = homeland_cell(Homeland.BLUE, 1, 3)
    b31 = homeland_cell(Homeland.BLUE, 3, 1)
    grid = MapGrid.generate(6, campfires=[b31, b13])
    assert grid.nearest_campfire(CENTER, Homeland.BLUE) == min(b13, b31)


def test_missing_cell() -> None:
    grid = MapGrid.generate(6)
    assert homeland_cell(Homeland.BLUE, 7, 7) not in grid
    with pytest.raises(UnknownCellError):
        grid[homeland_cell(Homeland.BLUE, 7, 7)]


def test_from_rows_round_trip() -> None:
    grid = MapGrid.generate(3)
    payload = map_payload(grid)
    again = MapGrid.from_rows(payload["rows"], payload["poi"])
    assert again.homeland_size == 3
    assert again.campfires == grid.campfires
    assert [c.index for c in again.cells()] == [c.index for c in grid.cells()]


def test_from_rows_rejects_bad_layouts() -> None:
    rows = map_payload(MapGrid.generate(1))["rows"]
    with pytest.raises(MapError):
        MapGrid.from_rows(rows[:2])
    with pytest.raises(MapError):
        MapGrid.from_rows([rows[0] + rows[1][:1], rows[1][1:], rows[2]])
    duplicated = [list(row) for row in rows]
    duplicated[0][0] = duplicated[0][1]
    with pytest.raises(MapError):
        MapGrid.from_rows(duplicated)
    garbled = [list(row) for row in rows]
    garbled[2][2] = "Q 1#1"
    with pytest.raises(MapError):
        MapGrid.from_rows(garbled)
    too_far = [list(row) for row in rows]
    too_far[0][0] = "B 2#2"
    with pytest.raises(MapError):
        MapGrid.from_rows(too_far)
    with pytest.raises(MapError):
        MapGrid.from_rows(rows, {"G 5#5": "campfire"})
    with pytest.raises(MapError):
        MapGrid.from_rows(rows, {"G 1#1": "volcano"})


def test_hub_required() -> None:
    with pytest.raises(MapError):
        MapGrid(1, [Cell(homeland_cell(Homeland.BLUE, 1, 1), 0, 0)])


def test_generate_rejects_foreign_campfires() -> None:
    with pytest.raises(MapError):
        MapGrid.generate(2, campfires=[homeland_cell(Homeland.BLUE, 3, 3)])


def test_load_and_dump(tmp_path) -> None:
    grid = MapGrid.generate(4, campfires=[homeland_cell(Homeland.RED, 2, 3)])
    path = tmp_path / "map.json"
    dump_map(grid, path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["homeland_size"] == 4
    assert data["poi"] == {"R 2#3": "campfire"}
    loaded = load_map(path)
    assert len(loaded) == 81
    assert loaded.campfires == (homeland_cell(Homeland.RED, 2, 3),)
    assert loaded[homeland_cell(Homeland.RED, 2, 3)].poi is PoI.CAMPFIRE


def test_load_errors(tmp_path) -> None:
    with pytest.raises(MapError):
        load_map(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(MapError):
        load_map(broken)
    no_rows = tmp_path / "no_rows.json"
    no_rows.write_text(json.dumps({"poi": {}}), encoding="utf-8")
    with pytest.raises(MapError):
        load_map(no_rows)
    wrong_size = tmp_path / "wrong_size.json"
    payload = map_payload(MapGrid.generate(1))
    payload["homeland_size"] = 2
    wrong_size.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(MapError):
        load_map(wrong_size)
