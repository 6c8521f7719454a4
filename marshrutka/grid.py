"""The parsed map: which cells exist, where they are and what is on them.

A map is a square of ``(2 * homeland_size + 1) ** 2`` cells given in
row-major order.  Raw grid coordinates are the column and row of a cell
in that square; all distances are Manhattan distances over them.
"""

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum

from .errors import CellIndexError, MapError, UnknownCellError
from .homeland import Homeland
from .index import CENTER, CellIndex, HomelandCell, from_offset, homeland_cell, parse_cell_index

log = logging.getLogger(__name__)


class PoI(Enum):
    CAMPFIRE = "campfire"


@dataclass(frozen=True)
class Cell:
    index: CellIndex
    x: int
    y: int
    poi: PoI | None = None

    def distance(self, other: "Cell") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


def homeland_size_for(total_cells: int) -> int:
    """Derive the homeland side from the total number of cells.

    Raises
    ------
    MapError
        If ``total_cells`` is not the square of an odd number.
    """
    side = math.isqrt(total_cells)
    if total_cells < 1 or side * side != total_cells:
        raise MapError(f"map has {total_cells} cells, which is not a square")
    if side % 2 == 0:
        raise MapError(f"map side {side} is even, the hub would not be centred")
    return (side - 1) // 2


class MapGrid:
    """Read-only grid topology used by the pathfinder.

    Parameters
    ----------
    homeland_size : int
        Side length of a homeland quadrant.
    cells : iterable of Cell
        Every cell of the map.  Indices must be unique and fit the
        homeland size; the hub must be present.
    """

    def __init__(self, homeland_size: int, cells):
        self.homeland_size = homeland_size
        self._cells: dict[CellIndex, Cell] = {}
        for cell in cells:
            self._check_range(cell.index)
            if cell.index in self._cells:
                raise MapError(f"cell {cell.index} appears twice")
            self._cells[cell.index] = cell
        if CENTER not in self._cells:
            raise MapError("map has no hub cell 0#0")
        self.campfires: tuple[CellIndex, ...] = tuple(
            sorted(index for index, cell in self._cells.items() if cell.poi is PoI.CAMPFIRE)
        )
        self._nearest_campfire = self._compute_nearest_campfires()
        log.debug(
            "Loaded map: homeland size %d, %d cells, %d campfires",
            homeland_size,
            len(self._cells),
            len(self.campfires),
        )

    def _check_range(self, index: CellIndex):
        n = self.homeland_size
        dx, dy = index.offset()
        if abs(dx) > n or abs(dy) > n:
            raise MapError(f"cell {index} lies outside of a map with homeland size {n}")

    def _compute_nearest_campfires(self) -> dict[CellIndex, dict[Homeland, CellIndex]]:
        owned: dict[Homeland, list[CellIndex]] = {}
        for campfire in self.campfires:
            if isinstance(campfire, HomelandCell):
                owned.setdefault(campfire.homeland, []).append(campfire)
        table = {}
        for index, cell in self._cells.items():
            nearest = {}
            for homeland, campfires in owned.items():
                # campfires are sorted, min() keeps the first of equally distant ones
                nearest[homeland] = min(campfires, key=lambda c: cell.distance(self._cells[c]))
            table[index] = nearest
        return table

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows, poi=None) -> "MapGrid":
        """Build a grid from cell names laid out row by row.

        Parameters
        ----------
        rows : list[list[str]]
            Cell names (``"B 3#4"``, ``"BR 2"``, ``"0#0"``) in row-major
            order.  Rows must all have the same length.
        poi : dict[str, str], optional
            Mapping of cell names to point-of-interest tags
            (``"campfire"``).

        Raises
        ------
        MapError
            If the layout or any cell name is invalid.
        """
        poi = poi or {}
        total = sum(len(row) for row in rows)
        homeland_size = homeland_size_for(total)
        side = 2 * homeland_size + 1
        if len(rows) != side or any(len(row) != side for row in rows):
            raise MapError(f"map rows do not form a {side}x{side} square")
        tags = {}
        for name, tag in poi.items():
            try:
                tags[parse_cell_index(name)] = PoI(tag)
            except CellIndexError as e:
                raise MapError(f"invalid point of interest: {e}") from e
            except ValueError:
                raise MapError(f"unknown point of interest {tag!r} at {name}") from None
        cells = []
        for y, row in enumerate(rows):
            for x, name in enumerate(row):
                try:
                    index = parse_cell_index(name)
                except CellIndexError as e:
                    raise MapError(f"row {y}, column {x}: {e}") from e
                cells.append(Cell(index, x, y, tags.pop(index, None)))
        if tags:
            missing = ", ".join(str(index) for index in sorted(tags))
            raise MapError(f"points of interest on unknown cells: {missing}")
        return cls(homeland_size, cells)

    @classmethod
    def generate(cls, homeland_size: int, campfires=None) -> "MapGrid":
        """Build a synthetic grid in the standard layout.

        Blue occupies the top-left quadrant, Red the bottom-left, Green
        the bottom-right and Yellow the top-right one.  Without explicit
        ``campfires`` every homeland gets one in its middle.
        """
        if homeland_size < 0:
            raise MapError(f"homeland size must not be negative, got {homeland_size}")
        if campfires is None:
            middle = (homeland_size + 1) // 2
            campfires = (
                [homeland_cell(h, middle, middle) for h in Homeland] if middle else []
            )
        campfires = set(campfires)
        n = homeland_size
        cells = []
        for y in range(2 * n + 1):
            for x in range(2 * n + 1):
                index = from_offset(x - n, y - n)
                cells.append(Cell(index, x, y, PoI.CAMPFIRE if index in campfires else None))
        grid = cls(n, cells)
        unknown = campfires.difference(grid._cells)
        if unknown:
            raise MapError(f"campfires outside of the map: {', '.join(map(str, sorted(unknown)))}")
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __getitem__(self, index: CellIndex) -> Cell:
        try:
            return self._cells[index]
        except KeyError:
            raise UnknownCellError(f"cell {index} is not on the map") from None

    def __contains__(self, index) -> bool:
        return index in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def cells(self):
        return self._cells.values()

    def rows(self) -> list[list[Cell]]:
        side = 2 * self.homeland_size + 1
        grid = [[None] * side for _ in range(side)]
        for cell in self._cells.values():
            grid[cell.y][cell.x] = cell
        return grid

    def distance(self, a: CellIndex, b: CellIndex) -> int:
        return self[a].distance(self[b])

    def is_campfire(self, index: CellIndex) -> bool:
        cell = self._cells.get(index)
        return cell is not None and cell.poi is PoI.CAMPFIRE

    def nearest_campfire(self, index: CellIndex, homeland: Homeland) -> CellIndex | None:
        """Campfire of ``homeland`` closest to ``index``, if the homeland has one."""
        return self._nearest_campfire.get(index, {}).get(homeland)


def load_map(path) -> MapGrid:
    """Load a map file written by :func:`dump_map` or ``marshrutka-map``.

    The file is JSON with a ``rows`` list of cell-name rows and an
    optional ``poi`` object.  Any I/O or format problem is reported as
    :class:`MapError`.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise MapError(f"cannot read map {path}: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("rows"), list):
        raise MapError(f"map {path} has no 'rows' list")
    rows = data["rows"]
    if not all(isinstance(row, list) and all(isinstance(name, str) for name in row) for row in rows):
        raise MapError(f"map {path}: rows must be lists of cell names")
    poi = data.get("poi") or {}
    if not isinstance(poi, dict):
        raise MapError(f"map {path}: 'poi' must be an object")
    grid = MapGrid.from_rows(rows, poi)
    declared = data.get("homeland_size")
    if declared is not None and declared != grid.homeland_size:
        raise MapError(
            f"map {path} declares homeland size {declared}, rows give {grid.homeland_size}"
        )
    log.info("Loaded map %s (%d cells)", path, len(grid))
    return grid


def map_payload(grid: MapGrid) -> dict:
    return {
        "homeland_size": grid.homeland_size,
        "rows": [[str(cell.index) for cell in row] for row in grid.rows()],
        "poi": {str(index): PoI.CAMPFIRE.value for index in grid.campfires},
    }


def dump_map(grid: MapGrid, path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(map_payload(grid), f, ensure_ascii=False, indent=2)
