"""Cheapest route search.

The graph is never materialised: :func:`edges` enumerates the moves
available from a cell under the current settings and :func:`find_path`
runs a Dijkstra search over them, ordering the frontier with the
composite cost comparator chosen by the player.
"""

import logging
from dataclasses import dataclass, field

from .binary_heap import BinaryHeap
from .consts import (
    CARAVAN_MONEY,
    CARAVAN_TIME,
    CARAVAN_TO_CENTER_MONEY,
    CARAVAN_TO_HOME_MONEY,
    DEFAULT_SCROLL_OF_ESCAPE_COST,
    DEFAULT_SCROLL_OF_ESCAPE_FORUM_COST,
    DEFAULT_SCROLL_OF_ESCAPE_HQ_COST,
)
from .cost import (
    CENTRAL_MOVE,
    SCROLL_OF_ESCAPE,
    SCROLL_OF_ESCAPE_FORUM,
    SCROLL_OF_ESCAPE_HQ,
    STANDARD_MOVE,
    CaravanCost,
    CostComparator,
    EdgeCost,
    TotalCost,
)
from .errors import UnknownCellError
from .grid import MapGrid
from .homeland import Border, Homeland
from .index import CENTER, BorderCell, Center, CellIndex, CellIndexBuilder, HomelandCell, Pos
from .skill import Fleetfoot, RouteGuru

log = logging.getLogger(__name__)


@dataclass
class FindPathSettings:
    """Everything the search needs besides the two end points."""

    grid: MapGrid
    homeland: Homeland = Homeland.BLUE
    use_caravans: bool = False
    use_soe: bool = False
    scroll_of_escape_cost: int = DEFAULT_SCROLL_OF_ESCAPE_COST
    hq_position: CellIndex | None = None
    scroll_of_escape_hq_cost: int = DEFAULT_SCROLL_OF_ESCAPE_HQ_COST
    forum_position: CellIndex | None = None
    scroll_of_escape_forum_cost: int = DEFAULT_SCROLL_OF_ESCAPE_FORUM_COST
    route_guru: RouteGuru = field(default_factory=RouteGuru)
    fleetfoot: Fleetfoot = field(default_factory=Fleetfoot)
    sort_by: tuple[CostComparator, CostComparator] = (CostComparator.LEGS, CostComparator.TIME)

    def prices(self) -> dict:
        return {
            "scroll_of_escape_cost": self.scroll_of_escape_cost,
            "scroll_of_escape_hq_cost": self.scroll_of_escape_hq_cost,
            "scroll_of_escape_forum_cost": self.scroll_of_escape_forum_cost,
            "fleetfoot": self.fleetfoot,
        }


def caravan_cost(
    grid: MapGrid, homeland: Homeland, from_cell: CellIndex, to_cell: CellIndex, route_guru: RouteGuru
) -> CaravanCost:
    """Fare and travel time of a caravan ride.

    Both scale with the grid distance.  The fare per cell depends on
    the destination: the hub, the player's own homeland, or anywhere
    else.
    """
    distance = grid.distance(from_cell, to_cell)
    if isinstance(to_cell, Center):
        rate = CARAVAN_TO_CENTER_MONEY
    elif isinstance(to_cell, HomelandCell) and to_cell.homeland is homeland:
        rate = CARAVAN_TO_HOME_MONEY
    else:
        rate = CARAVAN_MONEY
    per_cell = route_guru.time(CARAVAN_TIME)
    if per_cell is None:
        per_cell = CARAVAN_TIME
    return CaravanCost(time=per_cell * distance, money=rate * distance)


def _grid_edges(homeland_size: int, vertex: CellIndex) -> list[tuple[CellIndex, EdgeCost]]:
    ret = []
    if isinstance(vertex, Center):
        for border in Border:
            ret.append((CellIndexBuilder.border(border, 1).build(), CENTRAL_MOVE))
    elif isinstance(vertex, BorderCell):
        border, shift = vertex.border, vertex.shift
        if shift == 1:
            ret.append((CENTER, CENTRAL_MOVE))
        else:
            ret.append((CellIndexBuilder.border(border, shift - 1).build(), STANDARD_MOVE))
        if shift < homeland_size:
            ret.append((CellIndexBuilder.border(border, shift + 1).build(), STANDARD_MOVE))
        pos = border.direction.adjacent_pos(shift)
        for neighbour in border.neighbours:
            ret.append((CellIndexBuilder.homeland(neighbour, pos).build(), STANDARD_MOVE))
    elif isinstance(vertex, HomelandCell):
        homeland, (x, y) = vertex.homeland, vertex.pos
        # the builder turns x - 1 == 0 or y - 1 == 0 into the border cell
        ret.append((CellIndexBuilder.homeland(homeland, Pos(x - 1, y)).build(), STANDARD_MOVE))
        ret.append((CellIndexBuilder.homeland(homeland, Pos(x, y - 1)).build(), STANDARD_MOVE))
        if x < homeland_size:
            ret.append((CellIndexBuilder.homeland(homeland, Pos(x + 1, y)).build(), STANDARD_MOVE))
        if y < homeland_size:
            ret.append((CellIndexBuilder.homeland(homeland, Pos(x, y + 1)).build(), STANDARD_MOVE))
    else:
        raise TypeError(f"not a cell index: {vertex!r}")
    return ret


def edges(vertex: CellIndex, settings: FindPathSettings) -> list[tuple[CellIndex, EdgeCost]]:
    """Every move available from ``vertex``.

    Walking moves follow the grid.  Caravans run between the hub and
    every campfire, the scroll of escape leads to the nearest campfire
    of the player's homeland, and the HQ and forum scrolls to their
    configured cells.  Disabled features simply produce fewer edges.
    """
    grid = settings.grid
    ret = _grid_edges(grid.homeland_size, vertex)

    if settings.use_caravans and (vertex == CENTER or grid.is_campfire(vertex)):
        # a map may list the hub among its campfires
        for dest in (CENTER,) + tuple(c for c in grid.campfires if c != CENTER):
            if dest == vertex:
                continue
            cost = caravan_cost(grid, settings.homeland, vertex, dest, settings.route_guru)
            ret.append((dest, EdgeCost.caravan(cost.time, cost.money)))

    if settings.use_soe:
        nearest = grid.nearest_campfire(vertex, settings.homeland)
        if nearest is not None and nearest != vertex:
            ret.append((nearest, SCROLL_OF_ESCAPE))

    if settings.hq_position is not None and settings.hq_position != vertex:
        ret.append((settings.hq_position, SCROLL_OF_ESCAPE_HQ))

    if settings.forum_position is not None and settings.forum_position != vertex:
        ret.append((settings.forum_position, SCROLL_OF_ESCAPE_FORUM))

    return ret


def find_path(from_cell: CellIndex, to_cell: CellIndex, settings: FindPathSettings) -> TotalCost | None:
    """Cheapest path from ``from_cell`` to ``to_cell``.

    Parameters
    ----------
    from_cell, to_cell : CellIndex
        End points; both must be on ``settings.grid``.
    settings : FindPathSettings
        Enabled shortcuts, prices, skills and the two metrics to sort by.

    Returns
    -------
    TotalCost or None
        The cheapest path according to
        ``settings.sort_by[0].and_then(settings.sort_by[1])``, or
        ``None`` when the target cannot be reached.

    Raises
    ------
    UnknownCellError
        If either end point is not on the grid.
    """
    grid = settings.grid
    for index in (from_cell, to_cell):
        if index not in grid:
            raise UnknownCellError(f"cell {index} is not on the map")
    if from_cell == to_cell:
        return TotalCost.new(from_cell)

    first, second = settings.sort_by
    comparator = first.and_then(second)
    prices = settings.prices()

    start = TotalCost.new(from_cell)
    dist = {from_cell: start}
    # the heap keeps the greatest item on top, invert to pop the cheapest path
    heap = BinaryHeap(lambda a, b: comparator(b, a), [start])
    settled = 0
    while heap:
        cost = heap.pop()
        vertex = cost.destination
        if vertex == to_cell:
            log.debug("Found path %s -> %s after settling %d cells", from_cell, to_cell, settled)
            return cost
        if comparator(cost, dist[vertex]) > 0:
            continue
        settled += 1
        for edge_index, edge_cost in edges(vertex, settings):
            if edge_index not in grid:
                continue
            candidate = cost.with_edge(edge_cost, vertex, edge_index, **prices)
            best = dist.get(edge_index)
            if best is None or comparator(candidate, best) < 0:
                dist[edge_index] = candidate
                heap.push(candidate)
    log.debug("No path %s -> %s, settled %d cells", from_cell, to_cell, settled)
    return None
