"""Cheapest routes across the four-homeland grid map."""

from .binary_heap import BinaryHeap
from .cost import AggregatedCost, Command, CostComparator, EdgeCost, MoveKind, TotalCost
from .errors import CellIndexError, ConfigError, MapError, MarshrutkaError, SkillLevelError, UnknownCellError
from .grid import Cell, MapGrid, PoI, load_map
from .homeland import Border, BorderDirection, Homeland
from .index import CENTER, BorderCell, CellIndex, CellIndexBuilder, Center, HomelandCell, Pos, parse_cell_index
from .pathfinder import FindPathSettings, edges, find_path
from .skill import Fleetfoot, RouteGuru

__version__ = "0.1.0"
