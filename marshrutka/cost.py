"""Costs of single moves and of whole paths.

A move (graph edge) is described by an :class:`EdgeCost`.  While a path
is extended move by move, a :class:`TotalCost` keeps the visible
itinerary as a list of :class:`Command` objects: consecutive walking
steps collapse into a single command, every other move kind gets a
command of its own.
"""

from dataclasses import dataclass, field, replace
from datetime import timedelta
from enum import Enum, IntEnum
from typing import Callable

from .consts import CENTRAL_MOVE_TIME, STANDARD_MOVE_TIME
from .index import CellIndex
from .skill import Fleetfoot

ZERO = timedelta(0)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def format_duration(duration: timedelta) -> str:
    """Render a duration the compact way, e.g. ``1h3m10s``."""
    total = int(duration.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    parts = [
        f"{value}{unit}"
        for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))
        if value
    ]
    return sign + ("".join(parts) if parts else "0s")


class MoveKind(IntEnum):
    NO_MOVE = 0
    CENTRAL_MOVE = 1
    STANDARD_MOVE = 2
    CARAVAN = 3
    SCROLL_OF_ESCAPE = 4
    SCROLL_OF_ESCAPE_HQ = 5
    SCROLL_OF_ESCAPE_FORUM = 6

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize().replace("hq", "HQ")

    @property
    def is_scroll(self) -> bool:
        return self in _SCROLLS


_SCROLLS = frozenset(
    (MoveKind.SCROLL_OF_ESCAPE, MoveKind.SCROLL_OF_ESCAPE_HQ, MoveKind.SCROLL_OF_ESCAPE_FORUM)
)


@dataclass(frozen=True, order=True)
class CaravanCost:
    time: timedelta
    money: int


@dataclass(frozen=True, order=True)
class EdgeCost:
    """Intrinsic cost of one move, independent of the player settings.

    Only caravans carry their own figures; scroll prices are session
    settings and are passed to :meth:`money` by the caller.
    """

    kind: MoveKind
    caravan_cost: CaravanCost | None = None

    @classmethod
    def caravan(cls, time: timedelta, money: int) -> "EdgeCost":
        return cls(MoveKind.CARAVAN, CaravanCost(time, money))

    def legs(self) -> int:
        return 1 if self.kind is MoveKind.STANDARD_MOVE else 0

    def money(self, scroll_of_escape_cost=0, scroll_of_escape_hq_cost=0, scroll_of_escape_forum_cost=0) -> int:
        if self.kind is MoveKind.CARAVAN:
            return self.caravan_cost.money
        if self.kind is MoveKind.SCROLL_OF_ESCAPE:
            return scroll_of_escape_cost
        if self.kind is MoveKind.SCROLL_OF_ESCAPE_HQ:
            return scroll_of_escape_hq_cost
        if self.kind is MoveKind.SCROLL_OF_ESCAPE_FORUM:
            return scroll_of_escape_forum_cost
        return 0

    def time(self) -> timedelta:
        if self.kind is MoveKind.STANDARD_MOVE:
            return STANDARD_MOVE_TIME
        if self.kind is MoveKind.CENTRAL_MOVE:
            return CENTRAL_MOVE_TIME
        if self.kind is MoveKind.CARAVAN:
            return self.caravan_cost.time
        return ZERO


NO_MOVE = EdgeCost(MoveKind.NO_MOVE)
CENTRAL_MOVE = EdgeCost(MoveKind.CENTRAL_MOVE)
STANDARD_MOVE = EdgeCost(MoveKind.STANDARD_MOVE)
SCROLL_OF_ESCAPE = EdgeCost(MoveKind.SCROLL_OF_ESCAPE)
SCROLL_OF_ESCAPE_HQ = EdgeCost(MoveKind.SCROLL_OF_ESCAPE_HQ)
SCROLL_OF_ESCAPE_FORUM = EdgeCost(MoveKind.SCROLL_OF_ESCAPE_FORUM)


@dataclass(frozen=True, order=True)
class AggregatedCost:
    """Cost of one itinerary command, possibly covering several moves.

    ``raw_time`` is the undiscounted time; for walking the Fleetfoot
    discount is applied once to the whole run by :attr:`time`.
    """

    kind: MoveKind
    raw_time: timedelta = ZERO
    legs: int = 0
    money: int = 0
    fleetfoot: Fleetfoot = Fleetfoot()

    @classmethod
    def from_edge(
        cls,
        edge_cost: EdgeCost,
        scroll_of_escape_cost=0,
        scroll_of_escape_hq_cost=0,
        scroll_of_escape_forum_cost=0,
        fleetfoot=Fleetfoot(),
    ) -> "AggregatedCost":
        kind = edge_cost.kind
        if kind is MoveKind.NO_MOVE:
            return cls(kind)
        if kind is MoveKind.CENTRAL_MOVE:
            return cls(kind, raw_time=edge_cost.time())
        if kind is MoveKind.STANDARD_MOVE:
            return cls(kind, raw_time=edge_cost.time(), legs=edge_cost.legs(), fleetfoot=fleetfoot)
        if kind is MoveKind.CARAVAN:
            return cls(kind, raw_time=edge_cost.time(), money=edge_cost.money())
        return cls(
            kind,
            money=edge_cost.money(
                scroll_of_escape_cost, scroll_of_escape_hq_cost, scroll_of_escape_forum_cost
            ),
        )

    @property
    def time(self) -> timedelta:
        if self.kind is MoveKind.STANDARD_MOVE:
            discounted = self.fleetfoot.time(self.raw_time)
            return self.raw_time if discounted is None else discounted
        return self.raw_time

    def merge_step(self, legs: int, time: timedelta) -> "AggregatedCost":
        return replace(self, legs=self.legs + legs, raw_time=self.raw_time + time)


@dataclass(frozen=True, order=True)
class Command:
    aggregated_cost: AggregatedCost
    from_cell: CellIndex
    to_cell: CellIndex

    def __str__(self) -> str:
        return f"{self.aggregated_cost.kind.label}: {self.from_cell} -> {self.to_cell}"


@dataclass
class TotalCost:
    """Cost of a path so far and the itinerary that produced it.

    ``legs``, ``money`` and ``time`` always equal the sums over
    ``commands``.
    """

    legs: int = 0
    money: int = 0
    time: timedelta = ZERO
    commands: list[Command] = field(default_factory=list)

    @classmethod
    def new(cls, origin: CellIndex) -> "TotalCost":
        return cls(commands=[Command(AggregatedCost(MoveKind.NO_MOVE), origin, origin)])

    @property
    def destination(self) -> CellIndex:
        return self.commands[-1].to_cell

    def copy(self) -> "TotalCost":
        return TotalCost(self.legs, self.money, self.time, list(self.commands))

    def add_edge(
        self,
        edge_cost: EdgeCost,
        from_cell: CellIndex,
        to_cell: CellIndex,
        scroll_of_escape_cost=0,
        scroll_of_escape_hq_cost=0,
        scroll_of_escape_forum_cost=0,
        fleetfoot=Fleetfoot(),
    ) -> "TotalCost":
        """Extend the path in place by one move and return ``self``.

        The synthetic starting command is absorbed by the first move, a
        walking step following a walking command is merged into it, any
        other move is appended as a new command.
        """
        last = self.commands[-1] if self.commands else None
        if last is not None and last.aggregated_cost.kind is MoveKind.NO_MOVE:
            self.commands.pop()
            from_cell = last.from_cell
            aggregated_cost = AggregatedCost.from_edge(
                edge_cost,
                scroll_of_escape_cost,
                scroll_of_escape_hq_cost,
                scroll_of_escape_forum_cost,
                fleetfoot,
            )
        elif (
            last is not None
            and last.aggregated_cost.kind is MoveKind.STANDARD_MOVE
            and edge_cost.kind is MoveKind.STANDARD_MOVE
        ):
            self.commands.pop()
            from_cell = last.from_cell
            aggregated_cost = last.aggregated_cost.merge_step(edge_cost.legs(), edge_cost.time())
        else:
            aggregated_cost = AggregatedCost.from_edge(
                edge_cost,
                scroll_of_escape_cost,
                scroll_of_escape_hq_cost,
                scroll_of_escape_forum_cost,
                fleetfoot,
            )
        self.commands.append(Command(aggregated_cost, from_cell, to_cell))

        self.legs = sum(c.aggregated_cost.legs for c in self.commands)
        self.money = sum(c.aggregated_cost.money for c in self.commands)
        self.time = sum((c.aggregated_cost.time for c in self.commands), ZERO)
        return self

    def with_edge(self, edge_cost: EdgeCost, from_cell: CellIndex, to_cell: CellIndex, **prices) -> "TotalCost":
        """Same as :meth:`add_edge` but on a copy."""
        return self.copy().add_edge(edge_cost, from_cell, to_cell, **prices)


Comparator = Callable[[TotalCost, TotalCost], int]


class CostComparator(Enum):
    LEGS = "legs"
    TIME = "time"
    MONEY = "money"

    def __str__(self) -> str:
        return self.value

    def compare(self, a: TotalCost, b: TotalCost) -> int:
        return _cmp(getattr(a, self.value), getattr(b, self.value))

    def probable_second_target(self) -> "CostComparator":
        return _PROBABLE_SECOND_TARGET[self]

    def eval_next(self, second: "CostComparator") -> tuple["CostComparator", "CostComparator"]:
        """Resolve the secondary metric and pick the remaining third one."""
        if second is self:
            second = self.probable_second_target()
        return second, _THIRD_TARGET[self, second]

    def and_then(self, second: "CostComparator") -> Comparator:
        """Composite comparator giving a strict total order over paths.

        Paths are ranked by this metric, then ``second`` (replaced by
        :meth:`probable_second_target` if equal to this one), then the
        remaining metric, then the number of commands and finally the
        commands themselves.
        """
        second, third = self.eval_next(second)
        first = self

        def compare(a: TotalCost, b: TotalCost) -> int:
            return (
                first.compare(a, b)
                or second.compare(a, b)
                or third.compare(a, b)
                or _cmp(len(a.commands), len(b.commands))
                or _cmp(a.commands, b.commands)
            )

        return compare


_PROBABLE_SECOND_TARGET = {
    CostComparator.LEGS: CostComparator.TIME,
    CostComparator.TIME: CostComparator.LEGS,
    CostComparator.MONEY: CostComparator.LEGS,
}

_THIRD_TARGET = {
    (CostComparator.LEGS, CostComparator.TIME): CostComparator.MONEY,
    (CostComparator.LEGS, CostComparator.MONEY): CostComparator.TIME,
    (CostComparator.TIME, CostComparator.LEGS): CostComparator.MONEY,
    (CostComparator.TIME, CostComparator.MONEY): CostComparator.LEGS,
    (CostComparator.MONEY, CostComparator.LEGS): CostComparator.TIME,
    (CostComparator.MONEY, CostComparator.TIME): CostComparator.LEGS,
}
