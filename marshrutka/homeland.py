"""Homelands and the borders between them.

The map is split into four quadrants (homelands) arranged in a cycle
Blue -> Red -> Green -> Yellow -> Blue.  Two homelands that follow each
other in the cycle share a border; the remaining one is the farland.

Geometric layout (y grows downward, the hub sits in the middle)::

    Blue   | Yellow
    -------+-------
    Red    | Green

``BR`` and ``GY`` run along the hub row (horizontal), ``YB`` and ``RG``
along the hub column (vertical).
"""

from enum import Enum, IntEnum


class BorderDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def adjacent_pos(self, shift: int) -> tuple[int, int]:
        """Homeland position touching the border cell at ``shift``."""
        if self is BorderDirection.HORIZONTAL:
            return shift, 1
        return 1, shift


class Homeland(IntEnum):
    BLUE = 0
    RED = 1
    GREEN = 2
    YELLOW = 3

    @property
    def abbrev(self) -> str:
        return _HOMELAND_ABBREV[self]

    @property
    def title(self) -> str:
        return self.name.title()

    @property
    def neighbours(self) -> tuple["Homeland", "Homeland"]:
        return _HOMELAND_NEIGHBOURS[self]

    @property
    def farland(self) -> "Homeland":
        return Homeland((self + 2) % 4)

    @property
    def signs(self) -> tuple[int, int]:
        """Signs of the (x, y) offsets from the hub for cells of this homeland."""
        return _HOMELAND_SIGNS[self]

    def border(self, direction: BorderDirection) -> "Border":
        return _HOMELAND_BORDERS[self, direction]

    @classmethod
    def from_abbrev(cls, abbrev: str) -> "Homeland":
        try:
            return _ABBREV_HOMELAND[abbrev.upper()]
        except KeyError:
            raise ValueError(f"unknown homeland {abbrev!r}") from None


class Border(IntEnum):
    BR = 0
    RG = 1
    GY = 2
    YB = 3

    @property
    def neighbours(self) -> tuple[Homeland, Homeland]:
        return _BORDER_NEIGHBOURS[self]

    @property
    def direction(self) -> BorderDirection:
        if self in (Border.BR, Border.GY):
            return BorderDirection.HORIZONTAL
        return BorderDirection.VERTICAL

    @property
    def signs(self) -> tuple[int, int]:
        """Unit offset from the hub of the border cell with shift 1."""
        return _BORDER_SIGNS[self]

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_name(cls, name: str) -> "Border":
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown border {name!r}") from None


_HOMELAND_ABBREV = {
    Homeland.BLUE: "B",
    Homeland.RED: "R",
    Homeland.GREEN: "G",
    Homeland.YELLOW: "Y",
}
_ABBREV_HOMELAND = {abbrev: homeland for homeland, abbrev in _HOMELAND_ABBREV.items()}

_HOMELAND_NEIGHBOURS = {
    Homeland.BLUE: (Homeland.YELLOW, Homeland.RED),
    Homeland.RED: (Homeland.BLUE, Homeland.GREEN),
    Homeland.GREEN: (Homeland.RED, Homeland.YELLOW),
    Homeland.YELLOW: (Homeland.BLUE, Homeland.GREEN),
}

_HOMELAND_SIGNS = {
    Homeland.BLUE: (-1, -1),
    Homeland.RED: (-1, 1),
    Homeland.GREEN: (1, 1),
    Homeland.YELLOW: (1, -1),
}

_HOMELAND_BORDERS = {
    (Homeland.BLUE, BorderDirection.HORIZONTAL): Border.BR,
    (Homeland.BLUE, BorderDirection.VERTICAL): Border.YB,
    (Homeland.RED, BorderDirection.HORIZONTAL): Border.BR,
    (Homeland.RED, BorderDirection.VERTICAL): Border.RG,
    (Homeland.GREEN, BorderDirection.HORIZONTAL): Border.GY,
    (Homeland.GREEN, BorderDirection.VERTICAL): Border.RG,
    (Homeland.YELLOW, BorderDirection.HORIZONTAL): Border.GY,
    (Homeland.YELLOW, BorderDirection.VERTICAL): Border.YB,
}

_BORDER_NEIGHBOURS = {
    Border.BR: (Homeland.BLUE, Homeland.RED),
    Border.RG: (Homeland.RED, Homeland.GREEN),
    Border.GY: (Homeland.GREEN, Homeland.YELLOW),
    Border.YB: (Homeland.YELLOW, Homeland.BLUE),
}

_BORDER_SIGNS = {
    Border.BR: (-1, 0),
    Border.RG: (0, 1),
    Border.GY: (1, 0),
    Border.YB: (0, -1),
}
