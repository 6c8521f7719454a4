"""Cell identities.

Every cell of the map is one of:

* :class:`Center` - the hub, written ``0#0``;
* :class:`HomelandCell` - a cell inside a homeland, written ``R 3#4``;
* :class:`BorderCell` - a cell on a border between two homelands,
  written ``BR 2``.

Homeland positions with a zero coordinate are not homeland cells; they
belong to a border (or to the hub).  Use :class:`CellIndexBuilder` to
construct indices from raw coordinates so that the canonical form is
always produced.
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import NamedTuple

from .errors import CellIndexError
from .homeland import Border, BorderDirection, Homeland


class Pos(NamedTuple):
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x}#{self.y}"


@total_ordering
class CellIndex:
    """Common base of the three cell kinds.

    Kinds are ordered ``Center < HomelandCell < BorderCell`` and then by
    their fields, which gives paths a deterministic total order.
    """

    __slots__ = ()

    def sort_key(self) -> tuple:
        raise NotImplementedError

    def offset(self) -> tuple[int, int]:
        """Geometric offset of the cell from the hub."""
        raise NotImplementedError

    def __lt__(self, other):
        if not isinstance(other, CellIndex):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True, eq=True, repr=False)
class Center(CellIndex):
    def sort_key(self) -> tuple:
        return (0,)

    def offset(self) -> tuple[int, int]:
        return 0, 0

    def __str__(self) -> str:
        return "0#0"

    def __repr__(self) -> str:
        return "Center()"


CENTER = Center()


@dataclass(frozen=True, eq=True)
class HomelandCell(CellIndex):
    homeland: Homeland
    pos: Pos

    def __post_init__(self):
        if self.pos.x < 1 or self.pos.y < 1:
            raise ValueError(
                f"{self.homeland.abbrev} {self.pos} is not a homeland cell, "
                "build it with CellIndexBuilder"
            )

    def sort_key(self) -> tuple:
        return 1, int(self.homeland), self.pos.x, self.pos.y

    def offset(self) -> tuple[int, int]:
        sx, sy = self.homeland.signs
        return sx * self.pos.x, sy * self.pos.y

    def __str__(self) -> str:
        return f"{self.homeland.abbrev} {self.pos}"


@dataclass(frozen=True, eq=True)
class BorderCell(CellIndex):
    border: Border
    shift: int

    def __post_init__(self):
        if self.shift < 1:
            raise ValueError(f"border shift must be positive, got {self.shift}")

    def sort_key(self) -> tuple:
        return 2, int(self.border), self.shift

    def offset(self) -> tuple[int, int]:
        sx, sy = self.border.signs
        return sx * self.shift, sy * self.shift

    def __str__(self) -> str:
        return f"{self.border.name} {self.shift}"


class CellIndexBuilder:
    """Deferred construction of a :class:`CellIndex`.

    The builder accepts any coordinates, including the ones lying on a
    border or on the hub, and :meth:`build` returns the canonical index::

        >>> CellIndexBuilder.homeland(Homeland.RED, Pos(3, 0)).build()
        BorderCell(border=<Border.BR: 0>, shift=3)
    """

    __slots__ = ("_homeland", "_border", "_x", "_y")

    def __init__(self, homeland=None, border=None, x=0, y=0):
        self._homeland = homeland
        self._border = border
        self._x = x
        self._y = y

    @classmethod
    def center(cls) -> "CellIndexBuilder":
        return cls()

    @classmethod
    def homeland(cls, homeland: Homeland, pos) -> "CellIndexBuilder":
        x, y = pos
        return cls(homeland=homeland, x=x, y=y)

    @classmethod
    def border(cls, border: Border, shift: int) -> "CellIndexBuilder":
        return cls(border=border, x=shift)

    def build(self) -> CellIndex:
        if self._x < 0 or self._y < 0:
            raise ValueError(f"negative coordinates ({self._x}, {self._y})")
        if self._border is not None:
            if self._x == 0:
                return CENTER
            return BorderCell(self._border, self._x)
        if self._x == 0 and self._y == 0:
            return CENTER
        if self._homeland is None:
            raise ValueError(f"coordinates ({self._x}, {self._y}) need a homeland or a border")
        if self._y == 0:
            return BorderCell(self._homeland.border(BorderDirection.HORIZONTAL), self._x)
        if self._x == 0:
            return BorderCell(self._homeland.border(BorderDirection.VERTICAL), self._y)
        return HomelandCell(self._homeland, Pos(self._x, self._y))


def homeland_cell(homeland: Homeland, x: int, y: int) -> CellIndex:
    """Shortcut for ``CellIndexBuilder.homeland(homeland, (x, y)).build()``."""
    return CellIndexBuilder.homeland(homeland, (x, y)).build()


def border_cell(border: Border, shift: int) -> CellIndex:
    return CellIndexBuilder.border(border, shift).build()


def from_offset(dx: int, dy: int) -> CellIndex:
    """Cell at the geometric offset ``(dx, dy)`` from the hub."""
    if dx == 0 and dy == 0:
        return CENTER
    if dy == 0:
        return border_cell(Border.GY if dx > 0 else Border.BR, abs(dx))
    if dx == 0:
        return border_cell(Border.RG if dy > 0 else Border.YB, abs(dy))
    for homeland in Homeland:
        sx, sy = homeland.signs
        if sx * dx > 0 and sy * dy > 0:
            return homeland_cell(homeland, abs(dx), abs(dy))
    raise AssertionError("unreachable")


_POS_RE = re.compile(r"^([0-9]+)#([0-9]+)$")
_SHIFT_RE = re.compile(r"^[0-9]+$")
_HOMELAND_LETTERS = {homeland.abbrev for homeland in Homeland}


def parse_cell_index(text: str) -> CellIndex:
    """Parse a cell name as printed on the map.

    Parameters
    ----------
    text : str
        ``"0#0"`` for the hub, ``"<H> <x>#<y>"`` for a homeland cell
        (``H`` being one of ``B``, ``R``, ``G``, ``Y``) or
        ``"<BORDER> <shift>"`` for a border cell.

    Returns
    -------
    CellIndex
        The canonical index.  Homeland positions with a zero
        coordinate are folded into the border they lie on.

    Raises
    ------
    CellIndexError
        If the text does not follow the naming convention.
    """
    s = text.strip()
    if s == "0#0":
        return CENTER
    left, sep, right = s.partition(" ")
    right = right.strip()
    if not sep or not right:
        raise CellIndexError(f"malformed cell name {text!r}")
    m = _POS_RE.match(right)
    if m and len(left) == 1:
        if left not in _HOMELAND_LETTERS:
            raise CellIndexError(f"unknown homeland in cell name {text!r}")
        homeland = Homeland.from_abbrev(left)
        return homeland_cell(homeland, int(m.group(1)), int(m.group(2)))
    if _SHIFT_RE.match(right):
        try:
            border = Border.from_name(left)
        except ValueError:
            raise CellIndexError(f"unknown border in cell name {text!r}") from None
        return border_cell(border, int(right))
    raise CellIndexError(f"malformed cell name {text!r}")
