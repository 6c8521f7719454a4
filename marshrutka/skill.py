"""Player skills that shorten travel time.

Each skill has two tiers: 0 (not learned) and 1 (learned).  A learned
skill multiplies the time of the moves it applies to by an exact ratio;
the result is rounded up to a whole second so that an estimate never
undershoots the real travel time.
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from fractions import Fraction

from .errors import SkillLevelError


@dataclass(frozen=True, order=True)
class Skill:
    level: int = 0

    RATIOS = {}

    @classmethod
    def range(cls) -> range:
        return range(min(cls.RATIOS), max(cls.RATIOS) + 1)

    @property
    def is_valid(self) -> bool:
        return self.level in self.RATIOS

    def ratio(self) -> Fraction:
        """Time multiplier for this level.

        Raises
        ------
        SkillLevelError
            If the level is outside of :meth:`range`.
        """
        try:
            return self.RATIOS[self.level]
        except KeyError:
            raise SkillLevelError(
                f"{type(self).__name__} level must be in {self.range()}, got {self.level}"
            ) from None

    def time(self, time: timedelta) -> timedelta | None:
        """Apply the skill to ``time``.

        Returns ``None`` for an invalid level.
        """
        ratio = self.RATIOS.get(self.level)
        if ratio is None:
            return None
        if ratio == 1:
            return time
        seconds = math.ceil(ratio * int(time.total_seconds()))
        return timedelta(seconds=seconds)


@dataclass(frozen=True, order=True)
class RouteGuru(Skill):
    """Caravan travel time discount: 40 min become 31 min 40 s."""

    RATIOS = {0: Fraction(1), 1: Fraction(19, 24)}


@dataclass(frozen=True, order=True)
class Fleetfoot(Skill):
    """Walking time discount: 106 s become 100 s."""

    RATIOS = {0: Fraction(1), 1: Fraction(50, 53)}
