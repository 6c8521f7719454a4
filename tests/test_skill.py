from datetime import timedelta
from fractions import Fraction

import pytest

from marshrutka.errors import SkillLevelError
from marshrutka.skill import Fleetfoot, RouteGuru


def test_level_zero_is_identity() -> None:
    t = timedelta(minutes=7, seconds=13)
    assert RouteGuru(0).time(t) == t
    assert Fleetfoot(0).time(t) == t


def test_route_guru_discount() -> None:
    assert RouteGuru(1).time(timedelta(minutes=40)) == timedelta(minutes=31, seconds=40)


def test_fleetfoot_discount_rounds_up() -> None:
    assert Fleetfoot(1).time(timedelta(seconds=106)) == timedelta(seconds=100)
    # 180 * 50 / 53 = 169.8
    assert Fleetfoot(1).time(timedelta(minutes=3)) == timedelta(seconds=170)


def test_estimate_never_undershoots() -> None:
    for skill in (RouteGuru(1), Fleetfoot(1)):
        for seconds in range(0, 600):
            scaled = skill.time(timedelta(seconds=seconds)).total_seconds()
            exact = skill.ratio() * seconds
            assert exact <= scaled < exact + 1


def test_invalid_level() -> None:
    assert RouteGuru(2).time(timedelta(minutes=1)) is None
    assert Fleetfoot(-1).time(timedelta(minutes=1)) is None
    assert not Fleetfoot(5).is_valid
    with pytest.raises(SkillLevelError):
        RouteGuru(2).ratio()


def test_range_and_ratios() -> None:
    assert list(RouteGuru.range()) == [0, 1]
    assert list(Fleetfoot.range()) == [0, 1]
    assert RouteGuru(1).ratio() == Fraction(19, 24)
    assert Fleetfoot(1).ratio() == Fraction(50, 53)
