import pytest

from marshrutka.homeland import Border, BorderDirection, Homeland


def test_border_sides_match_homeland_borders() -> None:
    for border in Border:
        for homeland in border.neighbours:
            assert homeland.border(border.direction) is border


def test_neighbours_share_a_border() -> None:
    for homeland in Homeland:
        sharing = {
            other
            for border in Border
            if homeland in border.neighbours
            for other in border.neighbours
            if other is not homeland
        }
        assert sharing == set(homeland.neighbours)


def test_farland() -> None:
    assert Homeland.BLUE.farland is Homeland.GREEN
    assert Homeland.RED.farland is Homeland.YELLOW
    for homeland in Homeland:
        assert homeland.farland.farland is homeland
        assert homeland.farland not in homeland.neighbours


def test_abbrev() -> None:
    assert [h.abbrev for h in Homeland] == ["B", "R", "G", "Y"]
    assert Homeland.from_abbrev("g") is Homeland.GREEN
    with pytest.raises(ValueError):
        Homeland.from_abbrev("X")


def test_border_direction() -> None:
    assert Border.BR.direction is BorderDirection.HORIZONTAL
    assert Border.GY.direction is BorderDirection.HORIZONTAL
    assert Border.RG.direction is BorderDirection.VERTICAL
    assert Border.YB.direction is BorderDirection.VERTICAL
    assert BorderDirection.HORIZONTAL.adjacent_pos(4) == (4, 1)
    assert BorderDirection.VERTICAL.adjacent_pos(4) == (1, 4)
    assert str(Border.YB) == "YB"
