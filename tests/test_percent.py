import pytest

from termbars.percent import check_requested_width, percentage, percentage_round

CASES_100 = [
    (-1, -1, 0), (0, -1, 0), (0, 0, 0), (0, 1, 0),
    (100, 0, 0), (100, 10, 10), (100, 15, 15), (100, 50, 50),
    (100, 99, 99), (100, 100, 100), (100, 101, 100),
    (120, 0, 0), (120, 10, 8), (120, 15, 13), (120, 50, 42),
    (120, 60, 50), (120, 99, 83), (120, 101, 84), (120, 118, 98),
    (120, 119, 99), (120, 120, 100), (120, 121, 100),
]

CASES_80 = [
    (-1, -1, 0), (0, -1, 0), (0, 0, 0), (0, 1, 0),
    (100, 0, 0), (100, 10, 8), (100, 15, 12), (100, 50, 40),
    (100, 99, 79), (100, 100, 80), (100, 101, 80),
    (120, 0, 0), (120, 10, 7), (120, 15, 10), (120, 50, 33),
    (120, 60, 40), (120, 99, 66), (120, 101, 67), (120, 118, 79),
    (120, 119, 79), (120, 120, 80), (120, 121, 80),
]


@pytest.mark.parametrize("total,current,expected", CASES_100)
def test_percentage_round_width_100(total, current, expected):
    assert int(percentage_round(total, current, 100)) == expected


@pytest.mark.parametrize("total,current,expected", CASES_80)
def test_percentage_round_width_80(total, current, expected):
    assert int(percentage_round(total, current, 80)) == expected


def test_percentage_unrounded():
    assert percentage(100, 10, 100) == 10.0
    assert percentage(0, 5, 100) == 0.0
    assert percentage(10, 20, 50) == 50.0


@pytest.mark.parametrize(
    "requested,available,expected",
    [(0, 80, 80), (-3, 80, 80), (100, 80, 80), (40, 80, 40), (80, 80, 80)],
)
def test_check_requested_width(requested, available, expected):
    assert check_requested_width(requested, available) == expected