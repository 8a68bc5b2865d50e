import time
from datetime import timedelta

import pytest

from termbars.averages import new_median
from termbars.decorator import WC, Statistics
from termbars.speed import (
    average_speed,
    choose_speed_producer,
    ewma_speed,
    moving_average_speed,
    new_average_speed,
)
from termbars.units import SizeB1000, SizeB1024

KIB, MIB, GIB, TIB = 1 << 10, 1 << 20, 1 << 30, 1 << 40
KB, MB, GB, TB = 10**3, 10**6, 10**9, 10**12


@pytest.mark.parametrize(
    "fmt, current, expected",
    [
        ("", 0, "0 b/s"),
        ("%d", 0, "0b/s"),
        ("%f", 0, "0.000000b/s"),
        ("% .2f", 0, "0.00 b/s"),
        ("%d", 1, "1b/s"),
        ("% .2f", 1, "1.00 b/s"),
        ("%d", 2 * KIB, "2KiB/s"),
        ("% .2f", 2 * KIB, "2.00 KiB/s"),
        ("%d", 2 * MIB, "2MiB/s"),
        ("% .2f", 2 * MIB, "2.00 MiB/s"),
        ("%d", 2 * GIB, "2GiB/s"),
        ("% .2f", 2 * GIB, "2.00 GiB/s"),
        ("%d", 2 * TIB, "2TiB/s"),
        ("% .2f", 2 * TIB, "2.00 TiB/s"),
    ],
)
def test_average_speed_size_b1024(fmt, current, expected):
    d = new_average_speed(SizeB1024(0), fmt, time.monotonic() - 1.0)
    res, _ = d.decor(Statistics(current=current))
    assert res == expected


@pytest.mark.parametrize(
    "fmt, current, expected",
    [
        ("", 0, "0 b/s"),
        ("%d", 0, "0b/s"),
        ("%f", 0, "0.000000b/s"),
        ("% .2f", 0, "0.00 b/s"),
        ("%d", 1, "1b/s"),
        ("% .2f", 1, "1.00 b/s"),
        ("%d", 2 * KB, "2KB/s"),
        ("% .2f", 2 * KB, "2.00 KB/s"),
        ("%d", 2 * MB, "2MB/s"),
        ("% .2f", 2 * MB, "2.00 MB/s"),
        ("%d", 2 * GB, "2GB/s"),
        ("% .2f", 2 * GB, "2.00 GB/s"),
        ("%d", 2 * TB, "2TB/s"),
        ("% .2f", 2 * TB, "2.00 TB/s"),
    ],
)
def test_average_speed_size_b1000(fmt, current, expected):
    d = new_average_speed(SizeB1000(0), fmt, time.monotonic() - 1.0)
    res, _ = d.decor(Statistics(current=current))
    assert res == expected


def test_average_speed_freezes_on_complete():
    d = new_average_speed(SizeB1024(0), "%d", time.monotonic() - 1.0)
    first, _ = d.decor(Statistics(current=2 * KIB))
    second, _ = d.decor(Statistics(current=0, completed=True))
    assert first == "2KiB/s"
    assert second == first


def test_average_adjust_moves_start():
    d = average_speed(SizeB1024(0), "%d")
    d.average_adjust(time.monotonic() - 1.0)
    res, _ = d.decor(Statistics(current=2 * MIB))
    assert res == "2MiB/s"


def test_average_speed_width_config():
    d = new_average_speed(SizeB1024(0), "%d", time.monotonic() - 1.0, WC(w=12))
    res, width = d.decor(Statistics(current=2 * KIB))
    assert width == 12
    assert res == "      2KiB/s"


def test_moving_average_speed_reports_zero_without_samples():
    d = moving_average_speed(SizeB1024(0), "", new_median())
    res, _ = d.decor(Statistics())
    assert res == "0 b/s"


def test_moving_average_speed_with_median():
    d = moving_average_speed(SizeB1024(0), "%d", new_median())
    for _ in range(3):
        d.ewma_update(2 * KIB, timedelta(seconds=1))
    res, _ = d.decor(Statistics())
    assert res == "2KiB/s"


def test_ewma_speed_accumulates_zero_item_time():
    d = ewma_speed(SizeB1024(0), "%d", 0)
    d.ewma_update(0, timedelta(seconds=1))
    d.ewma_update(4 * KIB, 1.0)
    res, _ = d.decor(Statistics())
    assert res == "2KiB/s"


def test_ewma_speed_single_sample():
    d = ewma_speed(SizeB1000(0), "% .2f")
    d.ewma_update(2 * MB, timedelta(seconds=1))
    res, _ = d.decor(Statistics())
    assert res == "2.00 MB/s"


def test_choose_speed_producer_default_formats():
    assert choose_speed_producer(SizeB1000(0), "")(2 * KB) == "2 KB/s"
    assert choose_speed_producer(SizeB1024(0), "")(2 * GIB) == "2 GiB/s"


def test_choose_speed_producer_plain_unit():
    assert choose_speed_producer(0, "")(1.5) == "1.500000"
    assert choose_speed_producer(0, "%.1f")(2.25) == "2.2"