"""Speed decorators: moving-average and overall-average rates.

Durations are given as :class:`datetime.timedelta` or as a number of
seconds. Start times are readings of :func:`time.monotonic`.
"""

from __future__ import annotations

import math
import time
from datetime import timedelta
from typing import Callable, Optional, Union

from termbars.averages import MovingAverage, new_moving_average
from termbars.decorator import WC, Decorator, Statistics
from termbars.units import SizeB1000, SizeB1024, fmt_as_speed, sprintf

Duration = Union[timedelta, float, int]

_NS_PER_SECOND = 1_000_000_000


def _to_ns(duration: Duration) -> int:
    if isinstance(duration, timedelta):
        whole = duration.days * 86400 + duration.seconds
        return whole * _NS_PER_SECOND + duration.microseconds * 1000
    return int(round(duration * _NS_PER_SECOND))


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def choose_speed_producer(unit=0, fmt: str = "") -> Callable[[float], str]:
    """Return a function rendering a per-second rate in ``unit``.

    ``unit`` is one of ``0``, ``SizeB1024(0)`` or ``SizeB1000(0)``.
    """
    if isinstance(unit, (SizeB1024, SizeB1000)):
        kind = type(unit)
        template = fmt or "% d"

        def sized(speed: float) -> str:
            return sprintf(template, fmt_as_speed(kind(int(_round_half_away(speed)))))

        return sized
    template = fmt or "%f"

    def plain(speed: float) -> str:
        return sprintf(template, speed)

    return plain


class MovingAverageSpeed(Decorator):
    """Speed from a moving average of the time spent per unit."""

    def __init__(
        self, unit, fmt: str, average: MovingAverage, wc: Optional[WC] = None
    ) -> None:
        super().__init__(wc)
        self._producer = choose_speed_producer(unit, fmt)
        self._average = average
        self._zero_ns = 0

    def decor(self, stats: Statistics) -> tuple[str, int]:
        value = self._average.value()
        # some averages report 0 until they have seen enough samples
        text = self._producer(1e9 / value if value != 0 else 0.0)
        return self.format(text)

    def ewma_update(self, n: int, duration: Duration) -> None:
        """Feed ``n`` units processed in ``duration`` into the average."""
        dur = _to_ns(duration)
        if n <= 0:
            self._zero_ns += dur
            return
        per_unit = (self._zero_ns + dur) / n
        if math.isinf(per_unit) or math.isnan(per_unit):
            self._zero_ns += dur
            return
        self._zero_ns = 0
        self._average.add(per_unit)


class AverageSpeed(Decorator):
    """Overall average speed since ``start``; frozen once the bar completes."""

    def __init__(self, unit, fmt: str, start: float, wc: Optional[WC] = None) -> None:
        super().__init__(wc)
        self._producer = choose_speed_producer(unit, fmt)
        self._start = start
        self._msg = ""

    def decor(self, stats: Statistics) -> tuple[str, int]:
        if not stats.completed:
            elapsed = time.monotonic() - self._start
            speed = stats.current / elapsed if elapsed > 0 else 0.0
            self._msg = self._producer(speed)
        return self.format(self._msg)

    def average_adjust(self, start: float) -> None:
        """Move the start time, e.g. for resumed tasks."""
        self._start = start


def moving_average_speed(
    unit, fmt: str, average: MovingAverage, wc: Optional[WC] = None
) -> MovingAverageSpeed:
    """Speed decorator over ``average``."""
    return MovingAverageSpeed(unit, fmt, average, wc)


def ewma_speed(unit, fmt: str = "", age: float = 0, wc: Optional[WC] = None) -> MovingAverageSpeed:
    """Exponentially weighted speed; feed it through ``ewma_update``."""
    return moving_average_speed(unit, fmt, new_moving_average(age), wc)


def new_average_speed(unit, fmt: str, start: float, wc: Optional[WC] = None) -> AverageSpeed:
    """Average speed counted from ``start`` (a :func:`time.monotonic` reading)."""
    return AverageSpeed(unit, fmt, start, wc)


def average_speed(unit, fmt: str = "", wc: Optional[WC] = None) -> AverageSpeed:
    """Average speed counted from now."""
    return new_average_speed(unit, fmt, time.monotonic(), wc)