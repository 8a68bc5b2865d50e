"""ETA and elapsed-time decorators, time normalizers and duration styles.

Durations are given as :class:`datetime.timedelta` or as a number of
seconds. Start times are readings of :func:`time.monotonic`.
"""

from __future__ import annotations

import math
import time
from datetime import timedelta
from typing import Callable, Optional, Union

from termbars.averages import MovingAverage, new_median, new_moving_average
from termbars.decorator import WC, AnyDecorator, Decorator, Statistics, TimeStyle

Duration = Union[timedelta, float, int]
Normalizer = Callable[[timedelta], timedelta]

_NS_PER_SECOND = 1_000_000_000
_MINUTE_NS = 60 * _NS_PER_SECOND
_HOUR_NS = 60 * _MINUTE_NS


def _quo(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _rem(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return a - b * _quo(a, b)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _to_ns(duration: Duration) -> int:
    if isinstance(duration, timedelta):
        whole = duration.days * 86400 + duration.seconds
        return whole * _NS_PER_SECOND + duration.microseconds * 1000
    return int(round(duration * _NS_PER_SECOND))


def _from_ns(ns: int) -> timedelta:
    return timedelta(microseconds=_quo(ns, 1000))


def _since_ns(start: float) -> int:
    return int((time.monotonic() - start) * _NS_PER_SECOND)


def _go_duration(ns: int) -> str:
    seconds = _quo(ns, _NS_PER_SECOND)
    if seconds == 0:
        return "0s"
    sign = "-" if seconds < 0 else ""
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def _ns_producer(style) -> Callable[[int], str]:
    def parts(ns: int) -> tuple[int, int, int]:
        hours = _rem(_quo(ns, _HOUR_NS), 60)
        minutes = _rem(_quo(ns, _MINUTE_NS), 60)
        seconds = _rem(_quo(ns, _NS_PER_SECOND), 60)
        return hours, minutes, seconds

    if style == TimeStyle.HHMMSS:

        def hhmmss(ns: int) -> str:
            hours, minutes, seconds = parts(ns)
            return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

        return hhmmss
    if style == TimeStyle.HHMM:

        def hhmm(ns: int) -> str:
            hours, minutes, _ = parts(ns)
            return f"{hours:02d}:{minutes:02d}"

        return hhmm
    if style == TimeStyle.MMSS:

        def mmss(ns: int) -> str:
            hours, minutes, seconds = parts(ns)
            if hours > 0:
                return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
            return f"{minutes:02d}:{seconds:02d}"

        return mmss
    return _go_duration


def choose_time_producer(style) -> Callable[[Duration], str]:
    """Return a function rendering a duration in the given :class:`TimeStyle`."""
    producer = _ns_producer(style)
    return lambda duration: producer(_to_ns(duration))


def _normalize(normalizer, remaining_ns: int) -> int:
    if normalizer is None:
        return remaining_ns
    remaining = _from_ns(remaining_ns)
    method = getattr(normalizer, "normalize", None)
    result = method(remaining) if method is not None else normalizer(remaining)
    return _to_ns(result)


def max_tolerate_time_normalizer(max_tolerate: Duration) -> Normalizer:
    """Smooth the remaining time, unless it jumps by more than ``max_tolerate``."""
    max_ns = _to_ns(max_tolerate)
    normalized = 0
    last_call = 0

    def normalize(remaining: Duration) -> timedelta:
        nonlocal normalized, last_call
        remaining_ns = _to_ns(remaining)
        diff = normalized - remaining_ns
        if diff <= 0 or diff > max_ns or remaining_ns < _MINUTE_NS:
            normalized = remaining_ns
            last_call = time.monotonic_ns()
            return _from_ns(remaining_ns)
        now = time.monotonic_ns()
        normalized -= now - last_call
        last_call = now
        if normalized > 0:
            return _from_ns(normalized)
        return _from_ns(remaining_ns)

    return normalize


def fixed_interval_time_normalizer(upd_interval: int) -> Normalizer:
    """Take a fresh remaining time only every ``upd_interval`` calls."""
    normalized = 0
    last_call = 0
    count = 0

    def normalize(remaining: Duration) -> timedelta:
        nonlocal normalized, last_call, count
        remaining_ns = _to_ns(remaining)
        if count == 0 or remaining_ns < _MINUTE_NS:
            count = upd_interval
            normalized = remaining_ns
            last_call = time.monotonic_ns()
            return _from_ns(remaining_ns)
        count -= 1
        now = time.monotonic_ns()
        normalized -= now - last_call
        last_call = now
        if normalized > 0:
            return _from_ns(normalized)
        return _from_ns(remaining_ns)

    return normalize


class MovingAverageETA(Decorator):
    """ETA from a moving average of the time spent per item."""

    def __init__(
        self,
        style,
        average: MovingAverage,
        normalizer=None,
        wc: Optional[WC] = None,
    ) -> None:
        super().__init__(wc)
        self._producer = _ns_producer(style)
        self._average = average
        self._normalizer = normalizer
        self._zero_ns = 0

    def decor(self, stats: Statistics) -> tuple[str, int]:
        per_item = int(_round_half_away(self._average.value()))
        remaining = _normalize(self._normalizer, (stats.total - stats.current) * per_item)
        return self.format(self._producer(remaining))

    def ewma_update(self, n: int, duration: Duration) -> None:
        """Feed ``n`` items processed in ``duration`` into the average."""
        dur = _to_ns(duration)
        if n <= 0:
            self._zero_ns += dur
            return
        per_item = (self._zero_ns + dur) / n
        if math.isinf(per_item) or math.isnan(per_item):
            self._zero_ns += dur
            return
        self._zero_ns = 0
        self._average.add(per_item)


class AverageETA(Decorator):
    """ETA from the overall average rate since ``start``."""

    def __init__(self, style, start: float, normalizer=None, wc: Optional[WC] = None) -> None:
        super().__init__(wc)
        self._producer = _ns_producer(style)
        self._start = start
        self._normalizer = normalizer

    def decor(self, stats: Statistics) -> tuple[str, int]:
        remaining = 0
        if stats.current != 0:
            per_item = _round_half_away(_since_ns(self._start) / stats.current)
            remaining = (stats.total - stats.current) * int(per_item)
            remaining = _normalize(self._normalizer, remaining)
        return self.format(self._producer(remaining))

    def average_adjust(self, start: float) -> None:
        """Move the start time, e.g. for resumed tasks."""
        self._start = start


def moving_average_eta(
    style, average: Optional[MovingAverage] = None, normalizer=None, wc: Optional[WC] = None
) -> MovingAverageETA:
    """ETA decorator over ``average``; a median of three is used if none is given."""
    if average is None:
        average = new_median()
    return MovingAverageETA(style, average, normalizer, wc)


def ewma_normalized_eta(
    style, age: float = 0, normalizer=None, wc: Optional[WC] = None
) -> MovingAverageETA:
    """Exponentially weighted ETA with an optional normalizer."""
    return moving_average_eta(style, new_moving_average(age), normalizer, wc)


def ewma_eta(style, age: float = 0, wc: Optional[WC] = None) -> MovingAverageETA:
    """Exponentially weighted ETA; feed it through ``ewma_update``."""
    return ewma_normalized_eta(style, age, None, wc)


def new_average_eta(
    style, start: float, normalizer=None, wc: Optional[WC] = None
) -> AverageETA:
    """Average ETA counted from ``start`` (a :func:`time.monotonic` reading)."""
    return AverageETA(style, start, normalizer, wc)


def average_eta(style, wc: Optional[WC] = None) -> AverageETA:
    """Average ETA counted from now."""
    return new_average_eta(style, time.monotonic(), None, wc)


def new_elapsed(style, start: float, wc: Optional[WC] = None) -> AnyDecorator:
    """Elapsed time since ``start``; frozen once the bar completes or aborts."""
    producer = _ns_producer(style)
    msg = ""

    def render(stats: Statistics) -> str:
        nonlocal msg
        if not stats.completed and not stats.aborted:
            msg = producer(_since_ns(start))
        return msg

    return AnyDecorator(render, wc)


def elapsed(style, wc: Optional[WC] = None) -> AnyDecorator:
    """Elapsed time counted from now."""
    return new_elapsed(style, time.monotonic(), wc)