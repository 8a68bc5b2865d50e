"""Moving averages: exponentially weighted, median of three, and a locked wrapper."""

from __future__ import annotations

import threading
from typing import Protocol

AVG_METRIC_AGE = 30.0
"""Default age, in samples, of the simple exponentially weighted average."""
DECAY = 2.0 / (AVG_METRIC_AGE + 1.0)
WARMUP_SAMPLES = 10
"""Samples a variable average collects before it reports a value."""


class MovingAverage(Protocol):
    """Anything that averages a stream of values."""

    def add(self, value: float) -> None: ...

    def value(self) -> float: ...

    def set(self, value: float) -> None: ...


class SimpleEWMA:
    """Exponentially weighted average with the default age; no warm-up."""

    def __init__(self) -> None:
        self._value = 0.0

    def add(self, value: float) -> None:
        if self._value == 0:
            self._value = value
        else:
            self._value = value * DECAY + self._value * (1 - DECAY)

    def value(self) -> float:
        return self._value

    def set(self, value: float) -> None:
        self._value = value


class VariableEWMA:
    """Exponentially weighted average of a given age, reporting 0 during warm-up."""

    def __init__(self, age: float) -> None:
        self._decay = 2.0 / (age + 1.0)
        self._value = 0.0
        self._count = 0

    def add(self, value: float) -> None:
        if self._count < WARMUP_SAMPLES:
            self._count += 1
            self._value += value
            return
        if self._count == WARMUP_SAMPLES:
            self._count += 1
            self._value /= WARMUP_SAMPLES
        self._value = value * self._decay + self._value * (1 - self._decay)

    def value(self) -> float:
        if self._count <= WARMUP_SAMPLES:
            return 0.0
        return self._value

    def set(self, value: float) -> None:
        self._value = value
        if self._count <= WARMUP_SAMPLES:
            self._count = WARMUP_SAMPLES + 1


class MedianWindow:
    """Median of the last three samples."""

    def __init__(self) -> None:
        self._window = [0.0, 0.0, 0.0]

    def add(self, value: float) -> None:
        self._window = [*self._window[1:], value]

    def value(self) -> float:
        return sorted(self._window)[1]

    def set(self, value: float) -> None:
        self._window = [value] * 3


class ThreadSafeMovingAverage:
    """Serialises access to another moving average."""

    def __init__(self, average: MovingAverage) -> None:
        self._average = average
        self._lock = threading.Lock()

    def add(self, value: float) -> None:
        with self._lock:
            self._average.add(value)

    def value(self) -> float:
        with self._lock:
            return self._average.value()

    def set(self, value: float) -> None:
        with self._lock:
            self._average.set(value)


def new_moving_average(age: float = 0) -> MovingAverage:
    """Simple average for age 0 or the default age, otherwise a variable one."""
    if age == 0 or age == AVG_METRIC_AGE:
        return SimpleEWMA()
    return VariableEWMA(age)


def new_median() -> MedianWindow:
    """Median of the last three samples."""
    return MedianWindow()


def new_thread_safe_moving_average(average: MovingAverage) -> ThreadSafeMovingAverage:
    """Wrap ``average`` in a lock, unless it already is."""
    if isinstance(average, ThreadSafeMovingAverage):
        return average
    return ThreadSafeMovingAverage(average)