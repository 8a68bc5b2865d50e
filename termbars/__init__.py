"""Decorators, size units, moving averages and width synchronisation for terminal progress bars."""

__version__ = "0.1.0"

__all__ = [
    "averages",
    "counters",
    "decorator",
    "eta",
    "percent",
    "priority_queue",
    "speed",
    "units",
    "wrappers",
]