"""Counter, total, current and percentage decorators."""

from __future__ import annotations

from typing import Callable, Optional

from termbars.decorator import WC, AnyDecorator, Statistics
from termbars.percent import percentage as _percentage
from termbars.units import PercentageValue, SizeB1000, SizeB1024, sprintf

_UINT64_MASK = (1 << 64) - 1


def _unit_kind(unit) -> Optional[type]:
    if isinstance(unit, SizeB1024):
        return SizeB1024
    if isinstance(unit, SizeB1000):
        return SizeB1000
    return None


def _single_value(
    unit, fmt: str, pick: Callable[[Statistics], int], wc: Optional[WC]
) -> AnyDecorator:
    kind = _unit_kind(unit)
    if kind is None:
        template = fmt or "%d"

        def render(stats: Statistics) -> str:
            return sprintf(template, pick(stats))

    else:
        template = fmt or "% d"

        def render(stats: Statistics) -> str:
            return sprintf(template, kind(pick(stats)))

    return AnyDecorator(render, wc)


def counters(unit=0, pair_fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """Decorator showing current and total, scaled by ``unit``.

    ``unit`` is one of ``0``, ``SizeB1024(0)`` or ``SizeB1000(0)``.
    """
    kind = _unit_kind(unit)
    if kind is None:
        template = pair_fmt or "%d / %d"

        def render(stats: Statistics) -> str:
            return sprintf(template, stats.current, stats.total)

    else:
        template = pair_fmt or "% d / % d"

        def render(stats: Statistics) -> str:
            return sprintf(template, kind(stats.current), kind(stats.total))

    return AnyDecorator(render, wc)


def counters_no_unit(pair_fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`counters` without a unit."""
    return counters(0, pair_fmt, wc)


def counters_kibi_byte(pair_fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`counters` with 1024-based byte units."""
    return counters(SizeB1024(0), pair_fmt, wc)


def counters_kilo_byte(pair_fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`counters` with 1000-based byte units."""
    return counters(SizeB1000(0), pair_fmt, wc)


def total(unit=0, fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """Decorator showing the total, scaled by ``unit``."""
    return _single_value(unit, fmt, lambda s: s.total, wc)


def total_no_unit(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`total` without a unit."""
    return total(0, fmt, wc)


def total_kibi_byte(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`total` with 1024-based byte units."""
    return total(SizeB1024(0), fmt, wc)


def total_kilo_byte(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`total` with 1000-based byte units."""
    return total(SizeB1000(0), fmt, wc)


def current(unit=0, fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """Decorator showing the current count, scaled by ``unit``."""
    return _single_value(unit, fmt, lambda s: s.current, wc)


def current_no_unit(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`current` without a unit."""
    return current(0, fmt, wc)


def current_kibi_byte(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`current` with 1024-based byte units."""
    return current(SizeB1024(0), fmt, wc)


def current_kilo_byte(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`current` with 1000-based byte units."""
    return current(SizeB1000(0), fmt, wc)


def inverted_current(unit=0, fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """Decorator showing what remains (total minus current), scaled by ``unit``."""
    return _single_value(unit, fmt, lambda s: s.total - s.current, wc)


def inverted_current_no_unit(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`inverted_current` without a unit."""
    return inverted_current(0, fmt, wc)


def inverted_current_kibi_byte(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`inverted_current` with 1024-based byte units."""
    return inverted_current(SizeB1024(0), fmt, wc)


def inverted_current_kilo_byte(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """:func:`inverted_current` with 1000-based byte units."""
    return inverted_current(SizeB1000(0), fmt, wc)


def new_percentage(fmt: str = "", wc: Optional[WC] = None) -> AnyDecorator:
    """Percentage decorator with a custom printf format (default ``"% d"``)."""
    template = fmt or "% d"

    def render(stats: Statistics) -> str:
        value = _percentage(stats.total & _UINT64_MASK, stats.current & _UINT64_MASK, 100)
        return sprintf(template, PercentageValue(value))

    return AnyDecorator(render, wc)


def percentage(wc: Optional[WC] = None) -> AnyDecorator:
    """Percentage decorator in the ``"% d"`` format."""
    return new_percentage("% d", wc)