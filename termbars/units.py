"""Value types with unit-aware printf formatting, and a printf helper."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

_VERB_RE = re.compile(r"%([ +\-#0]*)(\d+)?(?:\.(\d*))?([a-zA-Z%])")


def _resolve(verb: str, precision: int | None) -> tuple[str, int]:
    if verb in "feE":
        prec = 6 if precision is None else precision
    elif verb in "bgGxX":
        prec = -1 if precision is None else precision
    else:
        return "f", 0
    return verb, prec


def _format_float(value: float, verb: str, prec: int) -> str:
    if verb == "f":
        if prec < 0:
            text = repr(value)
            if "e" in text:
                text = f"{value:f}".rstrip("0").rstrip(".")
            return text[:-2] if text.endswith(".0") else text
        return f"{value:.{prec}f}"
    if verb in "eE":
        spec = f".{prec}{verb}" if prec >= 0 else verb
        return format(value, spec)
    if verb in "gG":
        if prec < 0:
            text = repr(value)
            if text.endswith(".0"):
                text = text[:-2]
            return text.upper() if verb == "G" else text
        return format(value, f".{max(prec, 1)}{verb}")
    if verb in "xX":
        text = value.hex()
        return text.upper() if verb == "X" else text
    if value == 0:
        return "0p-1074"
    mantissa, exponent = math.frexp(value)
    return f"{int(mantissa * (1 << 53))}p{exponent - 53:+d}"


def _format_size(
    value: int,
    units: tuple[tuple[int, str], ...],
    verb: str,
    precision: int | None,
    space: bool,
) -> str:
    verb, prec = _resolve(verb, precision)
    factor, marker = units[0]
    for limit, unit_name in units[1:]:
        if value < limit:
            break
        factor, marker = limit, unit_name
    text = _format_float(float(value) / float(factor), verb, prec)
    return text + (" " if space else "") + marker


class SizeB1024(int):
    """Byte count scaled by powers of 1024 (b, KiB, MiB, GiB, TiB)."""

    _units = ((1, "b"), (1 << 10, "KiB"), (1 << 20, "MiB"), (1 << 30, "GiB"), (1 << 40, "TiB"))

    def format_verb(self, verb: str, precision: int | None = None, space: bool = False) -> str:
        """Format the scaled value followed by its size marker."""
        return _format_size(self, self._units, verb, precision, space)


class SizeB1000(int):
    """Byte count scaled by powers of 1000 (b, KB, MB, GB, TB)."""

    _units = ((1, "b"), (10**3, "KB"), (10**6, "MB"), (10**9, "GB"), (10**12, "TB"))

    def format_verb(self, verb: str, precision: int | None = None, space: bool = False) -> str:
        """Format the scaled value followed by its size marker."""
        return _format_size(self, self._units, verb, precision, space)


class PercentageValue(float):
    """Percentage that formats with a trailing percent sign."""

    def format_verb(self, verb: str, precision: int | None = None, space: bool = False) -> str:
        verb, prec = _resolve(verb, precision)
        text = _format_float(float(self), verb, prec)
        return text + (" %" if space else "%")


@dataclass(frozen=True)
class SpeedFormat:
    """Wraps a formattable value and appends ``/s``."""

    value: Any

    def format_verb(self, verb: str, precision: int | None = None, space: bool = False) -> str:
        return self.value.format_verb(verb, precision, space) + "/s"


def fmt_as_speed(value) -> SpeedFormat:
    """Return ``value`` wrapped so that it formats as a rate per second."""
    return SpeedFormat(value)


def sprintf(template: str, *args) -> str:
    """printf-style formatting that honours ``format_verb`` on arguments."""
    remaining = iter(args)

    def replace(match: re.Match) -> str:
        flags, width, prec_text, verb = match.groups()
        if verb == "%":
            return "%"
        try:
            arg = next(remaining)
        except StopIteration:
            return f"%!{verb}(MISSING)"
        precision = None if prec_text is None else int(prec_text or 0)
        if hasattr(arg, "format_verb"):
            return arg.format_verb(verb, precision, " " in flags)
        conv = {"v": "s", "i": "d"}.get(verb, verb)
        if conv == "s":
            arg = str(arg)
        spec = "%" + flags + (width or "")
        if prec_text is not None:
            spec += "." + str(precision)
        return (spec + conv) % (arg,)

    return _VERB_RE.sub(replace, template)