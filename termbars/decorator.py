"""Decorator protocol, width configuration and column width synchronisation."""

from __future__ import annotations

import abc
import enum
import itertools
import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Sequence

from wcwidth import wcwidth

DINDENT_RIGHT = 1
"""Pad on the right instead of the left."""
DEXTRA_SPACE = 2
"""Add one extra column of indentation."""
DSYNC_WIDTH = 4
"""Synchronise the column width across bars."""
DSYNC_WIDTH_R = DSYNC_WIDTH | DINDENT_RIGHT
DSYNC_SPACE = DSYNC_WIDTH | DEXTRA_SPACE
DSYNC_SPACE_R = DSYNC_WIDTH | DEXTRA_SPACE | DINDENT_RIGHT

_POLL_INTERVAL = 0.01

DEFAULT_SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class TimeStyle(enum.IntEnum):
    """How durations are rendered."""

    GO = 0
    HHMMSS = 1
    HHMM = 2
    MMSS = 3


@dataclass
class Statistics:
    """Snapshot of a bar's state handed to decorators and fillers."""

    available_width: int = 0
    requested_width: int = 0
    id: int = 0
    total: int = 0
    current: int = 0
    refill: int = 0
    completed: bool = False
    aborted: bool = False


def _string_width(text: str) -> int:
    return sum(max(wcwidth(ch), 0) for ch in text)


def _fill_left(text: str, width: int) -> str:
    pad = width - _string_width(text)
    return " " * pad + text if pad > 0 else text


def _fill_right(text: str, width: int) -> str:
    pad = width - _string_width(text)
    return text + " " * pad if pad > 0 else text


class _WidthChannel:
    """Rendezvous point where a decorator offers its width and gets the column maximum."""

    def __init__(self) -> None:
        self._offers: queue.Queue[int] = queue.Queue()
        self._replies: queue.Queue[int] = queue.Queue()

    def exchange(self, width: int) -> int:
        self._offers.put(width)
        return self._replies.get()

    def receive(self, timeout: float) -> int:
        return self._offers.get(timeout=timeout)

    def reply(self, width: int) -> None:
        self._replies.put(width)


@dataclass
class WC:
    """Width config: ``w`` is the minimum width, ``c`` a bit set of D* flags."""

    w: int = 0
    c: int = 0
    _fill: Optional[Callable[[str, int], str]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _wsync: Optional[_WidthChannel] = field(
        default=None, init=False, repr=False, compare=False
    )

    def init(self) -> "WC":
        """Return an initialised copy; each call gets a fresh sync channel."""
        ready = WC(self.w, self.c)
        ready._fill = _fill_right if self.c & DINDENT_RIGHT else _fill_left
        if self.c & DSYNC_WIDTH:
            ready._wsync = _WidthChannel()
        return ready

    def _channel(self) -> _WidthChannel:
        if self._wsync is None:
            raise RuntimeError("WC is not initialized")
        return self._wsync

    def format(self, text: str) -> tuple[str, int]:
        """Pad ``text`` according to the config; return it with its view width."""
        width = _string_width(text)
        if self.w > width:
            width = self.w
        elif self.c & DEXTRA_SPACE:
            width += 1
        if self.c & DSYNC_WIDTH:
            width = self._channel().exchange(width)
        fill = self._fill or _fill_left
        return fill(text, width), width

    def sync(self) -> tuple[Optional[_WidthChannel], bool]:
        """Return the width sync channel and whether syncing is enabled."""
        enabled = bool(self.c & DSYNC_WIDTH)
        if enabled and self._wsync is None:
            raise RuntimeError("WC is not initialized")
        return self._wsync, enabled


WC_SYNC_WIDTH = WC(c=DSYNC_WIDTH)
WC_SYNC_WIDTH_R = WC(c=DSYNC_WIDTH_R)
WC_SYNC_SPACE = WC(c=DSYNC_SPACE)
WC_SYNC_SPACE_R = WC(c=DSYNC_SPACE_R)


def _init_wc(wc: Optional[WC]) -> WC:
    return (wc if wc is not None else WC()).init()


class Decorator(abc.ABC):
    """Something that renders a piece of text beside a bar."""

    def __init__(self, wc: Optional[WC] = None) -> None:
        self.wc = _init_wc(wc)

    @abc.abstractmethod
    def decor(self, stats: Statistics) -> tuple[str, int]:
        """Return the rendered text and its view width."""

    def format(self, text: str) -> tuple[str, int]:
        """Format ``text`` with this decorator's width config."""
        return self.wc.format(text)

    def sync(self) -> tuple[Optional[_WidthChannel], bool]:
        """Expose the width sync channel of this decorator."""
        return self.wc.sync()


class AnyDecorator(Decorator):
    """Decorator built from a function of :class:`Statistics` to text."""

    def __init__(self, fn: Callable[[Statistics], str], wc: Optional[WC] = None) -> None:
        super().__init__(wc)
        self._fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        return self.format(self._fn(stats))


def any_decorator(fn: Callable[[Statistics], str], wc: Optional[WC] = None) -> AnyDecorator:
    """Turn ``fn`` into a decorator."""
    return AnyDecorator(fn, wc)


def name(text: str, wc: Optional[WC] = None) -> AnyDecorator:
    """Decorator that always shows ``text``."""
    return AnyDecorator(lambda _stats: text, wc)


def spinner(frames: Optional[Sequence[str]] = None, wc: Optional[WC] = None) -> AnyDecorator:
    """Decorator that shows the next frame on every render."""
    cycle = itertools.cycle(tuple(frames) if frames else DEFAULT_SPINNER_FRAMES)
    return AnyDecorator(lambda _stats: next(cycle), wc)


def _max_width_distributor(
    column: Sequence[_WidthChannel], drop: Optional[threading.Event]
) -> None:
    max_width = 0
    for channel in column:
        while True:
            if drop is not None and drop.is_set():
                return
            try:
                width = channel.receive(_POLL_INTERVAL)
            except queue.Empty:
                continue
            break
        max_width = max(max_width, width)
    for channel in column:
        channel.reply(max_width)


def sync_width(
    matrix: Mapping[int, Sequence[_WidthChannel]], drop: Optional[threading.Event]
) -> None:
    """Start one distributor per column that hands every member the widest width."""
    for column in matrix.values():
        threading.Thread(
            target=_max_width_distributor, args=(list(column), drop), daemon=True
        ).start()