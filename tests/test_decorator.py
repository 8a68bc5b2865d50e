import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from termbars.decorator import (
    DEFAULT_SPINNER_FRAMES,
    DEXTRA_SPACE,
    DINDENT_RIGHT,
    WC,
    WC_SYNC_SPACE,
    WC_SYNC_WIDTH,
    WC_SYNC_WIDTH_R,
    AnyDecorator,
    Statistics,
    TimeStyle,
    any_decorator,
    name,
    spinner,
    sync_width,
)
from termbars.percent import percentage
from termbars.units import PercentageValue, sprintf


def _percentage_decorator(wc):
    return any_decorator(
        lambda s: sprintf("% d", PercentageValue(percentage(s.total, s.current, 100))),
        wc,
    )


def _run_column(steps):
    decorators = [d for _, d, _ in steps]
    column = [ch for ch, ok in (d.sync() for d in decorators) if ok]
    sync_width({0: column}, None)
    with ThreadPoolExecutor(len(steps)) as pool:
        futures = [pool.submit(d.decor, st) for st, d, _ in steps]
        return [f.result(timeout=5)[0] for f in futures]


@pytest.mark.parametrize(
    "decorator, want",
    [
        (name("Test"), "Test"),
        (name("Test", WC(w=len("Test"))), "Test"),
        (name("Test", WC(w=10)), "      Test"),
        (name("Test", WC(w=10, c=DINDENT_RIGHT)), "Test      "),
    ],
)
def test_name_decorator(decorator, want):
    got, _ = decorator.decor(Statistics())
    assert got == want


def _cases(wc, wants):
    currents = [(8, 9), (9, 10), (9, 100)]
    return [
        [
            (Statistics(total=100, current=cur), _percentage_decorator(wc), want)
            for cur, want in zip(pair, column_wants)
        ]
        for pair, column_wants in zip(currents, wants)
    ]


@pytest.mark.parametrize(
    "wc, wants",
    [
        (WC_SYNC_WIDTH, [("8 %", "9 %"), (" 9 %", "10 %"), ("  9 %", "100 %")]),
        (WC_SYNC_WIDTH_R, [("8 %", "9 %"), ("9 % ", "10 %"), ("9 %  ", "100 %")]),
        (WC_SYNC_SPACE, [(" 8 %", " 9 %"), ("  9 %", " 10 %"), ("   9 %", " 100 %")]),
    ],
)
def test_percentage_width_sync(wc, wants):
    for column in _cases(wc, wants):
        results = _run_column(column)
        assert results == [want for _, _, want in column]


def test_synced_widths_are_equal():
    decorators = [name(text, WC_SYNC_WIDTH) for text in ("a", "abc", "abcdef")]
    column = [d.sync()[0] for d in decorators]
    sync_width({0: column}, threading.Event())
    with ThreadPoolExecutor(3) as pool:
        results = list(pool.map(lambda d: d.decor(Statistics()), decorators))
    assert {width for _, width in results} == {6}
    assert [text for text, _ in results] == ["     a", "   abc", "abcdef"]


def test_extra_space_adds_one_column():
    text, width = name("Test", WC(c=DEXTRA_SPACE)).decor(Statistics())
    assert (text, width) == (" Test", len("Test") + 1)


def test_min_width_wins_over_extra_space():
    text, width = name("Test", WC(w=6, c=DEXTRA_SPACE)).decor(Statistics())
    assert width == 6
    assert text == "Test".rjust(6)


def test_wide_characters_count_double():
    _, width = name("世界").decor(Statistics())
    assert width == 4


def test_uninitialised_sync_wc_raises():
    with pytest.raises(RuntimeError):
        WC_SYNC_WIDTH.sync()


def test_init_leaves_global_untouched_and_gives_new_channels():
    first = WC_SYNC_WIDTH.init()
    second = WC_SYNC_WIDTH.init()
    assert first.sync()[1] is True
    assert first.sync()[0] is not second.sync()[0]
    with pytest.raises(RuntimeError):
        WC_SYNC_WIDTH.sync()


def test_plain_wc_sync_disabled():
    channel, enabled = WC().init().sync()
    assert enabled is False
    assert channel is None


def test_any_decorator_receives_statistics():
    d = any_decorator(lambda s: str(s.current))
    assert isinstance(d, AnyDecorator)
    assert d.decor(Statistics(current=42)) == ("42", 2)


def test_default_spinner_cycles():
    d = spinner()
    frames = [d.decor(Statistics())[0] for _ in range(len(DEFAULT_SPINNER_FRAMES) + 1)]
    assert frames[0] == "⠋"
    assert frames[:-1] == list(DEFAULT_SPINNER_FRAMES)
    assert frames[-1] == frames[0]


def test_custom_spinner_frames():
    d = spinner(["a", "b"])
    assert [d.decor(Statistics())[0] for _ in range(5)] == ["a", "b", "a", "b", "a"]


def test_empty_frames_fall_back_to_default():
    assert spinner([]).decor(Statistics())[0] == DEFAULT_SPINNER_FRAMES[0]


def test_time_style_lookup_by_value():
    styles = [TimeStyle(i) for i in range(4)]
    assert styles == list(TimeStyle)
    with pytest.raises(ValueError):
        TimeStyle(4)