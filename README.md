# termbars

Building blocks for terminal progress bars: decorators that render
counters, percentages, speeds, ETAs and elapsed time; byte-size units
with printf-style formatting; moving averages; a priority queue for
ordering bars; and width synchronisation so that columns line up across
several bars.

## Installation

```
pip install termbars
```

To run the test suite, install the test extra and run pytest:

```
pip install "termbars[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `termbars.decorator` | `Statistics`, `WC`, `TimeStyle`, `Decorator`, `AnyDecorator`, `any_decorator`, `name`, `spinner`, `sync_width`, the `D*` flags and `WC_SYNC_*` presets |
| `termbars.counters` | `counters`, `total`, `current`, `inverted_current` (each with `_no_unit`, `_kibi_byte`, `_kilo_byte` variants), `percentage`, `new_percentage` |
| `termbars.wrappers` | `meta`, `on_abort`, `on_abort_meta`, `on_complete`, `on_complete_meta`, `on_complete_or_on_abort`, `on_complete_meta_or_on_abort_meta`, `on_condition`, `on_predicate`, `conditional`, `predicative` |
| `termbars.speed` | `average_speed`, `new_average_speed`, `ewma_speed`, `moving_average_speed`, `choose_speed_producer` |
| `termbars.eta` | `average_eta`, `new_average_eta`, `ewma_eta`, `ewma_normalized_eta`, `moving_average_eta`, `elapsed`, `new_elapsed`, `max_tolerate_time_normalizer`, `fixed_interval_time_normalizer`, `choose_time_producer` |
| `termbars.averages` | `SimpleEWMA`, `VariableEWMA`, `MedianWindow`, `ThreadSafeMovingAverage`, `new_moving_average`, `new_median`, `new_thread_safe_moving_average` |
| `termbars.units` | `SizeB1024`, `SizeB1000`, `PercentageValue`, `fmt_as_speed`, `sprintf` |
| `termbars.percent` | `percentage`, `percentage_round`, `check_requested_width` |
| `termbars.priority_queue` | `PriorityQueue` |

## Statistics and decorators

Every decorator takes a `Statistics` snapshot of a bar and returns the
rendered text together with its visual width.

```python
from termbars.decorator import Statistics, WC, DINDENT_RIGHT, name
from termbars.counters import new_percentage, counters_kibi_byte

stats = Statistics(total=100, current=10)

name("Download", WC(w=10)).decor(stats)                   # ("  Download", 10)
name("Download", WC(w=10, c=DINDENT_RIGHT)).decor(stats)  # ("Download  ", 10)
new_percentage("%.2f", None).decor(stats)                 # ("10.00%", 6)
counters_kibi_byte("", None).decor(Statistics(total=2048, current=1024))
# ("1 KiB / 2 KiB", 13)
```

`WC` sets the width: `w` is a minimum width and `c` a bit set of
`DINDENT_RIGHT` (pad on the right), `DEXTRA_SPACE` (one extra column) and
`DSYNC_WIDTH` (share the width with other bars). `WC.init()` returns a
ready copy; decorators call it for you. Widths are measured in terminal
columns, so wide characters count as two.

`any_decorator(fn, wc)` turns any function of `Statistics` to text into a
decorator; `spinner(frames, wc)` shows the next frame on every call.

## Units and printf formatting

`sprintf` is printf-style formatting that asks arguments with a
`format_verb` method to format themselves. `SizeB1024` and `SizeB1000`
scale a byte count to the right unit; `PercentageValue` appends a percent
sign; `fmt_as_speed` appends `/s`. The space flag puts a space before the
unit.

```python
from termbars.units import SizeB1024, SizeB1000, PercentageValue, sprintf, fmt_as_speed

sprintf("%d", SizeB1024(12345678))              # "12MiB"
sprintf("% .2f", SizeB1000(12345678))           # "12.35 MB"
sprintf("% d", PercentageValue(10))             # "10 %"
sprintf("%.1f", fmt_as_speed(SizeB1024(2048)))  # "2.0KiB/s"
```

## Wrappers

`termbars.wrappers` changes what a decorator shows once the bar completes
or is aborted, or applies a function (for example, adding colour codes)
to its text while keeping the reported width. Every wrapper has
`unwrap()` to get the wrapped decorator back.

```python
from termbars.decorator import Statistics, name
from termbars.wrappers import on_complete, meta

done = on_complete(name("working", None), "done")
done.decor(Statistics(completed=True))   # ("done", 4)

bold = meta(name("x", None), lambda s: f"\x1b[1m{s}\x1b[0m")
```

## Speed, ETA and elapsed time

Start times are readings of `time.monotonic()`; durations are
`datetime.timedelta` values or numbers of seconds.

- `average_speed` / `new_average_speed` and `average_eta` /
  `new_average_eta` work from the bar's current count and the time since
  start; `average_adjust(start)` moves the start for resumed work.
- `ewma_speed`, `moving_average_speed`, `ewma_eta` and
  `moving_average_eta` must be fed with `ewma_update(n, duration)` for
  each chunk of work. `moving_average_eta` uses a median of the last three
  samples if no average is given.
- `elapsed` / `new_elapsed` show the time since start and freeze once the
  bar completes or aborts.
- `choose_time_producer(style)` renders a duration in a `TimeStyle`:

```python
from datetime import timedelta
from termbars.decorator import TimeStyle
from termbars.eta import choose_time_producer

choose_time_producer(TimeStyle.HHMMSS)(timedelta(seconds=3725))  # "01:02:05"
choose_time_producer(TimeStyle.GO)(timedelta(seconds=3725))      # "1h2m5s"
```

`max_tolerate_time_normalizer` and `fixed_interval_time_normalizer`
return functions that smooth the remaining time shown by the ETA
decorators.

## Width synchronisation

Decorators made with a sync flag (for example `WC_SYNC_WIDTH`) hand
their width to a shared channel in `format` and wait for the column
maximum. `sync_width(matrix, drop)` takes a mapping of column index to
the channels from each decorator's `sync()` and starts one thread per
column that sends every member the widest width; setting the optional
`threading.Event` `drop` stops the threads early.

```python
import threading
from termbars.decorator import Statistics, WC_SYNC_WIDTH, sync_width
from termbars.counters import percentage

a, b = percentage(WC_SYNC_WIDTH), percentage(WC_SYNC_WIDTH)
sync_width({0: [a.sync()[0], b.sync()[0]]}, None)
# a and b must be rendered concurrently; both come out 4 columns wide:
# a.decor(Statistics(total=100, current=9))   -> (" 9 %", 4)
# b.decor(Statistics(total=100, current=10))  -> ("10 %", 4)
```

## Helpers

`termbars.percent` computes the share of a width that a count is of a
total (`percentage`, `percentage_round`) and clamps a requested width to
the available one (`check_requested_width`). `PriorityQueue` is a heap of
items with `priority` and `index` attributes: the highest priority pops
first, and `fix(index)` restores order after a priority changes.

## What this package does not do

There is no progress container and no bar object here: nothing draws
bars to a terminal, refreshes them, queries the terminal size, or wraps
readers and writers to count bytes. The package supplies the pieces such
a renderer would use: decorators, formatting, averages, ordering and
width synchronisation.