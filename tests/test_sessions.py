"""
Tests for session extremes extraction and the session map.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import BAR_INTERVAL, BASE_TIME, make_bars
from daily_structure.analysis.sessions import build_session_map, extract_session_extremes
from daily_structure.models import Bar, TimeWindow


def _window_over(bars: list[Bar]) -> TimeWindow:
    return TimeWindow(start=bars[0].timestamp, end=bars[-1].timestamp)


def test_extremes_over_full_window(trend_bars) -> None:
    extremes = extract_session_extremes(trend_bars, _window_over(trend_bars))

    assert extremes is not None
    assert extremes.high == 15
    assert extremes.high_timestamp == trend_bars[3].timestamp
    assert extremes.low == 9
    assert extremes.low_timestamp == trend_bars[0].timestamp
    assert extremes.open == 10
    assert extremes.close == 14
    assert extremes.bar_count == 4
    assert extremes.equilibrium == 12
    assert extremes.range == 6


def test_window_boundaries_are_inclusive(trend_bars) -> None:
    window = TimeWindow(start=trend_bars[1].timestamp, end=trend_bars[2].timestamp)

    extremes = extract_session_extremes(trend_bars, window)

    assert extremes.bar_count == 2
    assert extremes.high == 14
    assert extremes.low == 10


def test_bars_outside_window_are_ignored(trend_bars) -> None:
    window = TimeWindow(
        start=trend_bars[0].timestamp - timedelta(hours=1),
        end=trend_bars[1].timestamp,
    )

    extremes = extract_session_extremes(trend_bars, window)

    assert extremes.high == 13
    assert extremes.close == 12


def test_no_bars_in_window_returns_none() -> None:
    bars = [
        Bar(timestamp=100, open=10, high=11, low=9, close=10),
        Bar(timestamp=200, open=10, high=12, low=9, close=11),
        Bar(timestamp=300, open=11, high=13, low=10, close=12),
    ]

    assert extract_session_extremes(bars, TimeWindow(start=1000, end=2000)) is None


def test_empty_series_returns_none() -> None:
    assert extract_session_extremes([], TimeWindow(start=BASE_TIME, end=BASE_TIME)) is None


def test_single_instant_window() -> None:
    bars = make_bars([(10, 11, 9, 10), (10, 12, 8, 11)])

    extremes = extract_session_extremes(bars, TimeWindow(bars[1].timestamp, bars[1].timestamp))

    assert extremes.bar_count == 1
    assert (extremes.high, extremes.low) == (12, 8)


def test_ties_resolve_to_earliest_bar() -> None:
    bars = make_bars(
        [
            (10, 15, 9, 11),
            (11, 13, 9, 12),
            (12, 15, 10, 13),
        ]
    )

    extremes = extract_session_extremes(bars, _window_over(bars))

    assert extremes.high_timestamp == bars[0].timestamp
    assert extremes.low_timestamp == bars[0].timestamp


def test_reversed_window_raises() -> None:
    with pytest.raises(ValueError, match="must not be after"):
        TimeWindow(start=BASE_TIME + BAR_INTERVAL, end=BASE_TIME)


def test_repeated_calls_are_identical(trend_bars) -> None:
    window = _window_over(trend_bars)

    assert extract_session_extremes(trend_bars, window) == extract_session_extremes(
        trend_bars, window
    )


def test_session_map_per_named_window(trend_bars) -> None:
    windows = {
        "asia": TimeWindow(trend_bars[0].timestamp, trend_bars[1].timestamp),
        "london": TimeWindow(trend_bars[2].timestamp, trend_bars[3].timestamp),
        "overnight": TimeWindow(BASE_TIME - timedelta(days=1), BASE_TIME - timedelta(hours=12)),
    }

    session_map = build_session_map(trend_bars, windows)

    assert list(session_map) == ["asia", "london", "overnight"]
    assert (session_map["asia"].high, session_map["asia"].low) == (13, 9)
    assert (session_map["london"].high, session_map["london"].low) == (15, 11)
    assert session_map["overnight"] is None


def test_session_map_empty_windows(trend_bars) -> None:
    assert build_session_map(trend_bars, {}) == {}
