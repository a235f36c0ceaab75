"""
Tests for the single-symbol daily plan pipeline.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import BASE_TIME, make_bars
from daily_structure.analysis.plan import generate_daily_plan
from daily_structure.config import AnalysisConfig
from daily_structure.models import ProfileLabel, SwingKind, TimeWindow


def _full_window(bars) -> TimeWindow:
    return TimeWindow(bars[0].timestamp, bars[-1].timestamp)


def test_trend_bars_end_to_end(trend_bars) -> None:
    plan = generate_daily_plan(trend_bars, _full_window(trend_bars), symbol="ES")

    assert plan is not None
    assert plan.bias.bias == "long"
    assert plan.bias.equilibrium == 12
    assert plan.profile.profile is ProfileLabel.P1
    assert plan.profile.targets.primary == "prior day high"
    assert plan.profile.targets.secondary == "prior session high"
    assert plan.profile.symbol == "ES"
    assert plan.profile.as_of == trend_bars[-1].timestamp
    assert plan.swings == ()
    assert plan.last_break is None


def test_window_without_bars_returns_none(trend_bars) -> None:
    window = TimeWindow(
        trend_bars[0].timestamp - timedelta(days=2),
        trend_bars[0].timestamp - timedelta(days=1),
    )

    assert generate_daily_plan(trend_bars, window) is None


def test_empty_bars_raises() -> None:
    with pytest.raises(ValueError, match="empty"):
        generate_daily_plan([], TimeWindow(BASE_TIME, BASE_TIME))


def test_session_windows_feed_session_map(trend_bars) -> None:
    windows = {
        "asia": TimeWindow(trend_bars[0].timestamp, trend_bars[1].timestamp),
        "london": TimeWindow(trend_bars[2].timestamp, trend_bars[3].timestamp),
    }

    plan = generate_daily_plan(trend_bars, _full_window(trend_bars), session_windows=windows)

    assert plan.profile.session_map["asia"].high == 13
    assert plan.profile.session_map["london"].low == 11


def test_config_controls_swing_lookback() -> None:
    bars = make_bars(
        [
            (10, 11, 9, 10.5),
            (10.5, 12, 10, 11.5),
            (11.5, 14, 11, 13),
            (13, 13, 12, 12.5),
            (12.5, 13.5, 12.5, 13),
            (12, 12, 11.5, 11.8),
            (11, 11, 10.5, 10.8),
        ]
    )
    window = _full_window(bars)

    narrow = generate_daily_plan(bars, window, config=AnalysisConfig(swing_lookback=1))
    wide = generate_daily_plan(bars, window, config=AnalysisConfig(swing_lookback=2))

    assert [(s.index, s.kind) for s in narrow.swings] == [(2, SwingKind.HIGH), (4, SwingKind.HIGH)]
    assert [(s.index, s.kind) for s in wide.swings] == [(2, SwingKind.HIGH)]


def test_config_controls_bias_thresholds(trend_bars) -> None:
    config = AnalysisConfig(neutral_band_pct=0.4)

    plan = generate_daily_plan(trend_bars, _full_window(trend_bars), config=config)

    assert plan.bias.bias == "neutral"
    assert plan.profile.profile is ProfileLabel.P3


def test_repeated_runs_are_identical(trend_bars) -> None:
    window = _full_window(trend_bars)

    assert generate_daily_plan(trend_bars, window, symbol="ES") == generate_daily_plan(
        trend_bars, window, symbol="ES"
    )


def test_structure_conflict_gives_balanced_profile() -> None:
    bars = make_bars([(10, 20, 10, 19), (14, 15, 10, 11), (11, 12, 10, 11), (11, 17, 11, 17)])

    plan = generate_daily_plan(bars, _full_window(bars))

    assert plan.bias.bias == "neutral"
    assert plan.profile.profile is ProfileLabel.P3
    assert plan.profile.rationale == (
        "Mixed structure context → expect balanced profile targeting opposing liquidity",
    )


def test_plan_reports_last_break_of_structure() -> None:
    # swing high at 1, swing low at 2, higher swing high at 3
    bars = make_bars(
        [
            (9.5, 10, 9, 9.5),
            (10, 12, 9.5, 11),
            (10.5, 11, 9.2, 10.8),
            (10.8, 13, 10, 12.5),
            (12.5, 12.6, 11.5, 12),
        ]
    )

    plan = generate_daily_plan(bars, _full_window(bars))

    assert [(s.index, s.kind) for s in plan.swings] == [
        (1, SwingKind.HIGH),
        (2, SwingKind.LOW),
        (3, SwingKind.HIGH),
    ]
    assert plan.last_break is not None
    assert plan.last_break.direction == "up"
    assert plan.last_break.swing.index == 3
    assert plan.last_break.reference.index == 2
