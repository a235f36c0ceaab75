"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Sequence

import pytest

from daily_structure.models import Bar

BASE_TIME = datetime(2024, 3, 4, 14, 30)
BAR_INTERVAL = timedelta(minutes=10)

BarFactory = Callable[[Sequence[tuple[float, float, float, float]]], list[Bar]]


def make_bars(rows: Sequence[tuple[float, float, float, float]]) -> list[Bar]:
    """Build 10-minute bars from (open, high, low, close) rows."""
    return [
        Bar(timestamp=BASE_TIME + i * BAR_INTERVAL, open=o, high=h, low=l, close=c, volume=100.0)
        for i, (o, h, l, c) in enumerate(rows)
    ]


@pytest.fixture
def bar_factory() -> BarFactory:
    return make_bars


@pytest.fixture
def trend_bars() -> list[Bar]:
    """Four rising bars: session high 15, low 9, last close 14."""
    return make_bars(
        [
            (10, 12, 9, 11),
            (11, 13, 10, 12),
            (12, 14, 11, 13),
            (13, 15, 12, 14),
        ]
    )
