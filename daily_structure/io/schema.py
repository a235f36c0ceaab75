"""
io/schema.py
K 线数据的列约定与校验。
"""

from __future__ import annotations

import math
from typing import Sequence

from ..models import Bar

COL_DATETIME = "datetime"
COL_OPEN = "open"
COL_HIGH = "high"
COL_LOW = "low"
COL_CLOSE = "close"
COL_VOLUME = "volume"

REQUIRED_COLUMNS = [COL_DATETIME, COL_OPEN, COL_HIGH, COL_LOW, COL_CLOSE]

PRICE_EPSILON = 1e-9


def validate_bar(bar: Bar, index: int) -> None:
    """校验单根 K 线的 OHLC 关系，失败时抛出 ValueError。"""
    for name in (COL_OPEN, COL_HIGH, COL_LOW, COL_CLOSE):
        value = getattr(bar, name)
        if not math.isfinite(value):
            raise ValueError(f"Invalid {name} at bar[{index}]: {value}")

    if bar.high < bar.low - PRICE_EPSILON:
        raise ValueError(f"Invalid bar[{index}]: high ({bar.high}) < low ({bar.low})")

    if bar.high < max(bar.open, bar.close) - PRICE_EPSILON:
        raise ValueError(
            f"Invalid bar[{index}]: high ({bar.high}) must be >= open ({bar.open}) "
            f"and close ({bar.close})"
        )

    if bar.low > min(bar.open, bar.close) + PRICE_EPSILON:
        raise ValueError(
            f"Invalid bar[{index}]: low ({bar.low}) must be <= open ({bar.open}) "
            f"and close ({bar.close})"
        )

    if not math.isfinite(bar.volume) or bar.volume < 0:
        raise ValueError(f"Invalid volume at bar[{index}]: {bar.volume}")


def validate_bars(bars: Sequence[Bar]) -> None:
    """
    校验整个序列: 每根 K 线的 OHLC 关系，以及时间戳严格递增。

    Raises:
        ValueError: 第一处不合法的位置
    """
    for i, bar in enumerate(bars):
        validate_bar(bar, i)
        if i > 0 and bar.timestamp <= bars[i - 1].timestamp:
            raise ValueError(
                f"Bars must be in chronological order: bar[{i}].timestamp ({bar.timestamp}) "
                f"<= bar[{i - 1}].timestamp ({bars[i - 1].timestamp})"
            )
