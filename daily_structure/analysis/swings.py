"""
Swing point detection and classification.

A swing high is a bar whose high strictly exceeds every other high within
``lookback`` bars on either side; swing lows mirror this on the lows.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt
from numpy.lib.stride_tricks import sliding_window_view

from ..models import Bar, BreakOfStructure, LabelledSwing, SwingKind, SwingPoint
from ._structure_utils import (
    DEFAULT_SWING_LOOKBACK,
    PRICE_TOLERANCE_PCT,
    classify_swing_high,
    classify_swing_low,
)

logger = logging.getLogger(__name__)


def _strict_extrema(
    values: npt.NDArray[np.float64], lookback: int, find_max: bool
) -> npt.NDArray[np.int64]:
    """Indices whose value strictly dominates the rest of its centred window."""
    windows = sliding_window_view(values, 2 * lookback + 1)
    centre = windows[:, lookback]
    neighbours = np.delete(windows, lookback, axis=1)

    if find_max:
        mask = centre > neighbours.max(axis=1)
    else:
        mask = centre < neighbours.min(axis=1)

    return np.flatnonzero(mask) + lookback


def detect_swings(bars: Sequence[Bar], lookback: int = DEFAULT_SWING_LOOKBACK) -> list[SwingPoint]:
    """
    Detect swing highs and lows.

    Bars within ``lookback`` of either end never qualify, and equal
    extremes inside a window disqualify the candidate.

    Args:
        bars: Chronologically ordered bars
        lookback: Bars required on each side of a candidate

    Returns:
        Swing points ordered by index; for an outside bar that is both a
        swing high and a swing low, the high comes first.

    Raises:
        ValueError: If ``bars`` is empty or ``lookback`` is not positive
    """
    if isinstance(lookback, bool) or not isinstance(lookback, (int, np.integer)) or lookback <= 0:
        raise ValueError(f"lookback must be a positive integer, got {lookback!r}")
    if len(bars) == 0:
        raise ValueError("Cannot detect swings on an empty bar series")

    if len(bars) < 2 * lookback + 1:
        logger.debug(f"Series of {len(bars)} bars too short for lookback={lookback}")
        return []

    highs = np.array([bar.high for bar in bars], dtype=float)
    lows = np.array([bar.low for bar in bars], dtype=float)

    high_indices = _strict_extrema(highs, lookback, find_max=True)
    low_indices = _strict_extrema(lows, lookback, find_max=False)

    events = [(int(i), 0, SwingKind.HIGH) for i in high_indices] + [
        (int(i), 1, SwingKind.LOW) for i in low_indices
    ]
    events.sort()

    swings = []
    for idx, _, kind in events:
        bar = bars[idx]
        price = bar.high if kind is SwingKind.HIGH else bar.low
        swings.append(SwingPoint(index=idx, timestamp=bar.timestamp, price=price, kind=kind))

    logger.debug(
        f"Detected {len(high_indices)} swing highs and {len(low_indices)} swing lows "
        f"(lookback={lookback})"
    )
    return swings


def label_swings(
    swings: Sequence[SwingPoint], tolerance_pct: float = PRICE_TOLERANCE_PCT
) -> list[LabelledSwing]:
    """
    Label swings as HH, LH, DT (highs) or HL, LL, DB (lows).

    Each swing is compared with the previous swing of the same kind. Prices
    within ``tolerance_pct`` of it count as double tops/bottoms.
    """
    last_h_price = -np.inf
    last_l_price = np.inf

    labelled = []
    for swing in swings:
        if swing.kind is SwingKind.HIGH:
            label = classify_swing_high(swing.price, last_h_price, tolerance_pct)
            last_h_price = swing.price
        else:
            label = classify_swing_low(swing.price, last_l_price, tolerance_pct)
            last_l_price = swing.price
        labelled.append(LabelledSwing(swing=swing, label=label))

    return labelled


def find_last_break(swings: Sequence[SwingPoint]) -> Optional[BreakOfStructure]:
    """
    Find the most recent break of structure.

    A high above the previous high is an upside break once a low exists to
    anchor the range; a low below the previous low is a downside break once
    a high exists.
    """
    last_high: Optional[SwingPoint] = None
    last_low: Optional[SwingPoint] = None
    last_break: Optional[BreakOfStructure] = None

    for swing in swings:
        if swing.kind is SwingKind.HIGH:
            if last_high is not None and last_low is not None and swing.price > last_high.price:
                last_break = BreakOfStructure(direction="up", swing=swing, reference=last_low)
            last_high = swing
        else:
            if last_low is not None and last_high is not None and swing.price < last_low.price:
                last_break = BreakOfStructure(direction="down", swing=swing, reference=last_high)
            last_low = swing

    return last_break
