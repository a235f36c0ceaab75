"""Utility functions and constants for structure analysis."""

from __future__ import annotations

from typing import Literal, Optional

import numpy as np

from ..models import SwingLabel

DEFAULT_SWING_LOOKBACK = 1
PRICE_TOLERANCE_PCT = 0.001
PRICE_EPSILON = 1e-9

# Bias thresholds, as fractions of the session range
NEUTRAL_BAND_PCT = 0.1
INTO_EQ_THRESHOLD = 0.5
RECENT_BARS = 3


def compare_prices(
    current_price: float, last_price: float, tolerance_pct: float
) -> Optional[Literal["DOUBLE", "HIGHER", "LOWER"]]:
    """Compare two prices and return classification: 'DOUBLE', 'HIGHER', or 'LOWER'."""
    if last_price <= 0 or not np.isfinite(last_price):
        return None

    price_diff_pct = abs(current_price - last_price) / last_price

    if price_diff_pct <= tolerance_pct:
        return "DOUBLE"
    elif current_price > last_price:
        return "HIGHER"
    else:
        return "LOWER"


def classify_swing_high(price: float, last_h_price: float, tolerance_pct: float) -> SwingLabel:
    """Classify a swing high as HH, LH, or DT."""
    comparison = compare_prices(price, last_h_price, tolerance_pct)

    if comparison is None:
        return SwingLabel.HH
    elif comparison == "DOUBLE":
        return SwingLabel.DT
    elif comparison == "HIGHER":
        return SwingLabel.HH
    else:
        return SwingLabel.LH


def classify_swing_low(price: float, last_l_price: float, tolerance_pct: float) -> SwingLabel:
    """Classify a swing low as HL, LL, or DB."""
    comparison = compare_prices(price, last_l_price, tolerance_pct)

    if comparison is None:
        return SwingLabel.LL
    elif comparison == "DOUBLE":
        return SwingLabel.DB
    elif comparison == "LOWER":
        return SwingLabel.LL
    else:
        return SwingLabel.HL


def range_position(price: float, low: float, high: float) -> float:
    """Position of ``price`` within [low, high], clamped to [0, 1]. Zero range gives 0.5."""
    span = high - low
    if span < PRICE_EPSILON:
        return 0.5
    return float(np.clip((price - low) / span, 0.0, 1.0))
