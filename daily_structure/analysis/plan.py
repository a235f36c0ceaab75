"""
Single-symbol daily plan: session extremes -> bias -> day profile, plus swings
and the last break of structure.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..config import AnalysisConfig
from ..models import Bar, DailyPlan, TimeWindow
from .bias import calculate_daily_bias
from .profile import classify_day_profile
from .sessions import build_session_map, extract_session_extremes
from .swings import detect_swings, find_last_break

logger = logging.getLogger(__name__)


def generate_daily_plan(
    bars: Sequence[Bar],
    window: TimeWindow,
    *,
    symbol: str = "",
    session_windows: Optional[Mapping[str, TimeWindow]] = None,
    config: Optional[AnalysisConfig] = None,
) -> Optional[DailyPlan]:
    """
    Run the full analysis for one symbol.

    Args:
        bars: Chronologically ordered, validated bars
        window: Session window used for extremes and bias
        symbol: Instrument symbol
        session_windows: Named windows for the session map (e.g. asia, london)
        config: Analysis parameters; defaults to ``AnalysisConfig()``

    Returns:
        DailyPlan, or None when no bar falls inside ``window``

    Raises:
        ValueError: If ``bars`` is empty
    """
    if len(bars) == 0:
        raise ValueError("Cannot build a daily plan from an empty bar series")

    config = config or AnalysisConfig()

    extremes = extract_session_extremes(bars, window)
    if extremes is None:
        logger.info(f"{symbol or '<unnamed>'}: no bars in session window, skipping plan")
        return None

    bias = calculate_daily_bias(
        bars,
        extremes,
        symbol=symbol,
        neutral_band_pct=config.neutral_band_pct,
        into_eq_threshold=config.into_eq_threshold,
        recent_bars=config.recent_bars,
    )
    session_map = build_session_map(bars, session_windows or {})
    profile = classify_day_profile(bias, session_map, last_price=bars[-1].close)
    swings = detect_swings(bars, config.swing_lookback)
    last_break = find_last_break(swings)

    logger.info(
        f"{symbol or '<unnamed>'}: bias={bias.bias}, profile={profile.profile.value}, "
        f"swings={len(swings)}, last_break={last_break.direction if last_break else None}"
    )

    return DailyPlan(bias=bias, profile=profile, swings=tuple(swings), last_break=last_break)
