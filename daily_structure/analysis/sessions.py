"""
Session extremes within caller-supplied time windows.

Window boundaries are inclusive on both ends. Resolving session windows
from a calendar or timezone is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

import numpy as np

from ..models import Bar, SessionExtremes, TimeWindow

logger = logging.getLogger(__name__)


def extract_session_extremes(bars: Sequence[Bar], window: TimeWindow) -> Optional[SessionExtremes]:
    """
    Find the session high and low among bars inside ``window``.

    Args:
        bars: Chronologically ordered bars
        window: Session window, inclusive on both ends

    Returns:
        SessionExtremes, or None when no bar falls inside the window. When
        several bars share the extreme, the earliest one provides the
        timestamp.
    """
    session_bars = [bar for bar in bars if window.contains(bar.timestamp)]

    if not session_bars:
        logger.debug(f"No bars inside session window {window.start} - {window.end}")
        return None

    highs = np.array([bar.high for bar in session_bars], dtype=float)
    lows = np.array([bar.low for bar in session_bars], dtype=float)

    # argmax/argmin return the first occurrence
    high_bar = session_bars[int(np.argmax(highs))]
    low_bar = session_bars[int(np.argmin(lows))]

    return SessionExtremes(
        high=high_bar.high,
        high_timestamp=high_bar.timestamp,
        low=low_bar.low,
        low_timestamp=low_bar.timestamp,
        open=session_bars[0].open,
        close=session_bars[-1].close,
        bar_count=len(session_bars),
    )


def build_session_map(
    bars: Sequence[Bar], windows: Mapping[str, TimeWindow]
) -> dict[str, Optional[SessionExtremes]]:
    """Extract extremes for each named session window, keeping the mapping's order."""
    session_map = {name: extract_session_extremes(bars, window) for name, window in windows.items()}

    missing = [name for name, extremes in session_map.items() if extremes is None]
    if missing:
        logger.info(f"No session data for: {', '.join(missing)}")

    return session_map
