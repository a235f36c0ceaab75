"""
daily_structure
Deterministic market-structure analytics: swings, session extremes,
daily bias and day profile.
"""

from .analysis import (
    build_session_map,
    calculate_daily_bias,
    classify_day_profile,
    detect_swings,
    extract_session_extremes,
    find_last_break,
    generate_daily_plan,
    label_swings,
)
from .models import (
    Bar,
    Bias,
    BiasToken,
    DailyPlan,
    DayProfileResult,
    Direction,
    Phase,
    ProfileLabel,
    SessionExtremes,
    SwingKind,
    SwingPoint,
    Targets,
    TimeWindow,
    TrendState,
)

__all__ = [
    "Bar",
    "TimeWindow",
    "SwingKind",
    "SwingPoint",
    "SessionExtremes",
    "Direction",
    "Phase",
    "TrendState",
    "BiasToken",
    "Bias",
    "ProfileLabel",
    "Targets",
    "DayProfileResult",
    "DailyPlan",
    "detect_swings",
    "label_swings",
    "find_last_break",
    "extract_session_extremes",
    "build_session_map",
    "calculate_daily_bias",
    "classify_day_profile",
    "generate_daily_plan",
]
