"""
daily_structure.analysis
Analysis layer: swing structure, session extremes, daily bias and day profile.
"""

from .bias import calculate_daily_bias
from .plan import generate_daily_plan
from .profile import classify_day_profile
from .sessions import build_session_map, extract_session_extremes
from .swings import detect_swings, find_last_break, label_swings

__all__ = [
    # Structure
    "detect_swings",
    "label_swings",
    "find_last_break",
    # Sessions
    "extract_session_extremes",
    "build_session_map",
    # Bias & profile
    "calculate_daily_bias",
    "classify_day_profile",
    # Pipeline
    "generate_daily_plan",
]
