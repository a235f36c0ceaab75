"""
Day profile classification.

Profiles:
    P1 - trend continuation: price aligned with the bias direction
    P2 - rotation: price pulling back into equilibrium before continuation
    P3 - balance: no directional bias
"""

from __future__ import annotations

import logging
from typing import Optional

from ..models import (
    Bias,
    DayProfileResult,
    Direction,
    Phase,
    ProfileLabel,
    SessionMap,
    Targets,
)

logger = logging.getLogger(__name__)

_TARGETS: dict[tuple[ProfileLabel, Direction], Targets] = {
    (ProfileLabel.P1, Direction.LONG): Targets("prior day high", "prior session high"),
    (ProfileLabel.P1, Direction.SHORT): Targets("prior day low", "prior session low"),
    (ProfileLabel.P2, Direction.LONG): Targets("current EQ retest", "prior session low"),
    (ProfileLabel.P2, Direction.SHORT): Targets("current EQ retest", "prior session high"),
}
_FALLBACK_TARGETS = Targets("prior day equilibrium", "opposite session extreme")


def classify_profile_label(bias: Bias) -> ProfileLabel:
    if bias.token.direction is Direction.NEUTRAL:
        return ProfileLabel.P3
    if bias.token.phase is Phase.INTO_EQUILIBRIUM:
        return ProfileLabel.P2
    return ProfileLabel.P1


def select_targets(label: ProfileLabel, direction: Direction) -> Targets:
    return _TARGETS.get((label, direction), _FALLBACK_TARGETS)


def build_rationale(label: ProfileLabel, bias: Bias) -> tuple[str, ...]:
    state = bias.structure.state.value

    if label is ProfileLabel.P1:
        return (f"{state} structure with price aligned to trend → expect directional expansion",)
    if label is ProfileLabel.P2:
        return (
            f"{state} structure but price away from EQ → anticipate rotation to equilibrium "
            "then continuation",
        )
    return ("Mixed structure context → expect balanced profile targeting opposing liquidity",)


def classify_day_profile(
    bias: Bias, session_map: SessionMap, last_price: Optional[float] = None
) -> DayProfileResult:
    """
    Assign a day profile, targets and rationale from a daily bias.

    Args:
        bias: Result of ``calculate_daily_bias`` (or ``Bias.from_token``)
        session_map: Named session extremes, passed through unchanged
        last_price: Latest price; accepted for interface compatibility and
            not used by the label rule

    Returns:
        DayProfileResult echoing the bias symbol and as-of time

    Raises:
        ValueError: If ``bias`` is missing or not a Bias
    """
    if bias is None:
        raise ValueError("A bias is required to classify the day profile")
    if not isinstance(bias, Bias):
        raise ValueError(f"Expected a Bias, got {type(bias).__name__}")

    label = classify_profile_label(bias)
    targets = select_targets(label, bias.token.direction)

    logger.debug(f"{bias.symbol or '<unnamed>'}: bias {bias.bias} -> profile {label.value}")

    return DayProfileResult(
        symbol=bias.symbol,
        as_of=bias.as_of,
        profile=label,
        session_map=session_map,
        targets=targets,
        rationale=build_rationale(label, bias),
    )
