"""
Daily bias from price location relative to session equilibrium.

Equilibrium (EQ) is the midpoint of the session high/low. The structure
state comes from which side of EQ the most recent closes sit on; the
direction token comes from the last close:

- within ``neutral_band_pct`` of the range around EQ: neutral
- above EQ: long, below EQ: short
- retraced at least ``into_eq_threshold`` of the way from the recent
  extreme back toward EQ: the into-equilibrium phase (``-into-eq``)

A trending token needs the structure state on its side. Mixed structure
moves it into the into-equilibrium phase; opposing structure makes it
neutral.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..models import (
    Bar,
    Bias,
    BiasToken,
    Direction,
    Phase,
    SessionExtremes,
    StructureSummary,
    TrendState,
)
from ._structure_utils import (
    INTO_EQ_THRESHOLD,
    NEUTRAL_BAND_PCT,
    PRICE_EPSILON,
    RECENT_BARS,
    range_position,
)

logger = logging.getLogger(__name__)

_ALIGNED_STATE = {Direction.LONG: TrendState.BULLISH, Direction.SHORT: TrendState.BEARISH}


def _structure_state(recent: Sequence[Bar], eq: float) -> TrendState:
    above = sum(1 for bar in recent if bar.close > eq + PRICE_EPSILON)
    below = sum(1 for bar in recent if bar.close < eq - PRICE_EPSILON)

    if above > below:
        return TrendState.BULLISH
    if below > above:
        return TrendState.BEARISH
    return TrendState.NEUTRAL


def _align_with_structure(token: BiasToken, state: TrendState) -> BiasToken:
    if state is _ALIGNED_STATE[token.direction]:
        return token
    if state is TrendState.NEUTRAL:
        return BiasToken(token.direction, Phase.INTO_EQUILIBRIUM)
    return BiasToken(Direction.NEUTRAL)


def _retracement(recent: Sequence[Bar], price: float, eq: float, direction: Direction) -> float:
    """Fraction of the distance from the recent extreme to EQ that price has given back."""
    if direction is Direction.LONG:
        extreme = max(bar.high for bar in recent)
        distance = extreme - eq
        given_back = extreme - price
    else:
        extreme = min(bar.low for bar in recent)
        distance = eq - extreme
        given_back = price - extreme

    if distance < PRICE_EPSILON:
        return 0.0
    return given_back / distance


def _build_notes(
    state: TrendState, price: float, extremes: SessionExtremes
) -> tuple[str, ...]:
    eq = extremes.equilibrium
    location = "premium" if price >= eq else "discount"
    position = range_position(price, extremes.low, extremes.high)
    return (
        f"{state.value} structure; price {price:.2f} in {location} relative to EQ {eq:.2f} "
        f"({position:.0%} through session range)",
    )


def calculate_daily_bias(
    bars: Sequence[Bar],
    extremes: Optional[SessionExtremes],
    *,
    symbol: str = "",
    as_of: Optional[datetime] = None,
    neutral_band_pct: float = NEUTRAL_BAND_PCT,
    into_eq_threshold: float = INTO_EQ_THRESHOLD,
    recent_bars: int = RECENT_BARS,
) -> Bias:
    """
    Classify directional bias and structure state.

    Args:
        bars: Chronologically ordered bars; the last close is the current price
        extremes: Session extremes from ``extract_session_extremes``
        symbol: Instrument symbol echoed into the result
        as_of: Analysis time; defaults to the last bar's timestamp
        neutral_band_pct: Half-width of the neutral band around EQ, as a
            fraction of the session range
        into_eq_threshold: Retracement fraction at which the bias enters
            the into-equilibrium phase
        recent_bars: Number of trailing bars used for structure state and
            the recent extreme

    Returns:
        Bias

    Raises:
        ValueError: If ``extremes`` is None, ``bars`` is empty or
            ``recent_bars`` is not positive
    """
    if extremes is None:
        raise ValueError("Session extremes are required; check for missing session data first")
    if len(bars) == 0:
        raise ValueError("Cannot calculate bias on an empty bar series")
    if recent_bars <= 0:
        raise ValueError(f"recent_bars must be positive, got {recent_bars}")

    recent = bars[-recent_bars:]
    price = bars[-1].close
    eq = extremes.equilibrium
    band = neutral_band_pct * extremes.range

    state = _structure_state(recent, eq)

    if extremes.range < PRICE_EPSILON or abs(price - eq) <= band:
        token = BiasToken(Direction.NEUTRAL)
    else:
        direction = Direction.LONG if price > eq else Direction.SHORT
        retraced = _retracement(recent, price, eq, direction)
        phase = Phase.INTO_EQUILIBRIUM if retraced >= into_eq_threshold else Phase.TRENDING
        token = _align_with_structure(BiasToken(direction, phase), state)

    logger.debug(
        f"Bias {token.token} ({state.value}): price={price}, eq={eq}, band={band}"
    )

    return Bias(
        symbol=symbol,
        as_of=as_of if as_of is not None else bars[-1].timestamp,
        token=token,
        structure=StructureSummary(state=state),
        equilibrium=eq,
        notes=_build_notes(state, price, extremes),
    )
