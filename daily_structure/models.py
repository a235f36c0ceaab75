"""
Value records shared by every analysis stage.

All records are frozen: each stage creates them and the next stage only
reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional


@dataclass(frozen=True)
class Bar:
    """One OHLCV observation. OHLC invariants are checked by ``io.validate_bars``."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class TimeWindow:
    """Closed time interval; both ``start`` and ``end`` are inclusive."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"TimeWindow start ({self.start}) must not be after end ({self.end})")

    def contains(self, timestamp: datetime) -> bool:
        return self.start <= timestamp <= self.end


class SwingKind(str, Enum):
    HIGH = "high"
    LOW = "low"


class SwingLabel(str, Enum):
    """Swing classification relative to the previous swing of the same kind."""

    HH = "HH"
    LH = "LH"
    DT = "DT"
    HL = "HL"
    LL = "LL"
    DB = "DB"


@dataclass(frozen=True)
class SwingPoint:
    index: int
    timestamp: datetime
    price: float
    kind: SwingKind


@dataclass(frozen=True)
class LabelledSwing:
    swing: SwingPoint
    label: SwingLabel


@dataclass(frozen=True)
class BreakOfStructure:
    """A swing that took out the previous swing of its kind.

    ``reference`` is the most recent opposite swing, i.e. the other end of
    the range that was broken.
    """

    direction: str  # "up" | "down"
    swing: SwingPoint
    reference: SwingPoint


@dataclass(frozen=True)
class SessionExtremes:
    high: float
    high_timestamp: datetime
    low: float
    low_timestamp: datetime
    open: float
    close: float
    bar_count: int

    @property
    def equilibrium(self) -> float:
        return (self.high + self.low) / 2

    @property
    def range(self) -> float:
        return self.high - self.low


SessionMap = Mapping[str, Optional[SessionExtremes]]


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"
    NEUTRAL = "neutral"


class Phase(str, Enum):
    TRENDING = "trending"
    INTO_EQUILIBRIUM = "into_equilibrium"


class TrendState(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


_INTO_EQ_SUFFIX = "-into-eq"


@dataclass(frozen=True)
class BiasToken:
    """
    Direction plus phase of a daily bias.

    The string form (``"long"``, ``"short-into-eq"``, ``"neutral"`` ...) is
    kept for display and for callers that still hand over plain tokens.
    """

    direction: Direction
    phase: Phase = Phase.TRENDING

    def __post_init__(self) -> None:
        if self.direction is Direction.NEUTRAL and self.phase is not Phase.TRENDING:
            raise ValueError("A neutral bias token has no into-equilibrium phase")

    @property
    def token(self) -> str:
        if self.phase is Phase.INTO_EQUILIBRIUM:
            return f"{self.direction.value}{_INTO_EQ_SUFFIX}"
        return self.direction.value

    @classmethod
    def parse(cls, token: str) -> BiasToken:
        """
        Parse a string token.

        Raises:
            ValueError: If the token is not one of the five known tokens
        """
        if not isinstance(token, str):
            raise ValueError(f"Bias token must be a string, got {type(token).__name__}")

        phase = Phase.TRENDING
        base = token
        if token.endswith(_INTO_EQ_SUFFIX):
            phase = Phase.INTO_EQUILIBRIUM
            base = token[: -len(_INTO_EQ_SUFFIX)]

        try:
            direction = Direction(base)
        except ValueError:
            raise ValueError(f"Malformed bias token: '{token}'") from None

        if direction is Direction.NEUTRAL and phase is Phase.INTO_EQUILIBRIUM:
            raise ValueError(f"Malformed bias token: '{token}'")

        return cls(direction, phase)

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class StructureSummary:
    state: TrendState


@dataclass(frozen=True)
class Bias:
    symbol: str
    as_of: datetime
    token: BiasToken
    structure: StructureSummary
    equilibrium: Optional[float] = None
    notes: tuple[str, ...] = ()

    @property
    def bias(self) -> str:
        return self.token.token

    @classmethod
    def from_token(
        cls,
        symbol: str,
        as_of: datetime,
        token: str,
        state: TrendState | str = TrendState.NEUTRAL,
    ) -> Bias:
        """Build a bias from a legacy string token."""
        return cls(
            symbol=symbol,
            as_of=as_of,
            token=BiasToken.parse(token),
            structure=StructureSummary(TrendState(state)),
        )


class ProfileLabel(str, Enum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"


@dataclass(frozen=True)
class Targets:
    primary: str
    secondary: str


@dataclass(frozen=True)
class DayProfileResult:
    symbol: str
    as_of: datetime
    profile: ProfileLabel
    session_map: SessionMap
    targets: Targets
    rationale: tuple[str, ...]


@dataclass(frozen=True)
class DailyPlan:
    bias: Bias
    profile: DayProfileResult
    swings: tuple[SwingPoint, ...] = field(default_factory=tuple)
    last_break: Optional[BreakOfStructure] = None
