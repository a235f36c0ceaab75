"""
io/loader.py
K 线数据加载与 DataFrame 转换。

用法:
    from daily_structure.io import load_bars

    bars = load_bars("data/ES_10m.csv")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from ..models import Bar, SwingPoint
from .schema import (
    COL_CLOSE,
    COL_DATETIME,
    COL_HIGH,
    COL_LOW,
    COL_OPEN,
    COL_VOLUME,
    REQUIRED_COLUMNS,
    validate_bars,
)

logger = logging.getLogger(__name__)


def bars_from_frame(df: pd.DataFrame) -> list[Bar]:
    """
    将 DataFrame 转换为 Bar 列表。

    Args:
        df: 至少包含 REQUIRED_COLUMNS 的 DataFrame，volume 列可选

    Returns:
        list[Bar]: 按原始行顺序排列

    Raises:
        ValueError: 缺少必需列
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"缺少必需列: {missing}")

    timestamps = pd.to_datetime(df[COL_DATETIME])
    volumes = df[COL_VOLUME] if COL_VOLUME in df.columns else pd.Series(0.0, index=df.index)

    return [
        Bar(
            timestamp=ts.to_pydatetime(),
            open=float(o),
            high=float(h),
            low=float(low),
            close=float(c),
            volume=float(v),
        )
        for ts, o, h, low, c, v in zip(
            timestamps, df[COL_OPEN], df[COL_HIGH], df[COL_LOW], df[COL_CLOSE], volumes
        )
    ]


def swings_to_frame(swings: Sequence[SwingPoint]) -> pd.DataFrame:
    """将摆动点列表转换为 DataFrame (index, datetime, price, kind)。"""
    return pd.DataFrame(
        {
            "index": [s.index for s in swings],
            COL_DATETIME: [s.timestamp for s in swings],
            "price": [s.price for s in swings],
            "kind": [s.kind.value for s in swings],
        }
    )


def load_bars(path: str | Path) -> list[Bar]:
    """
    从 CSV 文件加载并校验 K 线。

    Args:
        path: CSV 文件路径

    Returns:
        list[Bar]: 已校验的 K 线序列

    Raises:
        FileNotFoundError: 文件不存在
        ValueError: 缺少必需列或 K 线不合法
    """
    path = Path(path)

    if not path.exists():
        logger.error(f"文件不存在: {path}")
        raise FileNotFoundError(f"文件不存在: {path}")

    logger.info(f"加载数据文件: {path.name}")

    df = pd.read_csv(path)
    try:
        bars = bars_from_frame(df)
        validate_bars(bars)
    except ValueError as e:
        logger.error(f"数据校验失败 '{path.name}': {e}")
        raise

    logger.info(f"成功加载数据: {len(bars)} rows")
    return bars
