"""
daily_structure.io 模块
数据输入/输出层，包含列约定、K 线校验和 DataFrame 转换。
"""

from .loader import bars_from_frame, load_bars, swings_to_frame
from .schema import (
    COL_CLOSE,
    COL_DATETIME,
    COL_HIGH,
    COL_LOW,
    COL_OPEN,
    COL_VOLUME,
    REQUIRED_COLUMNS,
    validate_bar,
    validate_bars,
)

__all__ = [
    "COL_DATETIME",
    "COL_OPEN",
    "COL_HIGH",
    "COL_LOW",
    "COL_CLOSE",
    "COL_VOLUME",
    "REQUIRED_COLUMNS",
    "validate_bar",
    "validate_bars",
    "bars_from_frame",
    "swings_to_frame",
    "load_bars",
]
