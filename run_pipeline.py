"""
run_pipeline.py
对单个品种的 K 线文件生成日内计划 (session extremes -> bias -> day profile)。

用法:
    python run_pipeline.py data/ES_10m.csv --symbol ES
    python run_pipeline.py data/ES_10m.csv --start 2024-03-04T14:30 --end 2024-03-04T21:00
    python run_pipeline.py data/ES_10m.csv --session asia=2024-03-04T00:00/2024-03-04T06:00

未指定 --start/--end 时，使用整份数据的时间范围作为会话窗口。
不带时区的时间按 K 线数据的时区解释。
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import Optional

from daily_structure.analysis import generate_daily_plan
from daily_structure.config import AppConfig
from daily_structure.io import load_bars
from daily_structure.logging import configure_from_app_config, get_logger
from daily_structure.models import DailyPlan, TimeWindow

logger = get_logger(__name__)


def parse_session(value: str) -> tuple[str, datetime, datetime]:
    """Parse ``NAME=START/END`` into a session name and its bounds."""
    name, sep, span = value.partition("=")
    start, sep2, end = span.partition("/")
    if not name or not sep or not sep2:
        raise argparse.ArgumentTypeError(f"expected NAME=START/END, got '{value}'")
    try:
        return name, datetime.fromisoformat(start), datetime.fromisoformat(end)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid session '{value}': {e}") from None


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Daily bias and day profile for one symbol")
    parser.add_argument("input_file", help="CSV file with datetime/open/high/low/close columns")
    parser.add_argument("--symbol", default="", help="Instrument symbol")
    parser.add_argument("--start", type=datetime.fromisoformat, help="Session window start (ISO)")
    parser.add_argument("--end", type=datetime.fromisoformat, help="Session window end (ISO)")
    parser.add_argument(
        "--session",
        action="append",
        default=[],
        type=parse_session,
        metavar="NAME=START/END",
        help="Named session for the session map (repeatable)",
    )
    parser.add_argument("--config", help="YAML configuration file")
    return parser


def localize(value: datetime, reference: datetime) -> datetime:
    """Attach the bars' timezone to a naive CLI time."""
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    return value


def print_plan(plan: DailyPlan) -> None:
    bias = plan.bias
    profile = plan.profile

    print("=" * 60)
    print(f"{bias.symbol or 'symbol'} @ {bias.as_of}")
    print("=" * 60)
    print(f"  Bias:      {bias.bias} ({bias.structure.state.value} structure)")
    if bias.equilibrium is not None:
        print(f"  EQ:        {bias.equilibrium:.2f}")
    for note in bias.notes:
        print(f"  Note:      {note}")
    print(f"  Profile:   {profile.profile.value}")
    print(f"  Primary:   {profile.targets.primary}")
    print(f"  Secondary: {profile.targets.secondary}")
    for line in profile.rationale:
        print(f"  Rationale: {line}")
    print(f"  Swings:    {len(plan.swings)}")
    if plan.last_break is not None:
        bos = plan.last_break
        print(f"  Last BOS:  {bos.direction} at {bos.swing.timestamp} ({bos.swing.price:.2f})")
    for name, extremes in profile.session_map.items():
        if extremes is None:
            print(f"  Session:   {name} (no data)")
        else:
            print(f"  Session:   {name} high {extremes.high:.2f} / low {extremes.low:.2f}")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = AppConfig.from_yaml_or_default(args.config)
    configure_from_app_config(config)

    bars = load_bars(args.input_file)
    if not bars:
        print("❌ 数据文件中没有 K 线")
        return 1

    reference = bars[0].timestamp
    try:
        window = TimeWindow(
            start=localize(args.start or bars[0].timestamp, reference),
            end=localize(args.end or bars[-1].timestamp, reference),
        )
        session_windows = {
            name: TimeWindow(localize(start, reference), localize(end, reference))
            for name, start, end in args.session
        }
        plan = generate_daily_plan(
            bars,
            window,
            symbol=args.symbol,
            session_windows=session_windows,
            config=config.analysis,
        )
    except (ValueError, TypeError) as e:
        logger.error(f"生成日内计划失败: {e}")
        print(f"❌ 无法生成日内计划: {e}")
        return 1

    if plan is None:
        print(f"❌ 会话窗口 {window.start} ~ {window.end} 内没有 K 线")
        return 1

    print_plan(plan)
    return 0


if __name__ == "__main__":
    sys.exit(main())
