#!/usr/bin/env python3
"""
Keen Analytics - Main Entry Point
=================================

Usage:
    python main.py --mode api                                # Run API server
    python main.py --mode query --company INFY --metric SALES # Print one series
    python main.py --mode universe                           # List companies and metrics
    python main.py --help                                    # Show help
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from keen.client.derivation import compact_magnitude, derive_change, format_change, format_value
from keen.core.errors import KeenError
from keen.core.row_source import FileRowSource
from keen.core.series_engine import SeriesQueryEngine
from keen.core.universe import Universe
from keen.utils.logger import get_logger

log = get_logger(__name__)


def run_api(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import uvicorn

    from keen.api.settings import get_api_settings

    settings = get_api_settings()
    uvicorn.run(
        "keen.api.app:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level="info",
    )


def render_series(company: str, metric: str, data_file: Optional[Path] = None) -> List[str]:
    """Derived table for one pair, read straight from the data file."""
    if data_file is None:
        from keen.api.settings import get_api_settings

        data_file = get_api_settings().data_file

    engine = SeriesQueryEngine(FileRowSource(data_file))
    points = derive_change(engine.query(company, metric))

    lines = [f"{company.strip().upper()} / {metric.strip().upper()}", f"{'Year':<6}{'Value':>16}{'Compact':>10}  Change"]
    for point in points:
        lines.append(
            f"{point.year:<6}{format_value(point.value):>16}{compact_magnitude(point.value):>10}  "
            f"{format_change(point.percent_change)}"
        )
    return lines


def render_universe(universe: Universe) -> List[str]:
    lines = ["Companies:"]
    lines += [f"  {c.ticker:<10}{c.name}" for c in universe.companies]
    lines.append("Metrics:")
    lines += [f"  {m.name:<10}{m.description}" for m in universe.metrics]
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Keen Analytics")
    parser.add_argument("--mode", choices=["api", "query", "universe"], default="api")
    parser.add_argument("--company", help="Ticker for --mode query")
    parser.add_argument("--metric", help="Metric for --mode query")
    parser.add_argument("--data", type=Path, help="Data file (overrides settings)")
    parser.add_argument("--host", help="Bind address for --mode api")
    parser.add_argument("--port", type=int, help="Port for --mode api")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.mode == "api":
        run_api(args.host, args.port)
        return 0

    if args.mode == "universe":
        print("\n".join(render_universe(Universe.from_config())))
        return 0

    try:
        print("\n".join(render_series(args.company, args.metric, args.data)))
    except KeenError as exc:
        log.error(f"query failed: {exc.as_dict()}")
        print(f"Error: {exc.to_response()['error']}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
