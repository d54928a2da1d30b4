"""Print the lapsed-member report (or the absent list) from the command line.

Usage:
    python scripts/lapse_report.py
    python scripts/lapse_report.py --thresholds 60,120,365
    python scripts/lapse_report.py --absent 4
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "congregation"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from congregation.analysis.thresholds import ThresholdSet
from congregation.container import build_container
from congregation.main import configure_logging


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Lapsed-member and absent-member reports")
    p.add_argument("--thresholds", help="comma-separated tier thresholds in days, tier 1 first")
    p.add_argument("--absent", type=int, metavar="N", help="list active members absent from the last N services")
    return p.parse_args()


async def _run(args: argparse.Namespace) -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)

    if args.absent:
        members = await container.outreach_service.absent_from_last_services(args.absent)
        for m in members:
            print(f"{m.person_id:>6}  {m.display_name:<30} {m.phone_number or '-'}")
        print(f"{len(members)} member(s) absent from the last {args.absent} service(s)")
        return

    thresholds = ThresholdSet.parse(args.thresholds) if args.thresholds else None
    report = await container.lapse_report_service.get_lapsed_members(thresholds=thresholds)
    for r in report:
        days = "never" if r.elapsed_days is None else f"{r.elapsed_days}d"
        print(f"tier {r.tier}  {days:>7}  {r.person.display_name:<30} {r.person.phone_number or '-'}")
    print(f"{len(report)} lapsed member(s)")


def main() -> None:
    asyncio.run(_run(_parse_args()))


if __name__ == "__main__":
    main()
