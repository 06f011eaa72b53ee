"""Mark today's (or --date) absences. Meant to run from cron after shift end."""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from attendance_compliance.common.datetime_utils import now_local, parse_iso_date
from attendance_compliance.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--date", help="work date as YYYY-MM-DD (default: today)")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    day = parse_iso_date(args.date) if args.date else now_local().date()
    container = build_container(settings=settings)
    created = container.attendance_service.sweep_absences(day)
    print(f"OK: {len(created)} absence(s) marked for {day.isoformat()}")


if __name__ == "__main__":
    main()
