"""Run the absence sweep once, e.g. from cron after each shift closes.

    python scripts/check_absences.py [YYYY-MM-DD] [--dry-run]
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging

from dotenv import load_dotenv

from config import get_settings_module

from studyhall.common.datetime_utils import parse_iso_date
from studyhall.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description="Mark paid admissions absent for closed shifts without a check-in")
    parser.add_argument("date", nargs="?", type=parse_iso_date, help="target date (default: today)")
    parser.add_argument("--dry-run", action="store_true", help="report absences without writing them")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

    container = build_container(db_config=dict(settings.DB_CONFIG))
    try:
        result = container.absence_service.check_absent_students(target_date=args.date, persist=not args.dry_run)
    finally:
        container.close()

    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
