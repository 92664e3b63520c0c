#!/usr/bin/env python
"""
Create the submissions table in Snowflake and report its row count.

Usage:
    python -m champ_funnel.scripts.init_schema
    python -m champ_funnel.scripts.init_schema --count-only
    python -m champ_funnel.scripts.init_schema --export entries.csv
"""

import argparse
import logging
import sys

from champ_funnel.config import get_settings
from champ_funnel.core.exceptions import RepositoryException
from champ_funnel.repositories.submission_repository import SubmissionRepository
from champ_funnel.services.submission_service import export_csv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialise the Champ Funnel submissions table")
    parser.add_argument("--count-only", action="store_true", help="Skip CREATE TABLE, just count rows")
    parser.add_argument("--export", metavar="PATH", help="Write every stored submission to a CSV file")
    args = parser.parse_args(argv)

    settings = get_settings()
    if settings.SUBMISSION_STORE != "snowflake":
        logger.error("SUBMISSION_STORE is '%s'; set it to 'snowflake' first", settings.SUBMISSION_STORE)
        return 2

    repo = SubmissionRepository(settings)
    try:
        if not args.count_only:
            repo.ensure_table()
            logger.info("Table %s ready", repo.table)
        logger.info("Rows in %s: %d", repo.table, repo.count())

        if args.export:
            records = repo.list(newest_first=True)
            with open(args.export, "w", encoding="utf-8", newline="") as fh:
                fh.write(export_csv(records))
            logger.info("Exported %d rows to %s", len(records), args.export)
    except RepositoryException as e:
        logger.error("Snowflake error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
