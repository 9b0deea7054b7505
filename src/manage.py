"""ReviewDesk database management CLI.

Creates and drops the reviewdesk schema on SQL providers (PostgreSQL in
production). The in-memory provider needs neither.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

import structlog

logger = structlog.get_logger(__name__)


def setup_database():
    from reviewdesk.domain import reviewdesk
    from reviewdesk.utils.db import setup_db

    reviewdesk.init()
    logger.info("Creating reviewdesk database schema")
    setup_db(reviewdesk)
    logger.info("Schema ready")


def drop_database():
    from reviewdesk.domain import reviewdesk
    from reviewdesk.utils.db import drop_db

    reviewdesk.init()
    logger.info("Dropping reviewdesk database schema")
    drop_db(reviewdesk)
    logger.info("Schema dropped")


def main():
    from reviewdesk.utils.logging import configure_logging

    configure_logging()

    parser = argparse.ArgumentParser(description="ReviewDesk database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
