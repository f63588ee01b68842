# src/inkwell/scripts/migrate.py
"""Apply or roll back schema migrations against the configured database."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from inkwell.core.settings import settings

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"

logger = logging.getLogger(__name__)


def alembic_config(url: str | None = None) -> Config:
    """Return an Alembic config for the repository's migrations folder."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", url: str | None = None) -> None:
    logger.info("Upgrading schema to %s", revision)
    command.upgrade(alembic_config(url), revision)


def run_downgrade(revision: str, url: str | None = None) -> None:
    logger.info("Downgrading schema to %s", revision)
    command.downgrade(alembic_config(url), revision)


def main() -> None:
    parser = argparse.ArgumentParser(description="Migrate the Inkwell database schema")
    parser.add_argument(
        "--downgrade",
        metavar="REVISION",
        default=None,
        help="Roll back to REVISION instead of upgrading.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    if args.downgrade:
        run_downgrade(args.downgrade, args.url)
    else:
        run_upgrade("head", args.url)


if __name__ == "__main__":
    main()
