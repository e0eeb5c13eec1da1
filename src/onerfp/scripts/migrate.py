"""Apply Alembic migrations, or create tables directly for throwaway databases."""
from __future__ import annotations

import argparse
from pathlib import Path

from alembic import command
from alembic.config import Config

from onerfp.core.settings import settings
from onerfp.db.session import create_tables, drop_tables

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def alembic_config() -> Config:
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # Alembic runs synchronously; asyncpg URLs are swapped for psycopg.
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    command.upgrade(alembic_config(), "head")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Bring the configured database up to date")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="Create tables from the ORM metadata instead of running migrations.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop every table first (only with --create-all).",
    )
    args = parser.parse_args(argv)

    if args.create_all:
        if args.reset:
            drop_tables()
        create_tables()
        print("[migrate] tables created from metadata")
        return

    run_upgrade_head()
    print("[migrate] upgraded to head")


if __name__ == "__main__":
    main()
