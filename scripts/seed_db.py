"""Seed the dashboard database from the command line.

Runs the same `seed_database` as `GET /seed` and prints a per-table summary.

Usage:
    python scripts/seed_db.py [--database-url URL] [--invoice-id-mode append|deterministic] [--verbose]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from app.database import DATABASE_URL, build_engine
from app.errors import SeedError
from app.schemas import InvoiceIdMode
from app.seed import seed_database

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
logger = logging.getLogger("seed_db")


def run(database_url: str, invoice_id_mode: Optional[str] = None) -> int:
    engine = build_engine(database_url)
    try:
        result = asyncio.run(seed_database(engine, invoice_id_mode=invoice_id_mode))
    except SeedError as exc:
        logger.error("Failed to seed database: %s", exc.details)
        return 1
    finally:
        engine.dispose()

    for group, counts in result.groups.items():
        print(f"{group}: {counts.inserted} inserted, {counts.skipped} skipped")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--database-url", default=DATABASE_URL)
    parser.add_argument("--invoice-id-mode", choices=[m.value for m in InvoiceIdMode], default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    return run(args.database_url, invoice_id_mode=args.invoice_id_mode)


if __name__ == "__main__":
    sys.exit(main())
