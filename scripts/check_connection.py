#!/usr/bin/env python3
"""
Supabase Connection Check

Reads a few rows from the core tables with the anonymous-role client to
confirm the project URL and key in .env are valid and the schema is in place.

Usage:
    python scripts/check_connection.py
    python scripts/check_connection.py --limit 3 --table empresas --table bancos
"""

import argparse
import logging
import os
import sys
from typing import List

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from postgrest.exceptions import APIError

from beeconta.config import settings
from beeconta.db.client import get_supabase_clients
from beeconta.utils.constants import TABLES

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_TABLES = [
    TABLES['COMPANIES'],
    TABLES['BANKS'],
    TABLES['CURRENCIES'],
    TABLES['USERS'],
]


def check_tables(tables: List[str], limit: int) -> bool:
    """
    Read up to `limit` rows from each table.

    Returns:
        True when every table could be read
    """
    client = get_supabase_clients().get_client()
    all_ok = True

    for table in tables:
        print(f"\n--- {table} ---")
        try:
            result = client.table(table).select("*").limit(limit).execute()
        except APIError as e:
            logger.error(f"Could not read {table}: {e.message}")
            all_ok = False
            continue

        rows = result.data or []
        print(f"OK: {len(rows)} row(s)")
        for row in rows:
            print(f"   {row.get('id')}  {row.get('nome', '')}")

    return all_ok


def main() -> int:
    parser = argparse.ArgumentParser(description="Check the Supabase connection")
    parser.add_argument("--limit", type=int, default=5, help="Rows to read per table")
    parser.add_argument(
        "--table",
        action="append",
        dest="tables",
        help="Table to read (repeatable). Defaults to the core tables."
    )
    args = parser.parse_args()

    try:
        settings.validate()
    except ValueError as e:
        logger.error(str(e))
        return 1

    print("=" * 60)
    print(f"Checking Supabase project {settings.SUPABASE_URL}")
    print("=" * 60)

    ok = check_tables(args.tables or DEFAULT_TABLES, args.limit)

    print()
    print("All tables reachable" if ok else "Some tables could not be read")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
