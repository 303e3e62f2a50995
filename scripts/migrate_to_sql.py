"""One-off migration script: JSON (data.json) -> SQL database (DATABASE_URL)."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the greetings_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from greetings_api.core.config import get_settings
from greetings_api.repositories.json_storage import JsonCollectionStore
from greetings_api.repositories.sql_repository import SQLCollectionStore


def migrate(data_file: str, database_url: str) -> int:
    source = Path(data_file)
    if not source.exists():
        raise SystemExit(f"File not found: {source}")
    records = JsonCollectionStore(source).load()
    target = SQLCollectionStore(database_url)
    target.initialize()
    if not target.save(records):
        raise SystemExit("Could not write greetings to the database")
    return len(records)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy the JSON greeting collection into a SQL database")
    ap.add_argument("--data-file", default=settings.data_file, help="JSON file to read (default: DATA_FILE)")
    ap.add_argument("--database-url", default=settings.database_url, help="Target database (default: DATABASE_URL)")
    args = ap.parse_args(argv)
    if not args.database_url:
        raise SystemExit("DATABASE_URL (or --database-url) is required")
    count = migrate(args.data_file, args.database_url)
    print(f"{count} greetings migrated successfully.")


if __name__ == "__main__":
    main()
