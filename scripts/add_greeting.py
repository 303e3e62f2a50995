#!/usr/bin/env python3
"""
Add a greeting straight to the configured store (DATA_FILE or DATABASE_URL).

Usage:
  python scripts/add_greeting.py --language French --greeting Bonjour [--informal]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from greetings_api.core.config import get_settings
from greetings_api.core.errors import GreetingsError
from greetings_api.repositories import build_store
from greetings_api.services.greeting_service import GreetingService


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Add a greeting to the store")
    ap.add_argument("--language", required=True, help="Language name (e.g. French)")
    ap.add_argument("--greeting", required=True, help="Greeting text (e.g. Bonjour)")
    ap.add_argument("--informal", action="store_true", help="Mark the greeting as informal")
    args = ap.parse_args(argv)

    store = build_store(get_settings())
    store.initialize()
    try:
        created = GreetingService(store).create(args.language, args.greeting, not args.informal)
    except GreetingsError as exc:
        raise SystemExit(f"Error: {exc.message}")
    print("OK: greeting added")
    print(f"  ID: {created.id}")
    print(f"  Language: {created.language}")
    print(f"  Greeting: {created.greeting}")
    print(f"  Formal: {created.formal}")


if __name__ == "__main__":
    main()
