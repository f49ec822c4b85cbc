#!/usr/bin/env python3
"""
Import verbs and adjectives from CSV into the lexical catalog.

The CSV needs a header row with columns kana, kanji, category, subtype, meaning.

Usage:
    python import_catalog.py
    python import_catalog.py --csv data/catalog.csv
"""

import sys
import os
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from katsuyo import db
from katsuyo.structured import Category


def main() -> None:
    parser = argparse.ArgumentParser(description="Import a verb/adjective catalog CSV into the database")
    parser.add_argument(
        "--csv",
        default="data/catalog.csv",
        help="Path to the catalog CSV file (default: data/catalog.csv)",
    )
    args = parser.parse_args()

    if not os.path.exists(args.csv):
        print(f"❌ CSV file not found: {args.csv}")
        sys.exit(1)

    if not db.is_db_initialized():
        db.init_db()
        print("✅ Database initialized")

    count = db.import_catalog_csv(args.csv)
    if count == 0:
        print("ℹ️  All catalog items already imported (0 new)")
    else:
        print(f"🎉 Successfully imported {count} catalog items!")

    session = db.get_session()
    try:
        verbs = len(db.list_catalog_ids(session, [Category.VERB]))
        adjectives = len(db.list_catalog_ids(session, [Category.ADJECTIVE]))
    finally:
        session.close()
    print(f"\n📊 Catalog Stats:")
    print(f"   Verbs: {verbs}")
    print(f"   Adjectives: {adjectives}")


if __name__ == "__main__":
    main()
