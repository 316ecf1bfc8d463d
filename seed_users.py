#!/usr/bin/env python3
"""
Replace the users in the Location Share MongoDB database with a JSON seed.

The file must contain a JSON array of user documents, e.g.::

    [
      {"user_id": 1, "name": "Gemma", "phoneNumber": "07900000001",
       "location": {"status": false, "start": {"lat": null, "long": null}, ...},
       "friendList": [2, 3]}
    ]

Existing users and the id sequence are dropped first; afterwards the
sequence continues from the highest seeded ``user_id``.

Usage:
    python seed_users.py --file ./seed/users.json
    python seed_users.py --file users.json --mongo-url mongodb://db:27017 --db location_share_test
"""

import argparse
import json
import os
import sys

from pymongo import MongoClient


def load_users(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        users = json.load(f)
    if not isinstance(users, list):
        raise ValueError(f"{path} must contain a JSON array of users")
    for position, user in enumerate(users):
        if not isinstance(user, dict) or not isinstance(user.get("user_id"), int):
            raise ValueError(f"Entry {position} in {path} has no integer user_id")
    return users


def main() -> int:
    ap = argparse.ArgumentParser(description="Seed the users collection from a JSON file")
    ap.add_argument("--file", required=True, help="Path to a JSON array of user documents")
    ap.add_argument("--mongo-url", default=None, help="MongoDB URL (defaults to MONGO_URL / settings)")
    ap.add_argument("--db", default=None, help="Database name (defaults to DATABASE_NAME / settings)")
    args = ap.parse_args()

    # Settings are read at import time, so overrides go into the environment first.
    if args.db:
        os.environ["DATABASE_NAME"] = args.db
    if args.mongo_url:
        os.environ["MONGO_URL"] = args.mongo_url

    from location_share_api.app.core import db
    from location_share_api.app.core.config import settings
    from location_share_api.app.core.logging_config import setup_logging

    setup_logging(settings.log_level)

    if not os.path.exists(args.file):
        print(f"[ERR] Seed file not found: {args.file}", file=sys.stderr)
        return 2
    try:
        users = load_users(args.file)
    except ValueError as e:
        print(f"[ERR] {e}", file=sys.stderr)
        return 2

    # Existing data may violate the unique indexes; they are built after the reseed.
    db.init_db(MongoClient(settings.mongo_url), prepare=False)
    try:
        count = db.seed_users(users)
    finally:
        db.close_db()

    print(f"[OK] Seeded {count} users into {settings.database_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
