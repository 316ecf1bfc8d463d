"""
MongoDB integration.

This module owns the single ``MongoClient`` used by the process.  The
client is created by ``init_db`` when the application starts and closed
by ``close_db`` on shutdown; pymongo keeps its own connection pool, so
services simply ask for a collection (``get_users_collection``) on each
call instead of opening and closing connections themselves.

User ids are allocated from a counter document in the ``counters``
collection with an atomic ``$inc``, which keeps ids unique even when
several registrations run at the same time.  A unique index on
``users.user_id`` backs this up, and a second unique index on
``users.phoneNumber`` keeps phone logins unambiguous.
"""

import copy
import logging
from typing import Iterable, Optional

from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from .config import settings


logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
COUNTERS_COLLECTION = "counters"
USER_ID_SEQUENCE = "user_id"

_client: Optional[MongoClient] = None


def init_db(client: Optional[MongoClient] = None, prepare: bool = True) -> None:
    """Create the shared client, ensure indexes and sync the id sequence.

    Passing ``client`` installs it as the shared client (tests use this
    to substitute an in-memory server).  Without it a client is built
    from ``settings.mongo_url`` unless one is already installed.  With
    ``prepare=False`` only the client is installed; ``seed_users`` does
    the index and sequence work after replacing the data.
    """
    global _client
    if client is not None:
        _client = client
    elif _client is None:
        logger.info("Connecting to MongoDB at %s", settings.mongo_url)
        _client = MongoClient(settings.mongo_url)
    if prepare:
        ensure_indexes()
        sync_user_sequence()


def close_db() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB connection closed")


def get_database() -> Database:
    if _client is None:
        raise RuntimeError("Database is not initialised; call init_db() first")
    return _client[settings.database_name]


def get_users_collection() -> Collection:
    return get_database()[USERS_COLLECTION]


def get_counters_collection() -> Collection:
    return get_database()[COUNTERS_COLLECTION]


def ensure_indexes() -> None:
    users = get_users_collection()
    users.create_index([("user_id", ASCENDING)], unique=True)
    users.create_index([("phoneNumber", ASCENDING)], unique=True)


def sync_user_sequence() -> int:
    """Raise the id sequence to the highest stored ``user_id``.

    Needed after documents are inserted without going through the
    sequence (seeding, restores).  Returns the resulting sequence value.
    """
    top = get_users_collection().find_one(
        {}, projection={"_id": 0, "user_id": 1}, sort=[("user_id", DESCENDING)]
    )
    highest = top["user_id"] if top else 0
    counters = get_counters_collection()
    current = counters.find_one({"_id": USER_ID_SEQUENCE})
    seq = current["seq"] if current else 0
    if highest > seq or current is None:
        seq = max(seq, highest)
        counters.update_one({"_id": USER_ID_SEQUENCE}, {"$set": {"seq": seq}}, upsert=True)
        logger.debug("User id sequence set to %s", seq)
    return seq


def next_user_id() -> int:
    """Atomically allocate the next ``user_id``."""
    counter = get_counters_collection().find_one_and_update(
        {"_id": USER_ID_SEQUENCE},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return counter["seq"]


def seed_users(users: Iterable[dict]) -> int:
    """Replace all users with ``users`` and reset the id sequence.

    Documents are inserted as given (copies, so callers' dicts are not
    mutated with ``_id``).  Returns the number of inserted users.
    """
    docs = [copy.deepcopy(user) for user in users]
    database = get_database()
    database.drop_collection(USERS_COLLECTION)
    database.drop_collection(COUNTERS_COLLECTION)
    if docs:
        get_users_collection().insert_many(docs)
    ensure_indexes()
    sync_user_sequence()
    logger.info("Seeded %d users", len(docs))
    return len(docs)
