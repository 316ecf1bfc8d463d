# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets up the test environment before the app is imported, swaps MongoDB
# for an in-memory mongomock client and re-seeds six users before every
# test.
# =============================================================================

import copy
import os

# Settings are read when app.core.config is first imported.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_NAME", "location_share_test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import mongomock
import pytest
from fastapi.testclient import TestClient

from location_share_api.app.core import db
from location_share_api.app.main import app


def _no_journey():
    return {
        "status": False,
        "start": {"lat": None, "long": None},
        "current": {"lat": None, "long": None},
        "end": {"lat": None, "long": None},
    }


SEED_USERS = [
    {
        "user_id": 1,
        "name": "Gemma",
        "phoneNumber": "07900000001",
        "location": _no_journey(),
        "friendList": [2, 5],
    },
    {
        "user_id": 2,
        "name": "Chris W",
        "phoneNumber": "07900000002",
        "location": {
            "status": True,
            "start": {"lat": 53.810, "long": -1.56},
            "current": {"lat": 53.81168, "long": -1.5618},
            "end": {"lat": 53.81339, "long": -1.5603},
        },
        "friendList": [1, 3],
    },
    {
        "user_id": 3,
        "name": "Chris L",
        "phoneNumber": "07900000003",
        "location": {
            "status": True,
            "start": {"lat": 53.8143, "long": -1.57604},
            "current": {"lat": 53.81487, "long": -1.56465},
            "end": {"lat": 53.81459, "long": -1.5486},
        },
        "friendList": [2],
    },
    {
        "user_id": 4,
        "name": "Aminah",
        "phoneNumber": "07900000004",
        "location": _no_journey(),
        "friendList": [],
    },
    {
        "user_id": 5,
        "name": "Tom",
        "phoneNumber": "07900000005",
        "location": _no_journey(),
        "friendList": [1],
    },
    {
        "user_id": 6,
        "name": "Paul",
        "phoneNumber": "07900000006",
        "location": _no_journey(),
        "friendList": [2, 3, 4],
    },
]


@pytest.fixture
def seed_users():
    """A fresh copy of the seed documents."""
    return copy.deepcopy(SEED_USERS)


@pytest.fixture(autouse=True)
def users_collection(seed_users):
    """Install an in-memory MongoDB and seed it; yields the users collection."""
    db.init_db(mongomock.MongoClient())
    db.seed_users(seed_users)
    yield db.get_users_collection()
    db.close_db()


@pytest.fixture
def client():
    # Not used as a context manager, so the lifespan does not replace the
    # mongomock client installed above.
    return TestClient(app, raise_server_exceptions=False)
