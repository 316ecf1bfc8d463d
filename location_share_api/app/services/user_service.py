"""
Business logic for users, their location and their friends.

All state lives in the ``users`` collection, one document per user::

    {
        "user_id": 6,
        "name": "Gemma",
        "phoneNumber": "07900000006",
        "location": {"status": false, "start": {...}, "current": {...}, "end": {...}},
        "friendList": [2, 3, 4],
    }

Every write touches a single document with an atomic operator
(``$set``/``$push``), so concurrent requests for the same user cannot
lose each other's updates.  Expected failures are raised as
``LocationShareError`` subclasses; storage errors propagate unchanged.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from ..core.db import get_users_collection, next_user_id
from ..core.errors import BadRequestError, ConflictError, InvalidInputError, NotFoundError
from ..schemas.user import UserCreate


logger = logging.getLogger(__name__)

# Storage ids are never handed out to clients.
_PUBLIC = {"_id": 0}
_FRIEND_SUMMARY = {"_id": 0, "friendList": 0}


def empty_coordinates() -> Dict[str, None]:
    return {"lat": None, "long": None}


def default_location() -> Dict[str, Any]:
    """Location of a user with no active journey."""
    return {
        "status": False,
        "start": empty_coordinates(),
        "current": empty_coordinates(),
        "end": empty_coordinates(),
    }


def _duplicate_key(exc: DuplicateKeyError) -> Optional[str]:
    """Name of the first field of the unique index that rejected a write."""
    key_pattern = (exc.details or {}).get("keyPattern") or {}
    if key_pattern:
        return next(iter(key_pattern))
    # Older servers only report the index name, e.g. "phoneNumber_1 dup key".
    return "phoneNumber" if "phoneNumber" in str(exc) else None


def _coordinates(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


class UserService:
    """Operations over user documents.

    Methods are plain blocking calls on the shared pymongo client.  The
    HTTP handlers that use them are sync ``def`` functions, so FastAPI
    runs each request in its threadpool and a slow round trip only
    holds up its own request.
    """

    @classmethod
    def find_by_id(cls, user_id: int) -> Dict[str, Any]:
        """Return the user with ``user_id`` or raise ``NotFoundError``."""
        user = get_users_collection().find_one({"user_id": user_id}, projection=_PUBLIC)
        if user is None:
            logger.debug("No user with id %s", user_id)
            raise NotFoundError("User not found")
        return user

    @classmethod
    def find_by_phone(cls, phone_number: Optional[str]) -> Dict[str, Any]:
        """Return the user registered with ``phone_number``.

        Used both for login and for resolving a friend before adding
        them.  Raises ``NotFoundError("Invalid phone number")`` when no
        user has that number.
        """
        user = None
        if phone_number:
            user = get_users_collection().find_one({"phoneNumber": phone_number}, projection=_PUBLIC)
        if user is None:
            logger.debug("No user with phone number %s", phone_number)
            raise NotFoundError("Invalid phone number")
        return user

    @classmethod
    def create(cls, data: UserCreate) -> Dict[str, Any]:
        """Register a new user and return the stored document.

        The new user gets the next id from the sequence, no active
        journey and an empty friend list.  Extra fields sent by the
        client are stored alongside, but cannot override those three.
        """
        if not data.name or not data.phoneNumber:
            raise InvalidInputError("Invalid input")

        users = get_users_collection()
        if users.find_one({"phoneNumber": data.phoneNumber}, projection={"_id": 1}) is not None:
            raise ConflictError("Phone number already registered")

        document = data.model_dump()
        document.pop("_id", None)
        document.update(
            user_id=next_user_id(),
            location=default_location(),
            friendList=[],
        )
        try:
            result = users.insert_one(document)
        except DuplicateKeyError as exc:
            # Lost a race with a concurrent registration of the same number.
            if _duplicate_key(exc) == "phoneNumber":
                raise ConflictError("Phone number already registered")
            raise
        if not result.acknowledged:
            raise RuntimeError(f"Insert of user {document['user_id']} was not acknowledged")

        logger.info("Registered user %s (%s)", document["user_id"], data.name)
        return cls.find_by_id(document["user_id"])

    @classmethod
    def append_friend(cls, user_id: int, new_friend_id: int) -> bool:
        """Append ``new_friend_id`` to the end of the user's friend list.

        Duplicates are allowed and the friend's own existence is not
        checked.  Raises ``NotFoundError`` when ``user_id`` is unknown.
        """
        result = get_users_collection().update_one(
            {"user_id": user_id},
            {"$push": {"friendList": new_friend_id}},
        )
        if result.matched_count == 0:
            raise NotFoundError("User not found")
        logger.info("User %s added friend %s", user_id, new_friend_id)
        return result.acknowledged

    @classmethod
    def update_location(
        cls,
        status: Optional[bool],
        start: Any,
        end: Any,
        user_id: int,
    ) -> bool:
        """Start or stop a journey.

        A false (or missing) ``status`` clears every coordinate.  A true
        ``status`` needs both ``start`` and ``end``; the current position
        starts out equal to ``start``.  The whole ``location`` field is
        replaced in a single update.
        """
        if status:
            start, end = _coordinates(start), _coordinates(end)
            if start is None or end is None:
                raise BadRequestError("Bad request")
            location = {"status": True, "start": start, "current": start, "end": end}
        else:
            location = default_location()

        result = get_users_collection().update_one({"user_id": user_id}, {"$set": {"location": location}})
        logger.info("User %s journey %s", user_id, "started" if location["status"] else "ended")
        return result.acknowledged

    @classmethod
    def update_current_location(cls, user_id: int, current: Any) -> bool:
        # Missing users are not an error here; the update simply matches nothing.
        result = get_users_collection().update_one(
            {"user_id": user_id},
            {"$set": {"location.current": _coordinates(current)}},
        )
        return result.acknowledged

    @classmethod
    def fetch_friend_list(cls, user_id: int) -> List[Dict[str, Any]]:
        """Return summaries of the user's friends in friend-list order.

        Friends are fetched with a single ``$in`` query.  Each summary
        omits the friend's own friend list; repeated ids appear once and
        ids without a stored user are skipped.
        """
        owner = cls.find_by_id(user_id)
        friend_ids = list(dict.fromkeys(owner.get("friendList") or []))
        if not friend_ids:
            return []

        cursor = get_users_collection().find({"user_id": {"$in": friend_ids}}, projection=_FRIEND_SUMMARY)
        by_id = {friend["user_id"]: friend for friend in cursor}
        return [by_id[friend_id] for friend_id in friend_ids if friend_id in by_id]
