"""
User endpoints.

Registration, profile lookup, friend list management and location
updates.  Successful mutations answer ``201`` with ``{"acknowledged":
true}``; the updated user can be re-read with ``GET /users/{user_id}``.
"""

from fastapi import APIRouter, Depends, status

from location_share_api.app.core.errors import NotFoundError

from location_share_api.app.schemas.user import (
    AcknowledgedResponse,
    FriendAdd,
    FriendListResponse,
    LocationUpdate,
    UserCreate,
    UserResponse,
)
from location_share_api.app.services.user_service import UserService


router = APIRouter()

# MongoDB stores integers as signed 64-bit values.
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def parse_user_id(user_id: str) -> int:
    """Resolve the ``{user_id}`` path segment.

    An id that is not an integer (``abc``, ``1.5``) or does not fit in
    64 bits cannot belong to any user, so it answers 404 like any other
    unknown id.
    """
    try:
        value = int(user_id)
    except ValueError:
        raise NotFoundError("User not found")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise NotFoundError("User not found")
    return value


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate) -> dict:
    """Register a new user.

    Requires ``name`` and ``phoneNumber``; returns 400 ``Invalid input``
    otherwise, and 409 when the phone number is already registered.
    """
    return {"user": UserService.create(user)}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int = Depends(parse_user_id)) -> dict:
    return {"user": UserService.find_by_id(user_id)}


@router.patch(
    "/{user_id}/friends",
    response_model=AcknowledgedResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_friend(body: FriendAdd, user_id: int = Depends(parse_user_id)) -> dict:
    """Add the user registered with ``body.phoneNumber`` as a friend.

    The phone number is resolved first, so an unknown number answers
    404 ``Invalid phone number`` and nothing is written.
    """
    friend = UserService.find_by_phone(body.phoneNumber)
    acknowledged = UserService.append_friend(user_id, friend["user_id"])
    return {"acknowledged": acknowledged}


@router.get("/{user_id}/friends", response_model=FriendListResponse)
def list_friends(user_id: int = Depends(parse_user_id)) -> dict:
    return {"friendList": UserService.fetch_friend_list(user_id)}


@router.patch(
    "/{user_id}/location",
    response_model=AcknowledgedResponse,
    status_code=status.HTTP_201_CREATED,
)
def update_location(body: LocationUpdate, user_id: int = Depends(parse_user_id)) -> dict:
    """Start/stop a journey, or move the current position.

    ``{"current": {...}}`` without a ``status`` only updates the current
    position.  Anything else is treated as a status change: ``status:
    true`` requires ``start`` and ``end``, while ``false`` clears all
    coordinates.
    """
    if body.status is None and body.current is not None:
        acknowledged = UserService.update_current_location(user_id, body.current)
    else:
        acknowledged = UserService.update_location(body.status, body.start, body.end, user_id)
    return {"acknowledged": acknowledged}
