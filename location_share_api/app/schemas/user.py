"""
Pydantic models for user data.

Field names follow the stored documents (``phoneNumber``, ``friendList``)
so request and response bodies match what the mobile app sends and
reads.  Response envelopes wrap each resource in a key named after it
(``{"user": ...}``, ``{"friendList": [...]}``, ``{"acknowledged": ...}``).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """A GPS position.  Both components are null while no journey is active."""

    lat: Optional[float] = Field(None, examples=[53.81])
    long: Optional[float] = Field(None, examples=[-1.56])


class Location(BaseModel):
    status: bool = False
    start: Coordinates = Field(default_factory=Coordinates)
    current: Coordinates = Field(default_factory=Coordinates)
    end: Coordinates = Field(default_factory=Coordinates)


class UserCreate(BaseModel):
    """Schema for registering a user.

    ``name`` and ``phoneNumber`` are optional at the schema level so the
    service can report a missing field as ``Invalid input`` rather than
    a generic validation error.  Any further fields sent by the client
    are kept and stored on the user document.
    """

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, examples=["Johny English"])
    phoneNumber: Optional[str] = Field(None, examples=["07900000007"])


class FriendRead(BaseModel):
    """A friend as listed on another user's friend list (no nested friends)."""

    model_config = ConfigDict(extra="allow")

    user_id: int
    name: str
    phoneNumber: str
    location: Location


class UserRead(FriendRead):
    friendList: List[int] = Field(default_factory=list)


class FriendAdd(BaseModel):
    phoneNumber: Optional[str] = Field(None, examples=["07900000001"])


class LocationUpdate(BaseModel):
    """Body of ``PATCH /users/{user_id}/location``.

    Either a status change (``status`` with ``start``/``end`` when it
    is true) or, when ``status`` is omitted, a ``current`` position.
    """

    status: Optional[bool] = None
    start: Optional[Coordinates] = None
    end: Optional[Coordinates] = None
    current: Optional[Coordinates] = None


class UserResponse(BaseModel):
    user: UserRead


class FriendListResponse(BaseModel):
    friendList: List[FriendRead]


class AcknowledgedResponse(BaseModel):
    acknowledged: bool
