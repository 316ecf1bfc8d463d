"""
Login endpoint.

Login is a plain lookup by phone number: the app stores the returned
user and sends its ``user_id`` with later requests.  There are no
credentials or sessions.
"""

from fastapi import APIRouter

from location_share_api.app.schemas.user import UserResponse
from location_share_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/{phone_number}", response_model=UserResponse)
def login(phone_number: str) -> dict:
    return {"user": UserService.find_by_phone(phone_number)}
