"""
Top-level API router.

Aggregates the domain routers under one router which ``main`` mounts
below ``settings.api_prefix``.  When new endpoints are added, include
their routers here.
"""

from fastapi import APIRouter

from .endpoints import health, login, users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(login.router, prefix="/login", tags=["login"])
router.include_router(health.router, prefix="/health", tags=["health"])
