"""
Top-level router for version 1 of the API.

Aggregates the domain routers under the resource paths the front end
calls (``/user``, ``/giftExchange``, ``/drawing``, ``/participant`` and
``/restriction``).  Request bodies are accepted as plain JSON objects and
validated by the services, which report a missing identifier before a
malformed value.
"""

from fastapi import APIRouter

from .endpoints import drawings, gift_exchanges, health, participants, users

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(users.router, prefix="/user", tags=["users"])
router.include_router(gift_exchanges.router, prefix="/giftExchange", tags=["gift exchanges"])
router.include_router(drawings.router, prefix="/drawing", tags=["drawings"])
router.include_router(participants.participants_router, prefix="/participant", tags=["participants"])
router.include_router(participants.restrictions_router, prefix="/restriction", tags=["restrictions"])
