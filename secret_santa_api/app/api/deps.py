"""
FastAPI dependencies.

The document store is opened once at startup and kept on
``app.state.store``; each request builds the service it needs around
that handle.
"""

from fastapi import Depends, Request

from ..core.db import DocumentStore
from ..services import DrawingService, GiftExchangeService, ParticipantService, UserService


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_gift_exchange_service(store: DocumentStore = Depends(get_store)) -> GiftExchangeService:
    return GiftExchangeService(store)


def get_drawing_service(store: DocumentStore = Depends(get_store)) -> DrawingService:
    return DrawingService(store)


def get_participant_service(store: DocumentStore = Depends(get_store)) -> ParticipantService:
    return ParticipantService(store)
