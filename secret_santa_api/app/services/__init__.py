"""
Service layer.

Each service wraps the shared ``DocumentStore`` handed to it at
construction and implements the mutations of one nesting level: users,
gift exchanges, drawings, and participants with their restrictions.
Services raise the errors from ``core.errors`` and never touch HTTP.
"""

from .drawing_service import DrawingService
from .gift_exchange_service import GiftExchangeService
from .participant_service import ParticipantService
from .user_service import UserService

__all__ = ["DrawingService", "GiftExchangeService", "ParticipantService", "UserService"]
