"""
Pydantic model for the user document.

The user is the unit of storage: every gift exchange, drawing and
participant the user organises is embedded in this one document, so
deleting the user removes all of them.  ``__v`` is the document version
maintained by the store for optimistic concurrency.
"""

from typing import List

from pydantic import Field

from .base import DocumentModel, new_object_id
from .gift_exchange import GiftExchange


class User(DocumentModel):
    """A gift exchange organiser and everything they own."""

    id: str = Field(default_factory=new_object_id, alias="_id")
    email: str = Field(..., examples=["user@example.com"])
    gift_exchanges: List[GiftExchange] = Field(default_factory=list, alias="giftExchanges")
    version: int = Field(0, alias="__v")
