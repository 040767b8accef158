"""
Pydantic model for a yearly drawing of a gift exchange.
"""

from typing import List

from pydantic import Field, StrictInt

from .base import DocumentModel, new_object_id
from .participant import Participant


class Draw(DocumentModel):
    """One year's drawing and the people taking part in it."""

    id: str = Field(default_factory=new_object_id, alias="_id")
    year: StrictInt = Field(..., examples=[2024])
    participants: List[Participant] = Field(default_factory=list)
