"""
Pydantic model for a named gift exchange.

A gift exchange is the recurring event a user organises ("Office",
"Family"), holding one drawing per year.
"""

from typing import List

from pydantic import Field, field_validator

from .base import DocumentModel, new_object_id
from .drawing import Draw


class GiftExchange(DocumentModel):
    id: str = Field(default_factory=new_object_id, alias="_id")
    name: str = Field(..., examples=["Office 2024"])
    draws: List[Draw] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be empty")
        return stripped
