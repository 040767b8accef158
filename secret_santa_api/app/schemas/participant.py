"""
Pydantic models for drawing participants.

A participant has a required name, an optional e-mail address (blank is
allowed, anything else must be a valid address), the name of the person
they were drawn to give a gift to (``secretDraw``) and a set of
restrictions: names of people they must not be paired with.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic.networks import validate_email

from .base import DocumentModel, new_object_id


def _clean_name(value: str) -> str:
    if not isinstance(value, str):
        raise ValueError("name must be a string")
    stripped = value.strip()
    if not stripped:
        raise ValueError("name must not be empty")
    return stripped


def _clean_email(value: Optional[str]) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError("email must be a string")
    stripped = value.strip()
    if not stripped:
        return ""
    # validate_email also accepts "Name <address>"; only bare addresses are stored.
    if "<" in stripped or ">" in stripped:
        raise ValueError("email must be a bare address without a display name")
    _, address = validate_email(stripped)
    return address


class Participant(DocumentModel):
    """A person taking part in one drawing."""

    id: str = Field(default_factory=new_object_id, alias="_id")
    name: str = Field(..., examples=["Alice"])
    email: str = Field("", examples=["alice@example.com"])
    secret_draw: str = Field("", alias="secretDraw", examples=["Bob"])
    restrictions: List[str] = Field(default_factory=list, examples=[["Carol"]])

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("email", mode="before")
    @classmethod
    def _validate_email(cls, value: Optional[str]) -> str:
        return _clean_email(value)

    @field_validator("secret_draw", mode="before")
    @classmethod
    def _default_secret_draw(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    @field_validator("restrictions")
    @classmethod
    def _unique_restrictions(cls, value: List[str]) -> List[str]:
        # Restrictions are a set; keep the first occurrence of each name.
        return list(dict.fromkeys(value))


class ParticipantChanges(DocumentModel):
    """Field changes for an existing participant.

    Which fields were sent matters, not their truthiness:
    ``{"secretDraw": ""}`` clears the assignment and ``{"email": ""}``
    removes the address.  Use :meth:`assignments` to get exactly the
    fields the caller provided.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    secret_draw: Optional[str] = Field(None, alias="secretDraw")

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("name must not be empty")
        return _clean_name(value)

    @field_validator("email", mode="before")
    @classmethod
    def _validate_email(cls, value: Optional[str]) -> str:
        return _clean_email(value)

    @field_validator("secret_draw", mode="before")
    @classmethod
    def _default_secret_draw(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    def assignments(self) -> dict:
        """Return ``{wire_name: value}`` for every field that was sent."""
        return self.model_dump(by_alias=True, include=self.model_fields_set)
