"""
Request payloads accepted by the services and the HTTP API.

Every field is optional at the schema level: the services check
presence on the raw payload, before any type checks, so they can report
the first missing field in nesting order (user, exchange, drawing,
participant, restriction) with a ``MissingFieldError``.  Payloads use the
front end's camelCase names; snake_case attribute names are accepted too.

Nested targets share a base class per level, so a participant request
carries the user, exchange and drawing identifiers of its parents.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def wire_name(cls, field_name: str) -> str:
        """Return the name clients use for ``field_name``."""
        alias = cls.model_fields[field_name].validation_alias
        if isinstance(alias, AliasChoices):
            return str(alias.choices[0])
        return alias or field_name

    @classmethod
    def input_names(cls, field_name: str) -> List[str]:
        """Return every key accepted for ``field_name``, in lookup order."""
        alias = cls.model_fields[field_name].validation_alias
        if isinstance(alias, AliasChoices):
            names = [str(choice) for choice in alias.choices]
        else:
            names = [alias] if alias else []
        if field_name not in names:
            names.append(field_name)
        return names

    @classmethod
    def raw_value(cls, payload: Mapping[str, Any], field_name: str) -> Any:
        """Return the value validation would pick for ``field_name``, uncoerced."""
        for name in cls.input_names(field_name):
            if name in payload:
                return payload[name]
        return None


class UserCreate(RequestModel):
    email: Optional[str] = Field(None, examples=["user@example.com"])


class UserDelete(RequestModel):
    user_id: Optional[str] = Field(None, validation_alias=AliasChoices("_id", "userId", "user_id"))


class GiftExchangeCreate(RequestModel):
    """Add a gift exchange.  The owner may be sent as ``userId`` or ``_id``."""

    user_id: Optional[str] = Field(None, validation_alias=AliasChoices("userId", "_id", "user_id"))
    name: Optional[str] = Field(None, examples=["Office 2024"])


class ExchangeTarget(RequestModel):
    user_id: Optional[str] = Field(None, validation_alias=AliasChoices("userId", "user_id"))
    gift_exchange_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("giftExchangeId", "gift_exchange_id")
    )


class GiftExchangeRename(ExchangeTarget):
    new_name: Optional[str] = Field(None, validation_alias=AliasChoices("newName", "new_name"))


class GiftExchangeDelete(ExchangeTarget):
    pass


class DrawingCreate(ExchangeTarget):
    drawing_year: Optional[StrictInt] = Field(
        None, validation_alias=AliasChoices("drawingYear", "drawing_year", "year")
    )


class DrawingTarget(ExchangeTarget):
    drawing_id: Optional[str] = Field(None, validation_alias=AliasChoices("drawingId", "drawing_id"))


class DrawingDelete(DrawingTarget):
    pass


class ParticipantCreate(DrawingTarget):
    """Add a participant.

    ``newParticipant`` is kept as a raw mapping and validated by the
    service after the identifiers, so a missing ``userId`` is reported
    before a malformed e-mail address.
    """

    new_participant: Optional[Dict[str, Any]] = Field(
        None,
        validation_alias=AliasChoices("newParticipant", "new_participant"),
        examples=[{"name": "Alice", "email": "alice@example.com"}],
    )


class ParticipantTarget(DrawingTarget):
    participant_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("participantId", "participant_id")
    )


class ParticipantDelete(ParticipantTarget):
    pass


class ParticipantUpdate(ParticipantTarget):
    """Change a participant's ``name``, ``email`` and/or ``secretDraw``.

    Keys present in ``updates`` are applied even when their value is
    empty.
    """

    updates: Optional[Dict[str, Any]] = Field(None, examples=[{"secretDraw": "Bob"}])


class RestrictionChange(ParticipantTarget):
    restriction_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("restrictionName", "restriction_name")
    )
