"""
Shared plumbing for the service classes.

Every service receives the process-wide :class:`DocumentStore` at
construction.  The helpers here implement the steps all operations have
in common: checking required inputs in nesting order, resolving the
user -> exchange -> drawing -> participant chain, and the two write
styles (version-checked read-modify-save and targeted updates).
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.db import DocumentStore, NestedSelector, TargetedUpdate
from ..core.errors import (
    ConflictError,
    MissingFieldError,
    NotFoundError,
    ValidationError,
    VersionConflictError,
)
from ..schemas.drawing import Draw
from ..schemas.gift_exchange import GiftExchange
from ..schemas.participant import Participant
from ..schemas.requests import RequestModel
from ..schemas.results import UpdateResult
from ..schemas.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
RequestT = TypeVar("RequestT", bound=RequestModel)

# Whole-document saves are retried once after a version conflict.
SAVE_ATTEMPTS = 2


def is_blank(value: Any) -> bool:
    """True for ``None``, empty strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple, set)):
        return not value
    return False


def parse_model(model_cls: Type[ModelT], payload: Union[ModelT, Mapping[str, Any], None]) -> ModelT:
    """Validate ``payload`` into ``model_cls``, raising our ``ValidationError``."""
    if isinstance(payload, model_cls):
        return payload
    try:
        return model_cls.model_validate(payload or {})
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


class BaseService:
    """Base class for services operating on user documents."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Input checks
    # ------------------------------------------------------------------
    @staticmethod
    def _parse_request(
        model_cls: Type[RequestT],
        data: Union[RequestT, Mapping[str, Any], None],
        *field_names: str,
    ) -> RequestT:
        """Check ``field_names`` are present, in order, then validate ``data``.

        Presence is checked on the raw payload so a missing identifier is
        reported before a badly typed value further down the chain.
        """
        for field_name in field_names:
            if isinstance(data, model_cls):
                value = getattr(data, field_name)
            else:
                payload = dict(data) if isinstance(data, Mapping) else {}
                value = model_cls.raw_value(payload, field_name)
            if is_blank(value):
                raise MissingFieldError(model_cls.wire_name(field_name))
        return parse_model(model_cls, data)

    # ------------------------------------------------------------------
    # Chain resolution
    # ------------------------------------------------------------------
    def _load_user(self, user_id: str) -> User:
        document = self._store.find_by_id(user_id)
        if document is None:
            raise NotFoundError("User", user_id)
        return User.model_validate(document)

    @staticmethod
    def _find_exchange(user: User, exchange_id: str) -> GiftExchange:
        for exchange in user.gift_exchanges:
            if exchange.id == exchange_id:
                return exchange
        raise NotFoundError("Gift exchange", exchange_id)

    @staticmethod
    def _find_draw(exchange: GiftExchange, draw_id: str) -> Draw:
        for draw in exchange.draws:
            if draw.id == draw_id:
                return draw
        raise NotFoundError("Drawing", draw_id)

    @staticmethod
    def _find_participant(draw: Draw, participant_id: str) -> Participant:
        for participant in draw.participants:
            if participant.id == participant_id:
                return participant
        raise NotFoundError("Participant", participant_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def _modify_user(self, user_id: str, mutate: Callable[[User], bool]) -> User:
        """Load the user, apply ``mutate`` and save the whole document.

        ``mutate`` changes the user in place and returns ``False`` when
        there is nothing to save.  It may raise ``NotFoundError`` or
        ``ConflictError``; those are raised before anything is written.
        When another request saved the same user in between, the read
        and ``mutate`` are repeated once before giving up with
        ``ConflictError``.
        """
        for attempt in range(1, SAVE_ATTEMPTS + 1):
            user = self._load_user(user_id)
            if not mutate(user):
                return user
            try:
                saved = self._store.save(user.to_document())
            except VersionConflictError:
                logger.warning(
                    "User %s was modified concurrently (attempt %s of %s)",
                    user_id,
                    attempt,
                    SAVE_ATTEMPTS,
                )
                continue
            return User.model_validate(saved)
        raise ConflictError(
            "User was modified by another request; please retry.", entity="User", id=user_id
        )

    def _update_nested(
        self,
        user_id: str,
        selector: NestedSelector,
        update: TargetedUpdate,
        precondition: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> UpdateResult:
        return self._store.update_targeted({"_id": user_id}, update, selector, precondition)

    @staticmethod
    def _siblings_named(items: Any, name: str, exclude_id: Optional[str] = None) -> bool:
        return any(item.name == name and item.id != exclude_id for item in items)

    @staticmethod
    def _name_unused(
        parent: Optional[NestedSelector],
        collection: str,
        name: str,
        exclude_id: str,
        entity: str,
    ) -> Callable[[Dict[str, Any]], None]:
        """Build a store precondition rejecting a rename onto a sibling's name.

        ``parent`` selects the element holding ``collection``; ``None``
        means the user document itself.  The check runs on the document
        as read inside the update transaction.
        """

        def check(document: Dict[str, Any]) -> None:
            holders = parent.select(document) if parent is not None else [document]
            for holder in holders:
                for sibling in holder.get(collection, []):
                    if sibling.get("name") == name and sibling.get("_id") != exclude_id:
                        raise ConflictError(
                            f"{entity} with that name already exists.",
                            entity=entity,
                            field="name",
                            value=name,
                        )

        return check
