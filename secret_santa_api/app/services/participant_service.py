"""
Service layer for drawing participants and their restrictions.

Adding a participant whose name is already taken in the drawing is a
no-op, like adding an existing drawing.  Field changes and restriction
changes are targeted updates addressed by exchange, drawing and
participant id, so two requests editing different participants of the
same user never overwrite each other.

Restrictions behave as a set: adding a name that is already present and
removing one that is absent both succeed with ``modifiedCount == 0``.
"""

import logging
from typing import Any, Mapping, Union

from ..core.db import NestedSelector, TargetedUpdate
from ..core.errors import MissingFieldError
from ..schemas.participant import Participant, ParticipantChanges
from ..schemas.requests import (
    ParticipantCreate,
    ParticipantDelete,
    ParticipantTarget,
    ParticipantUpdate,
    RestrictionChange,
)
from ..schemas.results import UpdateResult
from ..schemas.user import User
from .base import BaseService, is_blank, parse_model

logger = logging.getLogger(__name__)

PARTICIPANT_TARGET = ("user_id", "gift_exchange_id", "drawing_id", "participant_id")
UPDATABLE_FIELDS = ("name", "email", "secretDraw")


class ParticipantService(BaseService):
    """Manage participants of a drawing."""

    def add_participant(self, data: Union[ParticipantCreate, Mapping[str, Any], None]) -> User:
        """Add ``newParticipant`` to the drawing and return the saved user."""
        details = self._parse_request(
            ParticipantCreate, data, "user_id", "gift_exchange_id", "drawing_id", "new_participant"
        )
        payload = dict(details.new_participant)
        if is_blank(payload.get("name")):
            raise MissingFieldError("newParticipant.name")
        # New participants always get a fresh identifier.
        payload.pop("_id", None)
        payload.pop("id", None)
        participant = parse_model(Participant, payload)

        def append_participant(user: User) -> bool:
            exchange = self._find_exchange(user, details.gift_exchange_id)
            draw = self._find_draw(exchange, details.drawing_id)
            if self._siblings_named(draw.participants, participant.name):
                logger.debug("Participant %r already in drawing %s", participant.name, draw.id)
                return False
            draw.participants.append(participant)
            return True

        user = self._modify_user(details.user_id, append_participant)
        logger.info("Participant %r present in drawing %s", participant.name, details.drawing_id)
        return user

    def delete_participant(self, data: Union[ParticipantDelete, Mapping[str, Any], None]) -> User:
        """Remove a participant from its drawing; siblings keep their order."""
        details = self._parse_request(ParticipantDelete, data, *PARTICIPANT_TARGET)

        def remove_participant(user: User) -> bool:
            exchange = self._find_exchange(user, details.gift_exchange_id)
            draw = self._find_draw(exchange, details.drawing_id)
            participant = self._find_participant(draw, details.participant_id)
            draw.participants = [p for p in draw.participants if p.id != participant.id]
            return True

        user = self._modify_user(details.user_id, remove_participant)
        logger.info("Deleted participant %s from drawing %s", details.participant_id, details.drawing_id)
        return user

    def update_participant(
        self, data: Union[ParticipantUpdate, Mapping[str, Any], None]
    ) -> UpdateResult:
        """Set any of ``name``, ``email`` and ``secretDraw`` in one write.

        Keys are applied when present, whatever their value, so
        ``{"secretDraw": ""}`` clears the assignment.  A new name must
        not belong to another participant of the same drawing.
        """
        details = self._parse_request(ParticipantUpdate, data, *PARTICIPANT_TARGET)
        updates = details.updates or {}
        if not any(key in updates for key in UPDATABLE_FIELDS):
            raise MissingFieldError("updates")
        changes = parse_model(
            ParticipantChanges, {key: updates[key] for key in UPDATABLE_FIELDS if key in updates}
        )
        assignments = changes.assignments()

        selector = self._resolve_participant(details)
        precondition = None
        if "name" in assignments:
            precondition = self._name_unused(
                NestedSelector(exchange_id=selector.exchange_id, draw_id=selector.draw_id),
                "participants",
                assignments["name"],
                selector.participant_id,
                "Participant",
            )

        result = self._update_nested(
            details.user_id, selector, TargetedUpdate(assign=assignments), precondition
        )
        logger.info(
            "Updated %s of participant %s (modified=%s)",
            ", ".join(sorted(assignments)),
            details.participant_id,
            result.modified_count,
        )
        return result

    def add_restriction(self, data: Union[RestrictionChange, Mapping[str, Any], None]) -> UpdateResult:
        """Add ``restrictionName`` to the participant's restrictions if absent."""
        details = self._parse_request(RestrictionChange, data, *PARTICIPANT_TARGET, "restriction_name")
        selector = self._resolve_participant(details)
        result = self._update_nested(
            details.user_id,
            selector,
            TargetedUpdate(add_to_set={"restrictions": details.restriction_name.strip()}),
        )
        logger.info(
            "Added restriction %r to participant %s (modified=%s)",
            details.restriction_name,
            details.participant_id,
            result.modified_count,
        )
        return result

    def delete_restriction(
        self, data: Union[RestrictionChange, Mapping[str, Any], None]
    ) -> UpdateResult:
        """Remove ``restrictionName`` from the participant's restrictions if present."""
        details = self._parse_request(RestrictionChange, data, *PARTICIPANT_TARGET, "restriction_name")
        selector = self._resolve_participant(details)
        result = self._update_nested(
            details.user_id,
            selector,
            TargetedUpdate(pull={"restrictions": details.restriction_name.strip()}),
        )
        logger.info(
            "Removed restriction %r from participant %s (modified=%s)",
            details.restriction_name,
            details.participant_id,
            result.modified_count,
        )
        return result

    def _resolve_participant(self, details: ParticipantTarget) -> NestedSelector:
        """Check the whole chain exists; return a selector for the participant."""
        user = self._load_user(details.user_id)
        exchange = self._find_exchange(user, details.gift_exchange_id)
        draw = self._find_draw(exchange, details.drawing_id)
        participant = self._find_participant(draw, details.participant_id)
        return NestedSelector(
            exchange_id=exchange.id, draw_id=draw.id, participant_id=participant.id
        )
