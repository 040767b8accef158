from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator

import pytest

from secret_santa_api.app.core.db import DocumentStore
from secret_santa_api.app.schemas.user import User
from secret_santa_api.app.services import (
    DrawingService,
    GiftExchangeService,
    ParticipantService,
    UserService,
)


@pytest.fixture()
def store(tmp_path: Path) -> Iterator[DocumentStore]:
    with DocumentStore(str(tmp_path / "santa.sqlite3")) as opened:
        yield opened


@pytest.fixture()
def users(store: DocumentStore) -> UserService:
    return UserService(store)


@pytest.fixture()
def exchanges(store: DocumentStore) -> GiftExchangeService:
    return GiftExchangeService(store)


@pytest.fixture()
def drawings(store: DocumentStore) -> DrawingService:
    return DrawingService(store)


@pytest.fixture()
def participants(store: DocumentStore) -> ParticipantService:
    return ParticipantService(store)


@pytest.fixture()
def owner(users: UserService) -> User:
    return users.create_user({"email": "a@example.com"})


@pytest.fixture()
def drawing_ids(owner: User, exchanges: GiftExchangeService, drawings: DrawingService) -> Dict[str, str]:
    """A user with one exchange ("Office 2024") holding the 2024 drawing."""
    user = exchanges.add_gift_exchange({"userId": owner.id, "name": "Office 2024"})
    exchange = user.gift_exchanges[0]
    user = drawings.add_drawing(
        {"userId": owner.id, "giftExchangeId": exchange.id, "drawingYear": 2024}
    )
    draw = user.gift_exchanges[0].draws[0]
    return {"userId": owner.id, "giftExchangeId": exchange.id, "drawingId": draw.id}


@pytest.fixture()
def participant_ids(drawing_ids: Dict[str, str], participants: ParticipantService) -> Dict[str, str]:
    """``drawing_ids`` plus participants Alice and Bob; targets Alice."""
    participants.add_participant({**drawing_ids, "newParticipant": {"name": "Alice"}})
    user = participants.add_participant({**drawing_ids, "newParticipant": {"name": "Bob"}})
    alice, bob = user.gift_exchanges[0].draws[0].participants
    return {**drawing_ids, "participantId": alice.id, "bobId": bob.id}
