"""
Service layer for gift exchanges.

Exchange names are unique per user.  Adding an exchange under a name the
user already has is treated as a mistake and raises ``ConflictError``;
the same name under a different user is fine.  Renaming is a single
targeted update of the exchange's ``name`` field so it cannot overwrite
drawings or participants changed by concurrent requests.
"""

import logging
from typing import Any, Mapping, Union

from ..core.db import NestedSelector, TargetedUpdate
from ..core.errors import ConflictError
from ..schemas.gift_exchange import GiftExchange
from ..schemas.requests import GiftExchangeCreate, GiftExchangeDelete, GiftExchangeRename
from ..schemas.results import UpdateResult
from ..schemas.user import User
from .base import BaseService, parse_model

logger = logging.getLogger(__name__)


class GiftExchangeService(BaseService):
    """Add, rename and delete a user's gift exchanges."""

    def add_gift_exchange(self, data: Union[GiftExchangeCreate, Mapping[str, Any], None]) -> User:
        """Append a new exchange to the user and return the saved user."""
        details = self._parse_request(GiftExchangeCreate, data, "user_id", "name")
        name = details.name.strip()

        def append_exchange(user: User) -> bool:
            if self._siblings_named(user.gift_exchanges, name):
                raise ConflictError(
                    "Gift exchange with that name already exists.",
                    entity="Gift exchange",
                    field="name",
                    value=name,
                )
            user.gift_exchanges.append(GiftExchange(name=name))
            return True

        user = self._modify_user(details.user_id, append_exchange)
        logger.info("Added gift exchange %r for user %s", name, user.id)
        return user

    def rename_gift_exchange(
        self, data: Union[GiftExchangeRename, Mapping[str, Any], None]
    ) -> UpdateResult:
        """Change an exchange's name.

        Fails with ``ConflictError`` when another exchange of the same
        user already has the new name.  Renaming an exchange to its
        current name matches but modifies nothing.
        """
        details = self._parse_request(
            GiftExchangeRename, data, "user_id", "gift_exchange_id", "new_name"
        )
        new_name = details.new_name.strip()

        user = self._load_user(details.user_id)
        exchange = self._find_exchange(user, details.gift_exchange_id)

        result = self._update_nested(
            details.user_id,
            NestedSelector(exchange_id=exchange.id),
            TargetedUpdate(assign={"name": new_name}),
            self._name_unused(None, "giftExchanges", new_name, exchange.id, "Gift exchange"),
        )
        logger.info(
            "Renamed gift exchange %s of user %s (modified=%s)",
            exchange.id,
            details.user_id,
            result.modified_count,
        )
        return result

    def delete_gift_exchange(
        self, data: Union[GiftExchangeDelete, Mapping[str, Any], None]
    ) -> User:
        """Remove an exchange, with all of its drawings, from the user."""
        details = self._parse_request(GiftExchangeDelete, data, "user_id", "gift_exchange_id")

        def remove_exchange(user: User) -> bool:
            exchange = self._find_exchange(user, details.gift_exchange_id)
            user.gift_exchanges = [x for x in user.gift_exchanges if x.id != exchange.id]
            return True

        user = self._modify_user(details.user_id, remove_exchange)
        logger.info("Deleted gift exchange %s of user %s", details.gift_exchange_id, user.id)
        return user
