"""
Service layer for the yearly drawings of a gift exchange.

Clients add the drawing for a year without first checking whether it
exists, so adding a year that is already present returns the user
unchanged instead of failing.
"""

import logging
from typing import Any, Mapping, Union

from ..core.errors import ValidationError
from ..schemas.drawing import Draw
from ..schemas.requests import DrawingCreate, DrawingDelete
from ..schemas.user import User
from .base import BaseService, parse_model

logger = logging.getLogger(__name__)


class DrawingService(BaseService):
    """Add and delete drawings."""

    def add_drawing(self, data: Union[DrawingCreate, Mapping[str, Any], None]) -> User:
        """Add the drawing for ``drawingYear`` unless the exchange already has one."""
        details = self._parse_request(
            DrawingCreate, data, "user_id", "gift_exchange_id", "drawing_year"
        )
        year = details.drawing_year
        if year < 1:
            raise ValidationError("drawingYear", "year must be a positive integer")

        def append_draw(user: User) -> bool:
            exchange = self._find_exchange(user, details.gift_exchange_id)
            if any(draw.year == year for draw in exchange.draws):
                logger.debug("Drawing %s already exists in exchange %s", year, exchange.id)
                return False
            exchange.draws.append(Draw(year=year))
            return True

        user = self._modify_user(details.user_id, append_draw)
        logger.info("Drawing %s present in gift exchange %s", year, details.gift_exchange_id)
        return user

    def delete_drawing(self, data: Union[DrawingDelete, Mapping[str, Any], None]) -> User:
        """Remove a drawing, with its participants, from its exchange."""
        details = self._parse_request(
            DrawingDelete, data, "user_id", "gift_exchange_id", "drawing_id"
        )

        def remove_draw(user: User) -> bool:
            exchange = self._find_exchange(user, details.gift_exchange_id)
            draw = self._find_draw(exchange, details.drawing_id)
            exchange.draws = [d for d in exchange.draws if d.id != draw.id]
            return True

        user = self._modify_user(details.user_id, remove_draw)
        logger.info("Deleted drawing %s of gift exchange %s", details.drawing_id, details.gift_exchange_id)
        return user
