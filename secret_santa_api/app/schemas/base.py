"""
Shared pieces for the document schemas.

Documents travel with the field names the front end already uses
(``_id``, ``giftExchanges``, ``secretDraw``, ...).  Models declare those
names as aliases and accept either form on input so Python callers can
use snake_case attributes.
"""

import uuid
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


def new_object_id() -> str:
    """Return a fresh opaque identifier for a document or nested entity."""
    return uuid.uuid4().hex


class DocumentModel(BaseModel):
    """Base class for models stored inside a user document."""

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        """Serialize with wire names, ready for the document store."""
        return self.model_dump(by_alias=True, mode="json")
