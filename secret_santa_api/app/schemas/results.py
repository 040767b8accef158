"""
Result descriptor returned by targeted updates.

It mirrors the acknowledgement object document databases return, so
clients can inspect how many documents matched and how many actually
changed.
"""

from pydantic import BaseModel, ConfigDict, Field


class UpdateResult(BaseModel):
    """Outcome of a single targeted update."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    acknowledged: bool = True
    matched_count: int = Field(0, alias="matchedCount", examples=[1])
    modified_count: int = Field(0, alias="modifiedCount", examples=[1])

