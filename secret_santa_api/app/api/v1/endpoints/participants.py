"""
Participant and restriction endpoints for API v1.

Field and restriction changes answer with the update counts.  Following
the contract the front end relies on, a restriction change that modified
nothing (already present on add, absent on delete) answers 404 with the
counts attached.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from secret_santa_api.app.api.deps import get_participant_service
from secret_santa_api.app.schemas.results import UpdateResult
from secret_santa_api.app.schemas.user import User
from secret_santa_api.app.services import ParticipantService

participants_router = APIRouter()
restrictions_router = APIRouter()


def _not_modified(message: str, result: UpdateResult) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"Error": message, "modifiedObj": result.model_dump(by_alias=True)},
    )


@participants_router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def add_participant(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ParticipantService = Depends(get_participant_service),
) -> User:
    return service.add_participant(payload)


@participants_router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_participant(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ParticipantService = Depends(get_participant_service),
) -> Response:
    service.delete_participant(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@participants_router.patch("", response_model=UpdateResult)
def update_participant(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ParticipantService = Depends(get_participant_service),
):
    """Change ``name``, ``email`` and/or ``secretDraw`` of a participant."""
    result = service.update_participant(payload)
    if result.matched_count == 1:
        return result
    return _not_modified("Resource not found or updated.", result)


@restrictions_router.post("", response_model=UpdateResult, status_code=status.HTTP_201_CREATED)
def add_restriction(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ParticipantService = Depends(get_participant_service),
):
    result = service.add_restriction(payload)
    if result.modified_count == 1:
        return result
    return _not_modified("Resource not found or updated or restriction already existed.", result)


@restrictions_router.delete("", response_model=UpdateResult)
def delete_restriction(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ParticipantService = Depends(get_participant_service),
):
    result = service.delete_restriction(payload)
    if result.modified_count == 1:
        return result
    return _not_modified("Resource not found or deleted or restriction didn't exist.", result)
