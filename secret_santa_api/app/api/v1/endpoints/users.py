"""
User endpoints for API v1.

Users are looked up by e-mail address (the front end knows the signed-in
address, not the document id) and deleted by id.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from secret_santa_api.app.api.deps import get_user_service
from secret_santa_api.app.schemas.user import User
from secret_santa_api.app.services import UserService

router = APIRouter()


@router.get("/exists/{email}", response_model=bool)
def user_exists(email: str, service: UserService = Depends(get_user_service)) -> bool:
    """Return ``true`` when a user with this e-mail is registered."""
    return service.user_exists(email)


@router.get("/{email}", response_model=User)
def get_user(email: str, service: UserService = Depends(get_user_service)) -> User:
    return service.get_user_by_email(email)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> User:
    """Register a user.  Answers 409 if the e-mail is already taken."""
    return service.create_user(payload)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> Response:
    """Delete a user, with everything it owns, by ``_id``."""
    if service.delete_user(payload) == 1:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"Error": "User not found."},
    )
