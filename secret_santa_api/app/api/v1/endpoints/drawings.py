"""Drawing endpoints for API v1."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Response, status

from secret_santa_api.app.api.deps import get_drawing_service
from secret_santa_api.app.schemas.user import User
from secret_santa_api.app.services import DrawingService

router = APIRouter()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def add_drawing(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: DrawingService = Depends(get_drawing_service),
) -> User:
    """Add a drawing for ``drawingYear``; an existing year is left as is."""
    return service.add_drawing(payload)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_drawing(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: DrawingService = Depends(get_drawing_service),
) -> Response:
    service.delete_drawing(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
