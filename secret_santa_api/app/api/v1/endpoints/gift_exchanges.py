"""
Gift exchange endpoints for API v1.

Adding and deleting an exchange answer with the saved user (or no
content); renaming answers with the update counts and uses 404 when
nothing was modified, which includes renaming to the current name.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from secret_santa_api.app.api.deps import get_gift_exchange_service
from secret_santa_api.app.schemas.results import UpdateResult
from secret_santa_api.app.schemas.user import User
from secret_santa_api.app.services import GiftExchangeService

router = APIRouter()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def add_gift_exchange(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: GiftExchangeService = Depends(get_gift_exchange_service),
) -> User:
    return service.add_gift_exchange(payload)


@router.patch("", response_model=UpdateResult)
def rename_gift_exchange(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: GiftExchangeService = Depends(get_gift_exchange_service),
):
    result = service.rename_gift_exchange(payload)
    if result.modified_count == 1:
        return result
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "Error": "Resource not found or updated.",
            "modifiedObj": result.model_dump(by_alias=True),
        },
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_gift_exchange(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: GiftExchangeService = Depends(get_gift_exchange_service),
) -> Response:
    service.delete_gift_exchange(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
