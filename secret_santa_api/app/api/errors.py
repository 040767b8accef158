"""
Translate service errors into HTTP responses.

Error bodies keep the ``{"Error": "Request failed. ..."}`` shape the
front end already displays, plus the error ``kind`` and its structured
``context`` so clients can branch without parsing the message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.errors import (
    ConflictError,
    MissingFieldError,
    NotFoundError,
    SecretSantaError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    MissingFieldError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


async def handle_service_error(request: Request, exc: SecretSantaError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind, exc.message)
    body = {"Error": f"Request failed. {exc.message}"}
    body.update(exc.to_dict())
    return JSONResponse(status_code=status_code, content=body)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Bodies that are not JSON objects fail before reaching a service.
    return await handle_service_error(request, ValidationError.from_pydantic(exc))


async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(
        "%s %s failed in the document store: %s", request.method, request.url.path, exc, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"Error": "Request failed. The data store is unavailable.", "kind": "store"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SecretSantaError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StoreError, handle_store_error)
