"""Liveness banner served at the root path."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "secretSanta Backend is up and running!"
