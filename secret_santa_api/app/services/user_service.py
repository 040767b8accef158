"""
Business logic for users.

Users are identified by e-mail address.  Creating a user whose e-mail is
already registered is an error the caller must see, so it raises
``ConflictError`` rather than returning the existing account.  The
``email`` column is also unique in the store, which catches the race of
two simultaneous registrations that both passed the lookup.
"""

import logging
from typing import Any, Mapping, Union

from ..core.errors import ConflictError, DuplicateKeyError, MissingFieldError, NotFoundError
from ..schemas.requests import UserCreate, UserDelete
from ..schemas.user import User
from .base import BaseService, is_blank, parse_model

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Create, look up and delete users."""

    def create_user(self, data: Union[UserCreate, Mapping[str, Any], None]) -> User:
        """Register a new user and return the stored document."""
        details = self._parse_request(UserCreate, data, "email")
        email = details.email.strip()
        if self._store.find_one({"email": email}) is not None:
            raise ConflictError("User with that email already exists.", entity="User", field="email")
        # The store assigns the identifier and version.
        new_user = User(email=email).model_dump(by_alias=True, mode="json", exclude={"id", "version"})
        try:
            document = self._store.insert(new_user)
        except DuplicateKeyError as exc:
            raise ConflictError(
                "User with that email already exists.", entity="User", field="email"
            ) from exc
        logger.info("Registered user %s", document["_id"])
        return User.model_validate(document)

    def delete_user(self, data: Union[UserDelete, Mapping[str, Any], None]) -> int:
        """Delete a user and everything it owns.

        Returns the number of removed documents, ``0`` when no user has
        the given id.
        """
        details = self._parse_request(UserDelete, data, "user_id")
        removed = self._store.delete_where({"_id": details.user_id})
        if removed:
            logger.info("Deleted user %s", details.user_id)
        return removed

    def get_user(self, user_id: str) -> User:
        if is_blank(user_id):
            raise MissingFieldError("userId")
        return self._load_user(user_id)

    def get_user_by_email(self, email: str) -> User:
        if is_blank(email):
            raise MissingFieldError("email")
        document = self._store.find_one({"email": email.strip()})
        if document is None:
            raise NotFoundError("User")
        return User.model_validate(document)

    def user_exists(self, email: str) -> bool:
        if is_blank(email):
            raise MissingFieldError("email")
        return self._store.find_one({"email": email.strip()}) is not None
