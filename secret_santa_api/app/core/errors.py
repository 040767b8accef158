"""
Error kinds raised by the service layer.

Every service operation either returns a value or raises exactly one of
the four classified errors below.  Each error carries a ``kind`` tag and
a ``context`` dictionary (field name, entity kind, identifier) so the API
layer can branch on the kind instead of matching message strings.

``StoreError`` is the unclassified failure of the document store itself
(for example a locked or unreadable database file).  The service does not
interpret it beyond the two internal subclasses it translates into
``ConflictError``.
"""

from typing import Any, Dict, Optional


class SecretSantaError(Exception):
    """Base class for classified service errors."""

    kind: str = "error"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "context": self.context}


class MissingFieldError(SecretSantaError):
    """A required input was absent or empty."""

    kind = "missing_field"

    def __init__(self, field: str) -> None:
        super().__init__(f"A value for '{field}' must be provided.", field=field)
        self.field = field


class NotFoundError(SecretSantaError):
    """A referenced identifier does not resolve in the current chain."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: Optional[str] = None) -> None:
        super().__init__(f"{entity} with provided ID not found.", entity=entity, id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(SecretSantaError):
    """A uniqueness invariant would be violated or a concurrent write won."""

    kind = "conflict"


class ValidationError(SecretSantaError):
    """A field value fails its format constraint."""

    kind = "validation"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"Invalid value for '{field}': {message}", field=field)
        self.field = field

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Build an error from the first entry of a pydantic ``ValidationError``."""
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        return cls(field, first.get("msg", "invalid value"))


class StoreError(Exception):
    """Unclassified failure of the underlying document store."""


class DuplicateKeyError(StoreError):
    """An insert or save collided with a unique index."""


class VersionConflictError(StoreError):
    """A whole-document save found a newer version than the one it read."""
