"""
SQLite-backed document store for user documents.

Each user is stored as one JSON document (exchanges, drawings,
participants and restrictions embedded) in the ``users`` table.  The
identifier, e-mail and version live in their own columns so lookups by
id or e-mail use an index and the e-mail stays unique.

The store is a process-scoped resource: the application opens it at
startup and closes it at shutdown, and services receive the handle at
construction.  A single connection is shared behind a re-entrant lock;
every write runs inside ``BEGIN IMMEDIATE`` so it is atomic with respect
to other writers, including other processes using the same file.

Two write styles are supported:

* ``update_targeted`` applies field assignments, add-to-set and pull
  operations to nested elements picked by a :class:`NestedSelector`,
  reading and writing the document inside one transaction.
* ``save`` writes back a whole document that the caller read and
  modified in memory.  It succeeds only when the stored version still
  equals the one the caller read (``__v``) and raises
  ``VersionConflictError`` otherwise.

All ``sqlite3`` failures surface as ``StoreError``.
"""

import copy
import json
import logging
import os
import re
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import DuplicateKeyError, StoreError, VersionConflictError
from ..schemas.base import new_object_id
from ..schemas.results import UpdateResult

logger = logging.getLogger(__name__)

ID_FIELD = "_id"
VERSION_FIELD = "__v"

# Top-level document fields backed by a real column.
_COLUMNS = {ID_FIELD: "id", "email": "email"}
_FIELD_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    version INTEGER NOT NULL DEFAULT 0,
    document TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are returned unchanged; relative
    paths are resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / database_url).resolve())


@dataclass(frozen=True)
class NestedSelector:
    """Identifies the nested element a targeted update applies to.

    ``exchange_id`` alone selects a gift exchange; adding ``draw_id``
    selects a drawing inside it and adding ``participant_id`` selects a
    participant inside that drawing.
    """

    exchange_id: str
    draw_id: Optional[str] = None
    participant_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.participant_id is not None and self.draw_id is None:
            raise ValueError("A participant selector needs a draw_id")

    def select(self, document: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Return the elements of ``document`` matched at the deepest level."""
        targets = [
            exchange
            for exchange in document.get("giftExchanges", [])
            if exchange.get(ID_FIELD) == self.exchange_id
        ]
        if self.draw_id is not None:
            targets = [
                draw
                for exchange in targets
                for draw in exchange.get("draws", [])
                if draw.get(ID_FIELD) == self.draw_id
            ]
        if self.participant_id is not None:
            targets = [
                participant
                for draw in targets
                for participant in draw.get("participants", [])
                if participant.get(ID_FIELD) == self.participant_id
            ]
        return targets


@dataclass(frozen=True)
class TargetedUpdate:
    """Field operations applied to every element a selector picks.

    ``assign`` replaces field values, ``add_to_set`` appends a value to a
    list field unless already present and ``pull`` removes every
    occurrence of a value from a list field.
    """

    assign: Mapping[str, Any] = field(default_factory=dict)
    add_to_set: Mapping[str, Any] = field(default_factory=dict)
    pull: Mapping[str, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.assign or self.add_to_set or self.pull)

    def apply(self, element: Dict[str, Any]) -> None:
        for key, value in self.assign.items():
            element[key] = value
        for key, value in self.add_to_set.items():
            values = element.setdefault(key, [])
            if value not in values:
                values.append(value)
        for key, value in self.pull.items():
            if key in element:
                element[key] = [item for item in element[key] if item != value]


def _where(query: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """Translate a field-equality query into a SQL predicate."""
    if not query:
        raise ValueError("A document query needs at least one field")
    clauses: List[str] = []
    params: List[Any] = []
    for key, value in query.items():
        column = _COLUMNS.get(key)
        if column is not None:
            clauses.append(f"{column} = ?")
        elif _FIELD_NAME.match(key):
            clauses.append("json_extract(document, ?) = ?")
            params.append(f"$.{key}")
        else:
            raise ValueError(f"Unsupported query field {key!r}")
        params.append(value)
    return " AND ".join(clauses), params


def _to_document(row: sqlite3.Row) -> Dict[str, Any]:
    document = json.loads(row["document"])
    document[ID_FIELD] = row["id"]
    document[VERSION_FIELD] = row["version"]
    return document


def _body(document: Mapping[str, Any]) -> str:
    body = {k: v for k, v in document.items() if k not in (ID_FIELD, VERSION_FIELD)}
    return json.dumps(body, ensure_ascii=False)


class DocumentStore:
    """Store of user documents addressable by id and by query."""

    def __init__(self, database_url: str) -> None:
        self._path = resolve_database_path(database_url)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> "DocumentStore":
        """Connect to the database file and create the schema if needed."""
        with self._lock:
            if self._conn is not None:
                return self
            if self._path != ":memory:":
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self._path, check_same_thread=False, isolation_level=None)
            except sqlite3.Error as exc:
                raise StoreError(f"Could not open document store at {self._path}: {exc}") from exc
            conn.row_factory = sqlite3.Row
            self._conn = conn
        self.initialize()
        logger.info("Document store opened at %s", self._path)
        return self

    def initialize(self) -> None:
        with self._transaction() as conn:
            conn.execute(_SCHEMA)

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Document store at %s closed", self._path)

    def __enter__(self) -> "DocumentStore":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Document store is not open")
        return self._conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed statements as one write transaction."""
        with self._lock:
            conn = self._connection()
            try:
                conn.execute("BEGIN IMMEDIATE")
                yield conn
                conn.execute("COMMIT")
            except sqlite3.IntegrityError as exc:
                self._rollback(conn)
                raise DuplicateKeyError(str(exc)) from exc
            except sqlite3.Error as exc:
                self._rollback(conn)
                raise StoreError(str(exc)) from exc
            except BaseException:
                self._rollback(conn)
                raise

    @contextmanager
    def _reading(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            conn = self._connection()
            try:
                yield conn
            except sqlite3.Error as exc:
                raise StoreError(str(exc)) from exc

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        if conn.in_transaction:
            conn.execute("ROLLBACK")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one({ID_FIELD: document_id})

    def find_one(self, query: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        clause, params = _where(query)
        with self._reading() as conn:
            row = conn.execute(f"SELECT * FROM users WHERE {clause} LIMIT 1", params).fetchone()
        return _to_document(row) if row is not None else None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def insert(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a new document, assigning ``_id`` when absent."""
        stored = copy.deepcopy(dict(document))
        stored[ID_FIELD] = stored.get(ID_FIELD) or new_object_id()
        stored[VERSION_FIELD] = 0
        if not stored.get("email"):
            raise ValueError("User documents need an email")
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO users (id, email, version, document) VALUES (?, ?, 0, ?)",
                (stored[ID_FIELD], stored["email"], _body(stored)),
            )
        logger.debug("Inserted document %s", stored[ID_FIELD])
        return stored

    def delete_where(self, query: Mapping[str, Any]) -> int:
        """Delete every document matching ``query`` and return the count."""
        clause, params = _where(query)
        with self._transaction() as conn:
            cursor = conn.execute(f"DELETE FROM users WHERE {clause}", params)
            removed = cursor.rowcount
        logger.debug("Deleted %s document(s) matching %s", removed, dict(query))
        return removed

    def save(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """Write back a whole document read earlier from this store.

        The write is accepted only if the stored version still equals
        ``document["__v"]``; the returned copy carries the new version.
        """
        document_id = document.get(ID_FIELD)
        if not document_id:
            raise ValueError("Only documents read from the store can be saved")
        expected = int(document.get(VERSION_FIELD, 0))
        with self._transaction() as conn:
            cursor = conn.execute(
                """
                UPDATE users
                SET email = ?, document = ?, version = version + 1, updated_at = CURRENT_TIMESTAMP
                WHERE id = ? AND version = ?
                """,
                (document.get("email"), _body(document), document_id, expected),
            )
            if cursor.rowcount == 0:
                raise VersionConflictError(
                    f"Document {document_id} changed since version {expected} was read"
                )
        saved = copy.deepcopy(dict(document))
        saved[VERSION_FIELD] = expected + 1
        return saved

    def update_targeted(
        self,
        query: Mapping[str, Any],
        update: TargetedUpdate,
        selector: NestedSelector,
        precondition: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> UpdateResult:
        """Apply ``update`` to the nested elements ``selector`` picks.

        Only the first document matching ``query`` is considered.  The
        read and the write happen inside one transaction.  A document
        counts as modified only when its content actually changed.

        ``precondition`` is called with the document as read inside the
        transaction; an exception it raises aborts the update.
        """
        if update.is_empty():
            raise ValueError("A targeted update needs at least one operation")
        clause, params = _where(query)
        with self._transaction() as conn:
            row = conn.execute(f"SELECT * FROM users WHERE {clause} LIMIT 1", params).fetchone()
            if row is None:
                return UpdateResult(matched_count=0, modified_count=0)
            document = json.loads(row["document"])
            if precondition is not None:
                precondition(document)
            original = copy.deepcopy(document)
            for element in selector.select(document):
                update.apply(element)
            if document == original:
                return UpdateResult(matched_count=1, modified_count=0)
            conn.execute(
                """
                UPDATE users
                SET document = ?, version = version + 1, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (json.dumps(document, ensure_ascii=False), row["id"]),
            )
        return UpdateResult(matched_count=1, modified_count=1)
