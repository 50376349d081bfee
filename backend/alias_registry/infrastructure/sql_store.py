"""SQL Key-Value Store — KeyValueStore backed by the kv_entries table.

Invariants:
    - Satisfies core/repository_protocols.KeyValueStore structurally
    - Operates inside the caller's Session; never commits or rolls back itself
    - Writes are flushed immediately so later reads in the same call see them

Design Decisions:
    - Transaction ownership stays with DatabaseSessionManager.session():
      one session == one command == one all-or-nothing unit
"""

from sqlalchemy.orm import Session

from alias_registry.models.kv_entry import KvEntry


class SqlKeyValueStore:
    """Flat byte store over a synchronous SQLAlchemy session."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, key: bytes) -> bytes | None:
        entry = self._db.get(KvEntry, bytes(key))
        return entry.value if entry is not None else None

    def set(self, key: bytes, value: bytes) -> None:
        self._db.merge(KvEntry(key=bytes(key), value=bytes(value)))
        self._db.flush()

    def remove(self, key: bytes) -> None:
        entry = self._db.get(KvEntry, bytes(key))
        if entry is not None:
            self._db.delete(entry)
            self._db.flush()
