"""In-Memory Key-Value Store — dict-backed KeyValueStore with all-or-nothing transactions.

Invariants:
    - Satisfies core/repository_protocols.KeyValueStore structurally
    - transaction() restores the pre-block contents when the block raises
    - Keys and values are stored as immutable bytes copies

Design Decisions:
    - Snapshot-and-restore over an undo log: stores here are test-sized
"""

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class MemoryKeyValueStore:
    """Flat byte store held in a dict."""

    def __init__(self, initial: dict[bytes, bytes] | None = None):
        self._data: dict[bytes, bytes] = dict(initial or {})

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def remove(self, key: bytes) -> None:
        self._data.pop(bytes(key), None)

    def snapshot(self) -> dict[bytes, bytes]:
        """Copy of the current contents, for assertions and rollback."""
        return dict(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @contextmanager
    def transaction(self) -> Iterator["MemoryKeyValueStore"]:
        """Run a block against the store; undo all of its writes if it raises."""
        saved = self.snapshot()
        try:
            yield self
        except Exception:
            self._data = saved
            logger.debug("Memory store transaction rolled back")
            raise
