"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All storage IO reaches core through these Protocol types
    - Implementations provided by shell via dependency injection
      (infrastructure/sql_store.py, infrastructure/memory_store.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous: every core call is a straight sequence of reads and writes
      inside one host transaction
    - Readonly contract split from mutable: search paths only ever receive get()
"""

from typing import Protocol


class ReadonlyKeyValueStore(Protocol):
    """Flat byte-keyed store, read access only."""
    def get(self, key: bytes) -> bytes | None: ...


class KeyValueStore(ReadonlyKeyValueStore, Protocol):
    """Flat byte-keyed store with mutation."""
    def set(self, key: bytes, value: bytes) -> None: ...
    def remove(self, key: bytes) -> None: ...
