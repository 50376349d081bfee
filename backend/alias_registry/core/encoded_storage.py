"""Encoded Storage — typed load/save/remove over a flat byte store, plus namespaced views.

Invariants:
    - load() raises NotFoundError carrying the codec's type name when the key is missing
    - may_load() returns None on a missing key and never raises for absence
    - save() propagates EncodeError; nothing is written when encoding fails
    - remove() is a no-op for a missing key
    - A namespaced view prepends len(namespace) (2 bytes, big-endian) + namespace
      to every key, so one namespace never aliases another it happens to prefix

Design Decisions:
    - No alias-domain knowledge here: both indexes reuse it with their own
      namespace and codec
    - Readonly view exposes only get(): holders cannot mutate through it
"""

from typing import TypeVar

from alias_registry.core.binary_codec import RecordCodec
from alias_registry.core.errors import NotFoundError
from alias_registry.core.repository_protocols import (
    KeyValueStore, ReadonlyKeyValueStore,
)

T = TypeVar("T")


# ─── Adapter Functions ───────────────────────────────────────────

def load(store: ReadonlyKeyValueStore, key: bytes, codec: RecordCodec[T]) -> T:
    """Load and decode the value under key, or raise NotFoundError."""
    raw = store.get(key)
    if raw is None:
        raise NotFoundError(codec.type_name)
    return codec.decode(raw)


def may_load(
    store: ReadonlyKeyValueStore, key: bytes, codec: RecordCodec[T],
) -> T | None:
    """Load and decode the value under key, or None when absent."""
    raw = store.get(key)
    if raw is None:
        return None
    return codec.decode(raw)


def save(
    store: KeyValueStore, key: bytes, value: T, codec: RecordCodec[T],
) -> None:
    """Encode value and store it under key."""
    store.set(key, codec.encode(value))


def remove(store: KeyValueStore, key: bytes) -> None:
    """Delete key. No-op if absent."""
    store.remove(key)


# ─── Namespaced Views ────────────────────────────────────────────

def namespace_prefix(namespace: bytes) -> bytes:
    """Length-prefixed namespace bytes prepended to every key in the view."""
    if len(namespace) > 0xFFFF:
        raise ValueError("namespace longer than 65535 bytes")
    return len(namespace).to_bytes(2, "big") + namespace


class ReadonlyPrefixedStore:
    """Read-only view of a flat store scoped to one namespace."""

    def __init__(self, namespace: bytes, store: ReadonlyKeyValueStore):
        self._prefix = namespace_prefix(namespace)
        self._store = store

    def get(self, key: bytes) -> bytes | None:
        return self._store.get(self._prefix + key)


class PrefixedStore(ReadonlyPrefixedStore):
    """Mutable view of a flat store scoped to one namespace."""

    def __init__(self, namespace: bytes, store: KeyValueStore):
        super().__init__(namespace, store)
        self._mutable = store

    def set(self, key: bytes, value: bytes) -> None:
        self._mutable.set(self._prefix + key, value)

    def remove(self, key: bytes) -> None:
        self._mutable.remove(self._prefix + key)
