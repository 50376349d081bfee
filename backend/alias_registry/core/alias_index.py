"""Alias Index — alias-key → AliasRecord, scoped under the "aliases" namespace.

Invariants:
    - get() returns None for an unclaimed alias (absence is not an error)
    - set() is an unconditional upsert; callers check for live aliases first
    - remove() is unconditional and a no-op when absent
    - ReadonlyAliasIndex never exposes set/remove
"""

from alias_registry.core.binary_codec import ALIAS_RECORD_CODEC
from alias_registry.core.domain_types import (
    ALIASES_NAMESPACE, AliasKey, AliasRecord,
)
from alias_registry.core.encoded_storage import (
    PrefixedStore, ReadonlyPrefixedStore, may_load, remove, save,
)
from alias_registry.core.repository_protocols import (
    KeyValueStore, ReadonlyKeyValueStore,
)


class ReadonlyAliasIndex:
    """Lookup-only access to the alias index."""

    def __init__(self, store: ReadonlyKeyValueStore):
        self._view = ReadonlyPrefixedStore(ALIASES_NAMESPACE, store)

    def get(self, alias_key: AliasKey) -> AliasRecord | None:
        return may_load(self._view, alias_key, ALIAS_RECORD_CODEC)


class AliasIndex:
    """Read/write access to the alias index."""

    def __init__(self, store: KeyValueStore):
        self._view = PrefixedStore(ALIASES_NAMESPACE, store)

    def get(self, alias_key: AliasKey) -> AliasRecord | None:
        return may_load(self._view, alias_key, ALIAS_RECORD_CODEC)

    def set(self, alias_key: AliasKey, record: AliasRecord) -> None:
        save(self._view, alias_key, record, ALIAS_RECORD_CODEC)

    def remove(self, alias_key: AliasKey) -> None:
        remove(self._view, alias_key)
