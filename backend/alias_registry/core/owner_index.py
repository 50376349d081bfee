"""Owner Index — address-key → alias-key, scoped under "addresses_aliases".

Invariants:
    - Value is the raw alias-key bytes, never a full record
    - get() answers "does this address own an alias, and which" — None means no alias
    - ReadonlyOwnerIndex never exposes set/remove
"""

from alias_registry.core.binary_codec import ALIAS_KEY_CODEC
from alias_registry.core.domain_types import (
    ADDRESSES_ALIASES_NAMESPACE, AddressKey, AliasKey,
)
from alias_registry.core.encoded_storage import (
    PrefixedStore, ReadonlyPrefixedStore, may_load, remove, save,
)
from alias_registry.core.repository_protocols import (
    KeyValueStore, ReadonlyKeyValueStore,
)


def _as_alias_key(raw: bytes | None) -> AliasKey | None:
    return AliasKey(raw) if raw is not None else None


class ReadonlyOwnerIndex:
    """Lookup-only access to the owner index."""

    def __init__(self, store: ReadonlyKeyValueStore):
        self._view = ReadonlyPrefixedStore(ADDRESSES_ALIASES_NAMESPACE, store)

    def get(self, address_key: AddressKey) -> AliasKey | None:
        return _as_alias_key(may_load(self._view, address_key, ALIAS_KEY_CODEC))


class OwnerIndex:
    """Read/write access to the owner index."""

    def __init__(self, store: KeyValueStore):
        self._view = PrefixedStore(ADDRESSES_ALIASES_NAMESPACE, store)

    def get(self, address_key: AddressKey) -> AliasKey | None:
        return _as_alias_key(may_load(self._view, address_key, ALIAS_KEY_CODEC))

    def set(self, address_key: AddressKey, alias_key: AliasKey) -> None:
        save(self._view, address_key, alias_key, ALIAS_KEY_CODEC)

    def remove(self, address_key: AddressKey) -> None:
        remove(self._view, address_key)
