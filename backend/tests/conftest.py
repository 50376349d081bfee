"""Root conftest — shared test configuration and index invariant checks.

Invariants:
    - Tests never touch a real database file (DATABASE_URL forced to in-memory SQLite)
    - check_consistency() verifies both cross-index invariants and uniqueness
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from alias_registry.core.binary_codec import (  # noqa: E402
    ALIAS_KEY_CODEC, ALIAS_RECORD_CODEC,
)
from alias_registry.core.domain_types import (  # noqa: E402
    ADDRESSES_ALIASES_NAMESPACE, ALIASES_NAMESPACE,
)
from alias_registry.core.encoded_storage import namespace_prefix  # noqa: E402
from alias_registry.infrastructure.memory_store import MemoryKeyValueStore  # noqa: E402


def split_indexes(store: MemoryKeyValueStore) -> tuple[dict, dict]:
    """Decode a memory store into ({alias_key: record}, {address_key: alias_key})."""
    alias_prefix = namespace_prefix(ALIASES_NAMESPACE)
    owner_prefix = namespace_prefix(ADDRESSES_ALIASES_NAMESPACE)
    aliases, owners = {}, {}
    for key, value in store.snapshot().items():
        if key.startswith(alias_prefix):
            aliases[key[len(alias_prefix):]] = ALIAS_RECORD_CODEC.decode(value)
        elif key.startswith(owner_prefix):
            owners[key[len(owner_prefix):]] = ALIAS_KEY_CODEC.decode(value)
        else:
            raise AssertionError(f"key outside known namespaces: {key!r}")
    return aliases, owners


def check_consistency(store: MemoryKeyValueStore) -> None:
    aliases, owners = split_indexes(store)
    for address_key, alias_key in owners.items():
        assert alias_key in aliases, "owner entry points at a missing alias"
        assert aliases[alias_key].owner_identity.encode("utf-8") == address_key
    for alias_key, record in aliases.items():
        address_key = record.owner_identity.encode("utf-8")
        assert owners.get(address_key) == alias_key, "alias without matching owner entry"
    assert len(set(owners.values())) == len(owners), "two owners share an alias"


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def assert_consistent():
    return check_consistency
