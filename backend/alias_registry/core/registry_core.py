"""Registry Core — create, destroy and search over the coupled alias/owner indexes.

Invariants:
    - Every owner-index entry (addr → alias) has an alias-index entry whose owner is addr
    - Every alias-index entry has an owner-index entry mapping its owner back to it
    - One alias per address, one owner per alias
    - create writes the alias index first, then the owner index
    - destroy removes the alias index entry first, then the owner index entry
      derived from the caller (never re-read from storage)
    - Errors propagate; nothing is caught mid-call. The host transaction rolls
      back partial writes.
    - search takes a readonly store and never mutates

Design Decisions:
    - Plain functions over a service class: the store is the only state
    - Unknown search types rejected before any storage read
"""

import logging

from alias_registry.core.alias_index import AliasIndex, ReadonlyAliasIndex
from alias_registry.core.derive_keys import (
    alias_from_key, derive_address_key, derive_alias_key,
)
from alias_registry.core.domain_types import (
    AliasRecord, OwnerIdentity, SearchHit, SearchType,
)
from alias_registry.core.errors import (
    AddressAlreadyHasAliasError,
    AliasNotFoundError,
    AliasTakenError,
    ErrorContext,
    InternalInconsistencyError,
    NotOwnerError,
    UnsupportedSearchTypeError,
)
from alias_registry.core.owner_index import OwnerIndex, ReadonlyOwnerIndex
from alias_registry.core.repository_protocols import (
    KeyValueStore, ReadonlyKeyValueStore,
)

logger = logging.getLogger(__name__)


def create(
    store: KeyValueStore,
    caller: str,
    alias: str,
    avatar_url: str | None = None,
) -> AliasRecord:
    """Claim alias for caller. Raises AliasTakenError / AddressAlreadyHasAliasError."""
    aliases = AliasIndex(store)
    owners = OwnerIndex(store)
    alias_key = derive_alias_key(alias)
    address_key = derive_address_key(caller)

    if aliases.get(alias_key) is not None:
        raise AliasTakenError(alias, ErrorContext(alias=alias, owner=caller))
    if owners.get(address_key) is not None:
        raise AddressAlreadyHasAliasError(
            caller, ErrorContext(alias=alias, owner=caller),
        )

    record = AliasRecord(
        owner_identity=OwnerIdentity(caller), avatar_reference=avatar_url,
    )
    aliases.set(alias_key, record)
    owners.set(address_key, alias_key)

    logger.info("Alias created", extra={"alias": alias, "owner": caller})
    return record


def destroy(store: KeyValueStore, caller: str, alias: str) -> None:
    """Release alias. Only its owner may do so."""
    aliases = AliasIndex(store)
    owners = OwnerIndex(store)
    alias_key = derive_alias_key(alias)

    record = aliases.get(alias_key)
    if record is None:
        raise AliasNotFoundError(alias, ErrorContext(alias=alias, owner=caller))
    if record.owner_identity != caller:
        raise NotOwnerError(alias, ErrorContext(alias=alias, owner=caller))

    aliases.remove(alias_key)
    owners.remove(derive_address_key(caller))

    logger.info("Alias destroyed", extra={"alias": alias, "owner": caller})


def search(
    store: ReadonlyKeyValueStore, search_type: str, search_value: str,
) -> SearchHit:
    """Resolve an alias by name ("alias") or by owner address ("address")."""
    try:
        kind = SearchType(search_type)
    except ValueError:
        raise UnsupportedSearchTypeError(
            search_type, ErrorContext(search_type=search_type),
        ) from None

    logger.debug(
        "Alias search",
        extra={"search_type": kind.value, "search_value": search_value},
    )
    if kind is SearchType.ALIAS:
        return _search_by_alias(store, search_value)
    return _search_by_address(store, search_value)


def _search_by_alias(store: ReadonlyKeyValueStore, alias: str) -> SearchHit:
    record = ReadonlyAliasIndex(store).get(derive_alias_key(alias))
    if record is None:
        raise AliasNotFoundError(
            alias, ErrorContext(alias=alias, search_type=SearchType.ALIAS.value),
        )
    return SearchHit(kind=SearchType.ALIAS, alias=alias, record=record)


def _search_by_address(store: ReadonlyKeyValueStore, address: str) -> SearchHit:
    alias_key = ReadonlyOwnerIndex(store).get(derive_address_key(address))
    if alias_key is None:
        raise AliasNotFoundError(
            address,
            ErrorContext(owner=address, search_type=SearchType.ADDRESS.value),
        )

    record = ReadonlyAliasIndex(store).get(alias_key)
    if record is None:
        logger.error(
            "Owner index references a missing alias",
            extra={"owner": address, "error_code": "INTERNAL_INCONSISTENCY"},
        )
        raise InternalInconsistencyError(
            address, alias_key,
            ErrorContext(
                owner=address,
                search_type=SearchType.ADDRESS.value,
                debug_info={"alias_key": alias_key.hex()},
            ),
        )
    return SearchHit(
        kind=SearchType.ADDRESS, alias=alias_from_key(alias_key), record=record,
    )
