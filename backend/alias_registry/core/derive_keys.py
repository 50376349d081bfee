"""Key Derivation — deterministic storage keys for aliases and addresses.

Invariants:
    - Same input always yields the same key
    - Distinct strings yield distinct keys (raw UTF-8, no hashing)
    - alias_from_key is the exact inverse of derive_alias_key
    - Strings that are not valid UTF-8 (lone surrogates) raise EncodeError
"""

from alias_registry.core.domain_types import AddressKey, AliasKey
from alias_registry.core.errors import DecodeError, EncodeError


def _utf8(type_name: str, value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeError(type_name, str(e)) from e


def derive_alias_key(alias: str) -> AliasKey:
    return AliasKey(_utf8("AliasKey", alias))


def derive_address_key(owner_identity: str) -> AddressKey:
    return AddressKey(_utf8("AddressKey", owner_identity))


def alias_from_key(alias_key: bytes) -> str:
    """Recover the alias string from an alias key read back from storage."""
    try:
        return alias_key.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("AliasKey", str(e)) from e
