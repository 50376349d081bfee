"""Encoded Storage — load / may_load / save / remove and namespaced views.

Tests cover:
    - load raises NotFoundError with the record type name on a missing key
    - may_load returns None on a missing key
    - save stores encoded bytes; failed encoding writes nothing
    - remove is a no-op on a missing key
    - namespaces never collide, even when one namespace prefixes another
    - readonly views expose no mutators
"""

import pytest

from alias_registry.core.binary_codec import ALIAS_RECORD_CODEC
from alias_registry.core.domain_types import AliasRecord, OwnerIdentity
from alias_registry.core.encoded_storage import (
    PrefixedStore,
    ReadonlyPrefixedStore,
    load,
    may_load,
    namespace_prefix,
    remove,
    save,
)
from alias_registry.core.errors import EncodeError, NotFoundError

RECORD = AliasRecord(OwnerIdentity("addr1"), "http://x")


def test_load_missing_key_raises_not_found_with_type_name(store):
    with pytest.raises(NotFoundError) as exc:
        load(store, b"missing", ALIAS_RECORD_CODEC)
    assert exc.value.type_name == "AliasRecord"
    assert exc.value.http_status == 404


def test_may_load_missing_key_returns_none(store):
    assert may_load(store, b"missing", ALIAS_RECORD_CODEC) is None


def test_save_then_load(store):
    save(store, b"k", RECORD, ALIAS_RECORD_CODEC)
    assert load(store, b"k", ALIAS_RECORD_CODEC) == RECORD
    assert may_load(store, b"k", ALIAS_RECORD_CODEC) == RECORD
    assert store.get(b"k") == ALIAS_RECORD_CODEC.encode(RECORD)


def test_save_with_unencodable_value_writes_nothing(store):
    with pytest.raises(EncodeError):
        save(store, b"k", AliasRecord(None), ALIAS_RECORD_CODEC)  # type: ignore[arg-type]
    assert len(store) == 0


def test_remove_missing_key_is_noop(store):
    remove(store, b"missing")
    assert len(store) == 0


def test_remove_deletes(store):
    save(store, b"k", RECORD, ALIAS_RECORD_CODEC)
    remove(store, b"k")
    assert may_load(store, b"k", ALIAS_RECORD_CODEC) is None


def test_namespace_prefix_is_length_prefixed():
    assert namespace_prefix(b"aliases") == b"\x00\x07aliases"


def test_namespace_prefix_rejects_oversized_namespace():
    with pytest.raises(ValueError):
        namespace_prefix(b"x" * 0x10000)


def test_prefixed_views_are_isolated(store):
    first = PrefixedStore(b"ns", store)
    second = PrefixedStore(b"other", store)
    first.set(b"k", b"1")
    assert second.get(b"k") is None
    assert first.get(b"k") == b"1"


def test_namespace_that_prefixes_another_does_not_collide(store):
    short = PrefixedStore(b"a", store)
    long = PrefixedStore(b"ab", store)
    short.set(b"bk", b"short")
    long.set(b"k", b"long")
    assert short.get(b"bk") == b"short"
    assert long.get(b"k") == b"long"
    assert len(store) == 2


def test_readonly_view_sees_writes_through_mutable_view(store):
    PrefixedStore(b"ns", store).set(b"k", b"v")
    assert ReadonlyPrefixedStore(b"ns", store).get(b"k") == b"v"


def test_readonly_view_has_no_mutators(store):
    view = ReadonlyPrefixedStore(b"ns", store)
    assert not hasattr(view, "set")
    assert not hasattr(view, "remove")
