"""Binary Codec — deterministic little-endian encoding for stored records.

Invariants:
    - encode() is deterministic: equal values always produce identical bytes
    - decode(encode(v)) == v for every value the indexes store
    - Strings and byte strings are u64 length-prefixed; options carry a u8 tag (0 absent, 1 present)
    - Trailing bytes after a complete value are a DecodeError
    - Every failure surfaces as EncodeError / DecodeError carrying the record type name

Design Decisions:
    - struct over a general-purpose serializer: fixed layout, no schema field,
      byte-identical output across processes
    - One codec object per stored type, passed explicitly to the storage adapter
"""

import struct
from typing import Protocol, TypeVar

from alias_registry.core.domain_types import AliasRecord, OwnerIdentity
from alias_registry.core.errors import DecodeError, EncodeError

T = TypeVar("T")

_U8 = struct.Struct("<B")
_U64 = struct.Struct("<Q")

_OPTION_NONE = 0
_OPTION_SOME = 1


class RecordCodec(Protocol[T]):
    """Encode/decode contract consumed by the encoded storage adapter."""
    type_name: str

    def encode(self, value: T) -> bytes: ...
    def decode(self, data: bytes) -> T: ...


# ─── Primitive Writers / Readers ─────────────────────────────────

def _write_bytes(out: bytearray, value: bytes) -> None:
    out += _U64.pack(len(value))
    out += value


def _write_str(out: bytearray, value: str) -> None:
    _write_bytes(out, value.encode("utf-8"))


def _write_optional_str(out: bytearray, value: str | None) -> None:
    if value is None:
        out += _U8.pack(_OPTION_NONE)
        return
    out += _U8.pack(_OPTION_SOME)
    _write_str(out, value)


class _Reader:
    """Cursor over an encoded buffer. Raises ValueError on malformed input."""

    def __init__(self, data: bytes):
        self._data = memoryview(data)
        self._pos = 0

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise ValueError(
                f"unexpected end of input: need {size} bytes at offset {self._pos}",
            )
        chunk = self._data[self._pos:end].tobytes()
        self._pos = end
        return chunk

    def read_u8(self) -> int:
        return _U8.unpack(self._take(_U8.size))[0]

    def read_bytes(self) -> bytes:
        (length,) = _U64.unpack(self._take(_U64.size))
        return self._take(length)

    def read_str(self) -> str:
        return self.read_bytes().decode("utf-8")

    def read_optional_str(self) -> str | None:
        tag = self.read_u8()
        if tag == _OPTION_NONE:
            return None
        if tag == _OPTION_SOME:
            return self.read_str()
        raise ValueError(f"invalid option tag {tag}")

    def finish(self) -> None:
        if self._pos != len(self._data):
            raise ValueError(f"{len(self._data) - self._pos} trailing bytes")


# ─── Codecs ──────────────────────────────────────────────────────

class AliasRecordCodec:
    """AliasRecord <-> string(owner_identity) ++ option<string>(avatar_reference)."""

    type_name = "AliasRecord"

    def encode(self, value: AliasRecord) -> bytes:
        out = bytearray()
        try:
            _write_str(out, value.owner_identity)
            _write_optional_str(out, value.avatar_reference)
        except (AttributeError, TypeError, UnicodeEncodeError) as e:
            raise EncodeError(self.type_name, str(e)) from e
        return bytes(out)

    def decode(self, data: bytes) -> AliasRecord:
        reader = _Reader(data)
        try:
            owner = reader.read_str()
            avatar = reader.read_optional_str()
            reader.finish()
        except (ValueError, struct.error) as e:
            raise DecodeError(self.type_name, str(e)) from e
        return AliasRecord(
            owner_identity=OwnerIdentity(owner), avatar_reference=avatar,
        )


class BytesCodec:
    """Raw byte string <-> u64 length ++ bytes."""

    def __init__(self, type_name: str = "bytes"):
        self.type_name = type_name

    def encode(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(
                self.type_name, f"expected bytes, got {type(value).__name__}",
            )
        out = bytearray()
        _write_bytes(out, bytes(value))
        return bytes(out)

    def decode(self, data: bytes) -> bytes:
        reader = _Reader(data)
        try:
            value = reader.read_bytes()
            reader.finish()
        except (ValueError, struct.error) as e:
            raise DecodeError(self.type_name, str(e)) from e
        return value


ALIAS_RECORD_CODEC = AliasRecordCodec()
ALIAS_KEY_CODEC = BytesCodec("AliasKey")
