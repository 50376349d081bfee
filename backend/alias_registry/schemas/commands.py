"""Command Schemas — Pydantic models for the Create / Destroy / Search command surface.

Invariants:
    - Aliases and search values are stripped BEFORE length checks: 1-256 chars after stripping
    - Create, Destroy and Search normalise alias text identically, so a created
      alias is always reachable by destroy and search with the same input
    - CreateCommand.avatar_url: optional, at most 2048 chars, format unconstrained
    - SearchCommand.search_type is a free string: unsupported values are a core
      error (UNSUPPORTED_SEARCH_TYPE), not a schema error
    - DestroyResponse.status is always "success"; failures are raised

Design Decisions:
    - Annotated StringConstraints over field_validator: strip runs inside the
      string validator, ahead of min/max length
    - AliasAttributes carries the alias name alongside the stored record
"""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from alias_registry.core.domain_types import (
    AliasRecord, ResponseStatus, SearchHit,
)

ALIAS_MAX_LENGTH = 256
AVATAR_URL_MAX_LENGTH = 2048

AliasText = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=1, max_length=ALIAS_MAX_LENGTH,
    ),
]


# --- Commands ----------------------------------------------------------------

class CreateCommand(BaseModel):
    """Claim an alias for the caller."""
    alias: AliasText
    avatar_url: str | None = Field(None, max_length=AVATAR_URL_MAX_LENGTH)


class DestroyCommand(BaseModel):
    """Release the caller's alias."""
    alias: AliasText


class SearchCommand(BaseModel):
    """Resolve an alias by name or by owner address."""
    search_type: str = Field(min_length=1)
    search_value: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# --- Responses ---------------------------------------------------------------

class AliasAttributes(BaseModel):
    """Public view of a claimed alias."""
    alias: str
    avatar_url: str | None = None
    address: str

    @classmethod
    def from_record(cls, alias: str, record: AliasRecord) -> "AliasAttributes":
        return cls(
            alias=alias,
            avatar_url=record.avatar_reference,
            address=record.owner_identity,
        )


class CreateResponse(BaseModel):
    alias: AliasAttributes


class DestroyResponse(BaseModel):
    status: ResponseStatus = ResponseStatus.SUCCESS


class SearchResponse(BaseModel):
    type: str
    attributes: AliasAttributes

    @classmethod
    def from_hit(cls, hit: SearchHit) -> "SearchResponse":
        return cls(
            type=hit.kind.value,
            attributes=AliasAttributes.from_record(hit.alias, hit.record),
        )
