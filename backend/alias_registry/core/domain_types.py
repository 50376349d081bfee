"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AliasKey and AddressKey are the only key types the indexes accept
    - AliasRecord is immutable; updates mean writing a new record
    - All valid search dimensions encoded as Enums — no raw string matching in core

Design Decisions:
    - NewType over dataclass wrappers for keys: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OwnerIdentity = NewType("OwnerIdentity", str)   # canonical human-readable address
AliasKey = NewType("AliasKey", bytes)
AddressKey = NewType("AddressKey", bytes)


# ─── Namespaces ──────────────────────────────────────────────────

ALIASES_NAMESPACE = b"aliases"
ADDRESSES_ALIASES_NAMESPACE = b"addresses_aliases"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class AliasRecord:
    """Stored value of a claimed alias."""
    owner_identity: OwnerIdentity
    avatar_reference: str | None = None


@dataclass(frozen=True)
class SearchHit:
    """Outcome of a successful search — which branch matched and what it found."""
    kind: "SearchType"
    alias: str
    record: AliasRecord


# ─── Enums ───────────────────────────────────────────────────────

class SearchType(str, Enum):
    """Supported lookup dimensions for search."""
    ALIAS = "alias"
    ADDRESS = "address"


class ResponseStatus(str, Enum):
    """Status values of mutation responses. Failures are raised, never returned."""
    SUCCESS = "success"
    FAILURE = "failure"
