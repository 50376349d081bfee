"""Error Hierarchy — typed, categorized exceptions for every alias registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; storage and consistency errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AliasRegistryError base: one FastAPI handler catches all
    - Core raises, never returns error values: the host transaction rolls back on raise
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    SERIALIZATION = "serialization"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    alias: str | None = None
    owner: str | None = None
    search_type: str | None = None
    debug_info: dict[str, Any] | None = None


class AliasRegistryError(Exception):
    """Base exception for all alias registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "alias": self.context.alias,
                    "search_type": self.context.search_type,
                },
            }
        }


# ─── Storage Errors ─────────────────────────────────────────────

class NotFoundError(AliasRegistryError):
    """Raw storage load found nothing under the key."""
    def __init__(self, type_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"{type_name} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.type_name = type_name


class EncodeError(AliasRegistryError):
    """A record could not be encoded for storage."""
    def __init__(self, type_name: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to encode {type_name}: {reason}",
            "ENCODE_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.type_name = type_name


class DecodeError(AliasRegistryError):
    """Stored bytes could not be decoded into a record."""
    def __init__(self, type_name: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to decode {type_name}: {reason}",
            "DECODE_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.type_name = type_name


class DatabaseError(AliasRegistryError):
    """Backing store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Domain Errors (400-level) ──────────────────────────────────

class AliasNotFoundError(AliasRegistryError):
    """No alias matches the lookup."""
    def __init__(self, lookup: str, context: ErrorContext | None = None):
        super().__init__(
            f"No alias found for '{lookup}'",
            "ALIAS_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.lookup = lookup


class AliasTakenError(AliasRegistryError):
    """The alias is already claimed."""
    def __init__(self, alias: str, context: ErrorContext | None = None):
        super().__init__(
            f"Alias '{alias}' is already taken",
            "ALIAS_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.alias = alias


class AddressAlreadyHasAliasError(AliasRegistryError):
    """The caller's address already owns an alias."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            "Address already has an alias. Destroy it before creating another.",
            "ADDRESS_ALREADY_HAS_ALIAS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.address = address


class NotOwnerError(AliasRegistryError):
    """Caller tried to mutate an alias owned by another address."""
    def __init__(self, alias: str, context: ErrorContext | None = None):
        super().__init__(
            f"Only the owner of alias '{alias}' can destroy it",
            "NOT_OWNER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )
        self.alias = alias


class CallerRequiredError(AliasRegistryError):
    """A mutating command arrived without an authenticated caller."""
    def __init__(self, source: str = "caller", context: ErrorContext | None = None):
        super().__init__(
            f"Missing {source}: mutating commands require an authenticated caller",
            "CALLER_REQUIRED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 401,
        )
        self.source = source


class UnsupportedSearchTypeError(AliasRegistryError):
    """search_type is not one of the supported lookup dimensions."""
    def __init__(self, search_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported search type '{search_type}'. Use 'alias' or 'address'.",
            "UNSUPPORTED_SEARCH_TYPE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.search_type = search_type


# ─── Consistency Errors (500-level) ─────────────────────────────

class InternalInconsistencyError(AliasRegistryError):
    """Owner index points at an alias that the alias index does not hold."""
    def __init__(self, address: str, alias_key: bytes, context: ErrorContext | None = None):
        super().__init__(
            "Alias registry indexes are inconsistent",
            "INTERNAL_INCONSISTENCY", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.address = address
        self.alias_key = alias_key
