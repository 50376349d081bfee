"""Command Dispatch — explicit routing from command type to registry core call.

Invariants:
    - Every command -> handler mapping is visible — no getattr magic, no auto-discovery
    - Mutating commands require a caller (CallerRequiredError); search does not
    - Core errors propagate unchanged so the host transaction rolls back
    - Unknown command types raise TypeError (programming error, not user input)
    - A commit lost to a concurrent claim of the same key is replayed once, so the
      caller sees ALIAS_TAKEN / ADDRESS_ALREADY_HAS_ALIAS instead of a database error

Design Decisions:
    - Explicit dict over isinstance chains: adding a command means editing one mapping
    - Response shaping lives here, not in core
"""

import logging
from typing import Callable

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from alias_registry.core import registry_core
from alias_registry.core.errors import CallerRequiredError
from alias_registry.core.repository_protocols import (
    KeyValueStore, ReadonlyKeyValueStore,
)
from alias_registry.infrastructure.sql_store import SqlKeyValueStore
from alias_registry.schemas.commands import (
    AliasAttributes,
    CreateCommand,
    CreateResponse,
    DestroyCommand,
    DestroyResponse,
    SearchCommand,
    SearchResponse,
)

logger = logging.getLogger(__name__)


def handle_create(
    store: KeyValueStore, caller: str, command: CreateCommand,
) -> CreateResponse:
    record = registry_core.create(
        store, caller, command.alias, command.avatar_url,
    )
    return CreateResponse(
        alias=AliasAttributes.from_record(command.alias, record),
    )


def handle_destroy(
    store: KeyValueStore, caller: str, command: DestroyCommand,
) -> DestroyResponse:
    registry_core.destroy(store, caller, command.alias)
    return DestroyResponse()


def handle_search(
    store: ReadonlyKeyValueStore, command: SearchCommand,
) -> SearchResponse:
    hit = registry_core.search(store, command.search_type, command.search_value)
    return SearchResponse.from_hit(hit)


class CommandDispatch:
    """Routes a command to its handler. One instance per host transaction."""

    def __init__(self, store: KeyValueStore, caller: str | None = None):
        self._store = store
        self._caller = caller
        self._handlers: dict[type, Callable[[BaseModel], BaseModel]] = {
            CreateCommand: lambda c: handle_create(self._store, self._require_caller(), c),
            DestroyCommand: lambda c: handle_destroy(self._store, self._require_caller(), c),
            SearchCommand: lambda c: handle_search(self._store, c),
        }

    def execute(self, command: BaseModel) -> BaseModel:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command type: {type(command).__name__}")
        logger.debug(f"Dispatching {type(command).__name__}")
        return handler(command)

    def _require_caller(self) -> str:
        if not self._caller:
            raise CallerRequiredError()
        return self._caller


def execute_committed(
    db: Session, caller: str | None, command: BaseModel,
) -> BaseModel:
    """Run a command against the SQL store and commit it.

    Two transactions can both see a key as free and race to insert it; the
    loser's commit fails with IntegrityError. Replaying the command once
    against the winner's committed state reports the precise domain error.
    """
    try:
        response = CommandDispatch(SqlKeyValueStore(db), caller).execute(command)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            f"Concurrent write conflict, replaying {type(command).__name__}: {e.orig}",
        )
        response = CommandDispatch(SqlKeyValueStore(db), caller).execute(command)
        db.commit()
    return response
