"""Command Dispatch — command → core routing and response shaping.

Invariants:
    - Create/Destroy require a caller; Search does not
    - Core errors propagate unchanged
    - Unknown command types raise TypeError
    - execute_committed commits, and replays once after a lost insert race
"""

import pytest
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from alias_registry.core import registry_core
from alias_registry.core.errors import (
    AliasNotFoundError, AliasTakenError, CallerRequiredError, NotOwnerError,
)
from alias_registry.infrastructure.sql_store import SqlKeyValueStore
from alias_registry.schemas.commands import (
    CreateCommand, CreateResponse, DestroyCommand, DestroyResponse,
    SearchCommand, SearchResponse,
)
from alias_registry.services.command_dispatch import (
    CommandDispatch, execute_committed, handle_create, handle_destroy,
    handle_search,
)


def test_handle_create_shapes_response(store):
    res = handle_create(store, "addrA", CreateCommand(alias="bob", avatar_url="http://x"))
    assert isinstance(res, CreateResponse)
    assert res.alias.alias == "bob"
    assert res.alias.address == "addrA"
    assert res.alias.avatar_url == "http://x"


def test_handle_destroy_returns_success(store):
    handle_create(store, "addrA", CreateCommand(alias="bob"))
    res = handle_destroy(store, "addrA", DestroyCommand(alias="bob"))
    assert res.status.value == "success"
    assert len(store) == 0


def test_handle_search_shapes_response(store):
    handle_create(store, "addrA", CreateCommand(alias="bob"))
    res = handle_search(store, SearchCommand(search_type="address", search_value="addrA"))
    assert isinstance(res, SearchResponse)
    assert res.type == "address"
    assert res.attributes.alias == "bob"


def test_dispatch_routes_each_command(store):
    dispatch = CommandDispatch(store, caller="addrA")
    assert isinstance(dispatch.execute(CreateCommand(alias="bob")), CreateResponse)
    assert isinstance(
        dispatch.execute(SearchCommand(search_type="alias", search_value="bob")),
        SearchResponse,
    )
    assert isinstance(dispatch.execute(DestroyCommand(alias="bob")), DestroyResponse)


def test_dispatch_search_without_caller(store):
    CommandDispatch(store, caller="addrA").execute(CreateCommand(alias="bob"))
    res = CommandDispatch(store).execute(
        SearchCommand(search_type="alias", search_value="bob"),
    )
    assert res.attributes.address == "addrA"


def test_dispatch_mutation_without_caller_raises(store):
    with pytest.raises(CallerRequiredError) as exc:
        CommandDispatch(store).execute(CreateCommand(alias="bob"))
    assert exc.value.http_status == 401
    with pytest.raises(CallerRequiredError):
        CommandDispatch(store, caller="").execute(DestroyCommand(alias="bob"))
    assert len(store) == 0


def test_dispatch_propagates_core_errors(store):
    CommandDispatch(store, caller="addrA").execute(CreateCommand(alias="bob"))
    with pytest.raises(NotOwnerError):
        CommandDispatch(store, caller="addrB").execute(DestroyCommand(alias="bob"))
    with pytest.raises(AliasNotFoundError):
        CommandDispatch(store).execute(
            SearchCommand(search_type="alias", search_value="nobody"),
        )


def test_dispatch_unknown_command_raises_type_error(store):
    class Transfer(BaseModel):
        alias: str

    with pytest.raises(TypeError):
        CommandDispatch(store, caller="addrA").execute(Transfer(alias="bob"))


# ─── execute_committed ───────────────────────────────────────────

def test_execute_committed_persists(test_manager):
    with test_manager.session() as db:
        execute_committed(db, "addrA", CreateCommand(alias="bob"))
    with test_manager.session() as db:
        res = CommandDispatch(SqlKeyValueStore(db)).execute(
            SearchCommand(search_type="alias", search_value="bob"),
        )
    assert res.attributes.address == "addrA"


def test_execute_committed_reports_lost_race_as_domain_error(test_manager, monkeypatch):
    """Another transaction commits 'bob' between our read and our commit."""
    with test_manager.session() as db:
        real_commit = db.commit
        calls = []

        def racing_commit():
            calls.append(1)
            if len(calls) == 1:
                db.rollback()
                registry_core.create(SqlKeyValueStore(db), "addrB", "bob")
                real_commit()
                raise IntegrityError(
                    "INSERT INTO kv_entries", {}, Exception("UNIQUE constraint failed"),
                )
            real_commit()

        monkeypatch.setattr(db, "commit", racing_commit)
        with pytest.raises(AliasTakenError):
            execute_committed(db, "addrA", CreateCommand(alias="bob"))

    with test_manager.session() as db:
        res = CommandDispatch(SqlKeyValueStore(db)).execute(
            SearchCommand(search_type="alias", search_value="bob"),
        )
    assert res.attributes.address == "addrB"
