"""Alias Routes — HTTP binding of the Create / Destroy / Search commands.

Invariants:
    - One request == one database transaction; any raised error rolls it back
    - Caller identity comes from the configured header (default X-Caller-Address),
      set by an upstream authenticating proxy — no authentication happens here
    - Mutations without a caller header return 401 CALLER_REQUIRED in the
      standard error envelope
    - DELETE accepts every alias POST accepts, including ones containing "/"
    - Routes contain no business logic: they delegate to services/command_dispatch

Design Decisions:
    - Synchronous handlers: the core is synchronous, FastAPI runs them in its threadpool
    - Explicit commit in the route so commit failures surface before the response
"""

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from alias_registry.config import get_settings
from alias_registry.core.errors import CallerRequiredError
from alias_registry.infrastructure.database import get_db
from alias_registry.infrastructure.sql_store import SqlKeyValueStore
from alias_registry.schemas.commands import (
    CreateCommand,
    CreateResponse,
    DestroyCommand,
    DestroyResponse,
    SearchCommand,
    SearchResponse,
)
from alias_registry.services.command_dispatch import (
    CommandDispatch, execute_committed,
)

router = APIRouter(prefix="/api/v1/aliases", tags=["aliases"])


def require_caller(request: Request) -> str:
    """Authenticated caller address, or 401."""
    header = get_settings().caller_header
    caller = (request.headers.get(header) or "").strip()
    if not caller:
        raise CallerRequiredError(f"{header} header")
    return caller


@router.post(
    "", response_model=CreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_alias(
    body: CreateCommand,
    caller: str = Depends(require_caller),
    db: Session = Depends(get_db),
):
    """Claim an alias for the calling address."""
    return execute_committed(db, caller, body)


@router.get("/search", response_model=SearchResponse)
def search_alias(
    search_type: str = Query(..., min_length=1),
    search_value: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """Resolve an alias by name or by owner address."""
    command = SearchCommand(search_type=search_type, search_value=search_value)
    return CommandDispatch(SqlKeyValueStore(db)).execute(command)


@router.delete("/{alias:path}", response_model=DestroyResponse)
def destroy_alias(
    alias: str,
    caller: str = Depends(require_caller),
    db: Session = Depends(get_db),
):
    """Release an alias. Only its owner may do so."""
    return execute_committed(db, caller, DestroyCommand(alias=alias))
