"""
Sessions router for session CRUD and editing operations.

This router contains endpoints for:
- /sessions - List and save sessions
- /sessions/{session_id} - Load (hydrated) and delete a session
- /sessions/protocol - Apply a protocol to a whole session
- /sessions/blocks/{block_index}/protocol - Apply a protocol to one block
- /sessions/cardio - Switch cardio mode on or off
- /sessions/blocks/{block_index}/items/{item_index}/group - Toggle grouping
- /sessions/blocks/{block_index}/chains/{chain_index}/rest - Set a chain's rest

Editing endpoints are stateless: the client posts its current session and
gets the edited session back. Only /sessions and /sessions/{session_id}
touch the database.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_delete_session_use_case,
    get_list_sessions_use_case,
    get_load_session_use_case,
    get_save_session_use_case,
)
from application.exceptions import RepositoryError
from application.use_cases import (
    DeleteSessionUseCase,
    ListSessionsUseCase,
    LoadSessionUseCase,
    SaveSessionUseCase,
)
from backend.core.cardio import disable_cardio, enable_cardio
from backend.core.grouping import Chain, derive_chains, set_chain_rest, toggle_group
from backend.core.protocol_engine import (
    CardioSessionError,
    ProtocolApplication,
    apply_block_protocol,
    apply_session_protocol,
)
from domain.models import ProtocolType, Session

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Sessions"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class ApplyProtocolRequest(BaseModel):
    """Request for applying a protocol to a session or block."""
    session: Session
    protocol: ProtocolType
    confirmed: bool = False


class CardioRequest(BaseModel):
    """Request for switching cardio mode."""
    session: Session
    enabled: bool = True


class SessionRequest(BaseModel):
    """Request carrying the client's current session."""
    session: Session


class ChainRestRequest(BaseModel):
    """Request for setting the shared rest of a chain."""
    session: Session
    rest_seconds: int = Field(ge=0)


# =============================================================================
# Helpers
# =============================================================================


def _dump_chains(chains: List[Chain]) -> List[dict]:
    return [
        {
            "indices": chain.indices,
            "kind": chain.kind.value,
            "round_rest": chain.round_rest,
        }
        for chain in chains
    ]


def _application_response(application: ProtocolApplication) -> dict:
    return {
        "session": application.session.model_dump(mode="json"),
        "protocol": application.protocol.value,
        "restructured": application.restructured,
        "needs_confirmation": application.needs_confirmation,
        "warnings": application.warnings,
        "discarded": [item.model_dump(mode="json") for item in application.discarded],
    }


def _check_block_index(session: Session, block_index: int) -> None:
    if not 0 <= block_index < len(session.blocks):
        raise HTTPException(status_code=404, detail=f"Block {block_index} not found")


# =============================================================================
# Persistence Endpoints
# =============================================================================


@router.get("/sessions")
def list_sessions_endpoint(
    use_case: ListSessionsUseCase = Depends(get_list_sessions_use_case),
):
    """List saved sessions (not hydrated)."""
    try:
        sessions = use_case.execute()
    except RepositoryError as e:
        logger.error(f"Failed to list sessions: {e}")
        raise HTTPException(status_code=502, detail="Failed to load sessions")

    return {
        "success": True,
        "sessions": [s.model_dump(mode="json") for s in sessions],
        "count": len(sessions),
    }


@router.post("/sessions")
def save_session_endpoint(
    session: Session,
    use_case: SaveSessionUseCase = Depends(get_save_session_use_case),
):
    """Save a session (create when it has no id, update otherwise).

    Delegates business logic to SaveSessionUseCase.
    """
    result = use_case.execute(session)

    if result.success:
        return {
            "success": True,
            "session_id": result.session_id,
            "is_update": result.is_update,
            "session": result.session.model_dump(mode="json"),
            "message": "Session saved successfully",
        }

    if result.is_validation_failure:
        raise HTTPException(
            status_code=400,
            detail={"message": result.error, "validation_errors": result.validation_errors},
        )
    raise HTTPException(status_code=502, detail=result.error or "Failed to save session")


@router.get("/sessions/{session_id}")
async def get_session_endpoint(
    session_id: str,
    hydrate: bool = Query(default=True, description="Backfill exercise metadata from the catalog"),
    use_case: LoadSessionUseCase = Depends(get_load_session_use_case),
):
    """Load a single session, hydrated for editing."""
    result = await use_case.execute(session_id, hydrate=hydrate)

    if result.not_found:
        raise HTTPException(status_code=404, detail="Session not found")
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error or "Failed to load session")

    return {
        "success": True,
        "session": result.session.model_dump(mode="json"),
        "hydrated_items": result.hydrated_items,
        "hydration_failures": result.hydration_failures,
    }


@router.delete("/sessions/{session_id}")
def delete_session_endpoint(
    session_id: str,
    use_case: DeleteSessionUseCase = Depends(get_delete_session_use_case),
):
    """Delete a session."""
    try:
        deleted = use_case.execute(session_id)
    except RepositoryError as e:
        logger.error(f"Failed to delete session {session_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to delete session")

    if not deleted:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"success": True, "message": "Session deleted successfully"}


# =============================================================================
# Editing Endpoints
# =============================================================================


@router.post("/sessions/protocol")
def apply_session_protocol_endpoint(request: ApplyProtocolRequest):
    """Apply a protocol to the whole session.

    Without ``confirmed`` a session that already has exercises only gets its
    protocol tag updated and the response asks for confirmation.
    """
    try:
        application = apply_session_protocol(request.session, request.protocol, confirmed=request.confirmed)
    except CardioSessionError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return _application_response(application)


@router.post("/sessions/blocks/{block_index}/protocol")
def apply_block_protocol_endpoint(block_index: int, request: ApplyProtocolRequest):
    """Apply a protocol override to one block."""
    _check_block_index(request.session, block_index)
    try:
        application = apply_block_protocol(
            request.session, block_index, request.protocol, confirmed=request.confirmed
        )
    except CardioSessionError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _application_response(application)


@router.post("/sessions/cardio")
def cardio_mode_endpoint(request: CardioRequest):
    """Switch cardio mode on or off."""
    session = enable_cardio(request.session) if request.enabled else disable_cardio(request.session)
    return {"session": session.model_dump(mode="json")}


@router.post("/sessions/blocks/{block_index}/items/{item_index}/group")
def toggle_group_endpoint(block_index: int, item_index: int, request: SessionRequest):
    """Toggle the grouping flag of one item; illegal toggles leave the block unchanged."""
    session = request.session
    _check_block_index(session, block_index)
    block = session.blocks[block_index]
    if not 0 <= item_index < len(block.items):
        raise HTTPException(status_code=404, detail=f"Item {item_index} not found")

    updated = toggle_group(block, item_index)
    return {
        "session": session.replace_block(block_index, updated).model_dump(mode="json"),
        "changed": updated is not block,
        "chains": _dump_chains(derive_chains(updated)),
    }


@router.post("/sessions/blocks/{block_index}/chains/{chain_index}/rest")
def set_chain_rest_endpoint(block_index: int, chain_index: int, request: ChainRestRequest):
    """Set the shared rest of every set of every exercise in a chain."""
    session = request.session
    _check_block_index(session, block_index)
    block = session.blocks[block_index]
    chains = derive_chains(block)
    if not 0 <= chain_index < len(chains):
        raise HTTPException(status_code=404, detail=f"Chain {chain_index} not found")

    updated = set_chain_rest(block, chains[chain_index], request.rest_seconds)
    return {
        "session": session.replace_block(block_index, updated).model_dump(mode="json"),
        "chains": _dump_chains(derive_chains(updated)),
    }
