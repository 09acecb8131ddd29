"""
Modules router for the reusable block library.

- GET /modules - List saved modules
- POST /modules - Save a block as a module
- POST /modules/{module_id}/import - Append a module to a session as a new block
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.deps import get_import_module_use_case, get_module_repo, get_save_module_use_case
from application.exceptions import RepositoryError
from application.ports import ModuleRepository
from application.use_cases import ImportModuleUseCase, SaveModuleUseCase
from domain.models import Block, Session

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Modules"],
)


class SaveModuleRequest(BaseModel):
    """Request for saving a block to the module library."""
    block: Block


class ImportModuleRequest(BaseModel):
    """Request for importing a module into the client's session."""
    session: Session


@router.get("/modules")
def list_modules_endpoint(module_repo: ModuleRepository = Depends(get_module_repo)):
    """List the module library, newest first."""
    try:
        modules = module_repo.get_all()
    except RepositoryError as e:
        logger.error(f"Failed to list modules: {e}")
        raise HTTPException(status_code=502, detail="Failed to load modules")

    return {
        "success": True,
        "modules": [m.model_dump(mode="json") for m in modules],
        "count": len(modules),
    }


@router.post("/modules")
def save_module_endpoint(
    request: SaveModuleRequest,
    use_case: SaveModuleUseCase = Depends(get_save_module_use_case),
):
    """Save a block as a reusable module."""
    result = use_case.execute(request.block)
    if result.success:
        return {"success": True, "module_id": result.module_id, "message": "Module saved successfully"}

    if result.validation_errors:
        raise HTTPException(
            status_code=400,
            detail={"message": result.error, "validation_errors": result.validation_errors},
        )
    raise HTTPException(status_code=502, detail=result.error or "Failed to save module")


@router.post("/modules/{module_id}/import")
def import_module_endpoint(
    module_id: str,
    request: ImportModuleRequest,
    use_case: ImportModuleUseCase = Depends(get_import_module_use_case),
):
    """Append a module to the posted session as a new block."""
    result = use_case.execute(request.session, module_id)

    if result.not_found:
        raise HTTPException(status_code=404, detail="Module not found")
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error or "Failed to import module")

    return {
        "session": result.session.model_dump(mode="json"),
        "block": result.block.model_dump(mode="json"),
    }
