"""
Module library use cases.

A module is a block saved for reuse. Saving keeps the block's lineage id;
importing creates a brand-new block in the target session:

- fresh transient ``id`` for the block and every item
- ``stable_id`` inherited from the module (or its record id)
- name suffixed with " (Imp)"
- exercise configs reset to defaults
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from application.exceptions import RepositoryError
from application.ports import ModuleRepository
from backend.core.grouping import normalize_grouping
from domain.models import (
    MODULE_PROTOCOL,
    Block,
    ExerciseConfig,
    ExerciseItem,
    Module,
    Session,
    WorkItem,
    new_id,
)

logger = logging.getLogger(__name__)

IMPORT_SUFFIX = " (Imp)"


@dataclass
class SaveModuleResult:
    """Result of the SaveModule use case execution."""

    success: bool
    module_id: Optional[str] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


@dataclass
class ImportModuleResult:
    """Result of the ImportModule use case execution."""

    success: bool
    session: Optional[Session] = None
    block: Optional[Block] = None
    not_found: bool = False
    error: Optional[str] = None


def block_to_module(block: Block) -> Module:
    """Snapshot a block as a library module."""
    return Module(
        stable_id=block.stable_id,
        name=block.name,
        description=block.description,
        protocol=MODULE_PROTOCOL,
        items=[item.duplicate() for item in block.items],
        created_at=datetime.now(timezone.utc),
    )


def module_to_block(module: Module) -> Block:
    """
    Build a new session block from a module.

    Examples:
        >>> block = module_to_block(Module(id="m-1", name="Core"))
        >>> block.name, block.stable_id
        ('Core (Imp)', 'm-1')
    """
    items: List[WorkItem] = []
    for item in module.items:
        if isinstance(item, ExerciseItem):
            item = item.model_copy(update={"config": ExerciseConfig()})
        items.append(item.duplicate())

    block = Block(
        id=new_id(),
        stable_id=module.lineage_id or new_id(),
        name=f"{module.name}{IMPORT_SUFFIX}",
        description=module.description,
        items=items,
    )
    return normalize_grouping(block)


class SaveModuleUseCase:
    """
    Use case for saving a block to the module library.

    Usage:
        >>> result = SaveModuleUseCase(module_repo=repo).execute(block)
    """

    def __init__(self, module_repo: ModuleRepository) -> None:
        self._module_repo = module_repo

    def execute(self, block: Block) -> SaveModuleResult:
        if not block.name.strip():
            return SaveModuleResult(
                success=False,
                error="Module validation failed",
                validation_errors=["Module name is required"],
            )

        try:
            module_id = self._module_repo.save(block_to_module(block))
        except RepositoryError as e:
            logger.error(f"Failed to save module '{block.name}': {e}")
            return SaveModuleResult(success=False, error=str(e))

        logger.info(f"Saved block '{block.name}' as module {module_id}")
        return SaveModuleResult(success=True, module_id=module_id)


class ImportModuleUseCase:
    """Use case for appending a library module to a session as a new block."""

    def __init__(self, module_repo: ModuleRepository) -> None:
        self._module_repo = module_repo

    def execute(self, session: Session, module_id: str) -> ImportModuleResult:
        try:
            module = self._module_repo.get(module_id)
        except RepositoryError as e:
            logger.error(f"Failed to load module {module_id}: {e}")
            return ImportModuleResult(success=False, error=str(e))

        if module is None:
            return ImportModuleResult(success=False, not_found=True, error=f"Module {module_id} not found")

        block = module_to_block(module)
        logger.info(f"Imported module {module_id} into session '{session.title}' as block {block.id}")
        return ImportModuleResult(
            success=True,
            session=session.with_blocks(list(session.blocks) + [block]),
            block=block,
        )
