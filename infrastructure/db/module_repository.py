"""
Supabase implementation of ModuleRepository.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client

from application.exceptions import RepositoryError
from domain.converters import db_row_to_module, module_to_db_row
from domain.models import Module

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "training_modules"


class SupabaseModuleRepository:
    """Supabase implementation of ModuleRepository protocol."""

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        self._client = client
        self._table = table

    def save(self, module: Module) -> str:
        """Insert a module and return its id."""
        data = module_to_db_row(module)
        data.pop("id", None)
        if not data.get("created_at"):
            data["created_at"] = datetime.now(timezone.utc).isoformat()

        try:
            result = self._client.table(self._table).insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to save module '{module.name}': {e}")
            raise RepositoryError(f"Failed to save module: {e}") from e

        if not result.data:
            raise RepositoryError("Module insert returned no row")
        module_id = str(result.data[0]["id"])
        logger.info(f"Module saved: {module_id}")
        return module_id

    def get(self, module_id: str) -> Optional[Module]:
        try:
            result = self._client.table(self._table).select("*").eq("id", module_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get module {module_id}: {e}")
            raise RepositoryError(f"Failed to get module: {e}") from e
        if not result.data:
            return None
        try:
            return db_row_to_module(result.data[0])
        except ValueError as e:
            logger.error(f"Unreadable module row {module_id}: {e}")
            raise RepositoryError(f"Unreadable module row {module_id}: {e}") from e

    def get_all(self) -> List[Module]:
        try:
            result = self._client.table(self._table).select("*").order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list modules: {e}")
            raise RepositoryError(f"Failed to list modules: {e}") from e

        modules: List[Module] = []
        for row in result.data or []:
            try:
                modules.append(db_row_to_module(row))
            except ValueError as e:
                logger.error(f"Skipping unreadable module row {row.get('id')}: {e}")
        return modules
