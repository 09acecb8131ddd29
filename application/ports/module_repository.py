"""
Module Repository Interface (Port).

Modules are blocks saved to a reusable library so they can be imported
into other sessions.
"""
from typing import List, Optional, Protocol

from domain.models import Module


class ModuleRepository(Protocol):
    """Abstract interface for the module library."""

    def save(self, module: Module) -> str:
        """
        Persist a module.

        Returns:
            The generated module id
        """
        ...

    def get(self, module_id: str) -> Optional[Module]:
        """Get a module by id, or None if not found."""
        ...

    def get_all(self) -> List[Module]:
        """Get all modules, newest first."""
        ...
