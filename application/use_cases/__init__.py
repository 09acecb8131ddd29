"""
Application Use Cases for the session composer.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import SaveSessionUseCase

    use_case = SaveSessionUseCase(session_repo=session_repo)
    result = use_case.execute(session)
"""

from application.use_cases.load_session import (
    DeleteSessionUseCase,
    ListSessionsUseCase,
    LoadSessionResult,
    LoadSessionUseCase,
)
from application.use_cases.modules import (
    ImportModuleResult,
    ImportModuleUseCase,
    SaveModuleResult,
    SaveModuleUseCase,
    block_to_module,
    module_to_block,
)
from application.use_cases.save_session import (
    SaveSessionResult,
    SaveSessionUseCase,
    SessionValidationError,
    compute_metadata,
)

__all__ = [
    # SaveSession
    "SaveSessionUseCase",
    "SaveSessionResult",
    "SessionValidationError",
    "compute_metadata",
    # LoadSession / ListSessions / DeleteSession
    "LoadSessionUseCase",
    "LoadSessionResult",
    "ListSessionsUseCase",
    "DeleteSessionUseCase",
    # Modules
    "SaveModuleUseCase",
    "SaveModuleResult",
    "ImportModuleUseCase",
    "ImportModuleResult",
    "block_to_module",
    "module_to_block",
]
