"""
Test Fixtures and Helpers for Fake Repositories.

This module provides pytest fixtures and helper functions for easily overriding
FastAPI dependencies with fake implementations.

Usage:
    from tests.fakes.conftest import override_dependency, reset_overrides

    def test_something():
        reset_overrides()
        override_dependency(get_session_repo, FakeSessionRepository())

        # Test code here...

        reset_overrides()
"""

import types
from typing import Any, Callable

import pytest

RepoGetter = Callable[..., Any]


def reset_overrides() -> None:
    """
    Reset all FastAPI dependency overrides.

    Call this in test setup/teardown to ensure clean state.
    """
    from backend.main import app

    app.dependency_overrides.clear()


def override_dependency(getter: RepoGetter, implementation: Any) -> None:
    """
    Override a FastAPI dependency with a fake implementation.

    Args:
        getter: The dependency getter function (e.g., get_session_repo)
        implementation: The fake instance or a factory function
    """
    from backend.main import app

    if isinstance(implementation, types.FunctionType):
        app.dependency_overrides[getter] = implementation
    else:
        app.dependency_overrides[getter] = lambda: implementation


@pytest.fixture
def override_deps() -> Callable[[RepoGetter, Any], Any]:
    """
    Fixture that provides a dependency override helper.

    Automatically resets overrides before each test and cleans up after.
    """
    reset_overrides()

    def _override(getter: RepoGetter, implementation: Any) -> Any:
        override_dependency(getter, implementation)
        return implementation

    yield _override

    reset_overrides()
