"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from pawplan.core.config import get_settings
from pawplan.core.exceptions import AuthenticationError
from pawplan.interfaces.auth_provider import IAuthProvider, User
from pawplan.interfaces.pet_repository import IPetRepository
from pawplan.interfaces.training_task_repository import ITrainingTaskRepository


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_training_task_repository() -> ITrainingTaskRepository:
    """Get training task repository instance."""
    from pawplan.infrastructure.local.training_task_repository import (
        SqliteTrainingTaskRepository,
    )
    return SqliteTrainingTaskRepository()


@lru_cache()
def get_pet_repository() -> IPetRepository:
    """Get pet repository instance."""
    from pawplan.infrastructure.local.pet_repository import SqlitePetRepository
    return SqlitePetRepository()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from pawplan.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_ENABLED)


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With authentication disabled, returns the development user.
    """
    if not auth_provider.is_enabled():
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

TrainingTaskRepo = Annotated[ITrainingTaskRepository, Depends(get_training_task_repository)]
PetRepo = Annotated[IPetRepository, Depends(get_pet_repository)]
CurrentUser = Annotated[User, Depends(get_current_user)]
