"""
Pets API endpoints.

Read-only pet selector for the training plan.
"""

from fastapi import APIRouter, HTTPException, status

from pawplan.api.deps import CurrentUser, PetRepo
from pawplan.core.exceptions import StorageError
from pawplan.models.pet import Pet

router = APIRouter()


@router.get("", response_model=list[Pet])
async def list_pets(user: CurrentUser, pet_repo: PetRepo):
    """List the current user's pets."""
    try:
        return await pet_repo.list_owned(user.id)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        )
