"""
Pet model definitions.

Pets are owned by a user and select which training plan is shown.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PetCreate(BaseModel):
    """Pet creation payload."""

    name: str = Field(..., min_length=1, max_length=200, description="Pet name")


class Pet(PetCreate):
    """Pet as stored."""

    id: UUID
    user_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
