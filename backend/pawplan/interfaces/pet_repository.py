"""
Pet repository interface.

The training plan only reads pets; creation exists for seeding.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from pawplan.models.pet import Pet, PetCreate


class IPetRepository(ABC):
    """Abstract interface for pet persistence."""

    @abstractmethod
    async def list_owned(self, user_id: str) -> list[Pet]:
        """
        List pets owned by a user.

        Args:
            user_id: Owner user ID

        Returns:
            Pets ordered by creation time
        """
        pass

    @abstractmethod
    async def get(self, user_id: str, pet_id: UUID) -> Optional[Pet]:
        """Get an owned pet by ID, None if missing or owned by someone else."""
        pass

    @abstractmethod
    async def create(self, user_id: str, pet: PetCreate) -> Pet:
        """Create a pet owned by ``user_id``."""
        pass
