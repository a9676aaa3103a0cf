"""
SQLite implementation of Pet repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError

from pawplan.core.exceptions import StorageError
from pawplan.infrastructure.local.database import PetORM, get_session_factory
from pawplan.interfaces.pet_repository import IPetRepository
from pawplan.models.pet import Pet, PetCreate


class SqlitePetRepository(IPetRepository):
    """SQLite implementation of pet repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: PetORM) -> Pet:
        """Convert ORM object to Pydantic model."""
        return Pet(
            id=UUID(orm.id),
            user_id=orm.user_id,
            name=orm.name,
            created_at=orm.created_at,
        )

    async def list_owned(self, user_id: str) -> list[Pet]:
        """List pets owned by a user."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(PetORM)
                    .where(PetORM.user_id == user_id)
                    .order_by(PetORM.created_at)
                )
                return [self._orm_to_model(orm) for orm in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list pets: {e}") from e

    async def get(self, user_id: str, pet_id: UUID) -> Optional[Pet]:
        """Get an owned pet by ID."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(PetORM).where(
                        and_(PetORM.id == str(pet_id), PetORM.user_id == user_id)
                    )
                )
                orm = result.scalar_one_or_none()
                return self._orm_to_model(orm) if orm else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load pet {pet_id}: {e}") from e

    async def create(self, user_id: str, pet: PetCreate) -> Pet:
        """Create a pet."""
        try:
            async with self._session_factory() as session:
                orm = PetORM(id=str(uuid4()), user_id=user_id, name=pet.name)
                session.add(orm)
                await session.commit()
                await session.refresh(orm)
                return self._orm_to_model(orm)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create pet: {e}") from e
