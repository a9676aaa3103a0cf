"""
SQLite implementation of the training task repository.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID, uuid4

from sqlalchemy import case, delete, select
from sqlalchemy import update as sql_update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pawplan.core.exceptions import StorageError
from pawplan.infrastructure.local.database import TrainingTaskORM, get_session_factory
from pawplan.interfaces.training_task_repository import ITrainingTaskRepository
from pawplan.models.enums import DayOfWeek, TaskCategory
from pawplan.models.training_task import TrainingTask, TrainingTaskRow, TrainingTaskUpdate

_DAY_SORT_KEY = case(
    {day.value: day.weekday for day in DayOfWeek},
    value=TrainingTaskORM.day_of_week,
    else_=len(DayOfWeek),
)


class SqliteTrainingTaskRepository(ITrainingTaskRepository):
    """SQLite implementation of training task repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            raise StorageError(f"Training task storage failed: {e}") from e

    def _orm_to_model(self, orm: TrainingTaskORM) -> TrainingTask:
        """Convert ORM object to Pydantic model."""
        return TrainingTask(
            id=UUID(orm.id),
            pet_id=UUID(orm.pet_id),
            user_id=orm.user_id,
            day_of_week=DayOfWeek(orm.day_of_week),
            title=orm.title,
            category=TaskCategory(orm.category),
            description=orm.description or "",
            time=orm.time,
            duration_minutes=orm.duration_minutes,
            completed=bool(orm.completed),
            order=orm.order or 0,
            created_at=orm.created_at,
        )

    async def list_by_pet(self, pet_id: UUID) -> list[TrainingTask]:
        """List all tasks of a pet in partition order."""
        async with self._session() as session:
            result = await session.execute(
                select(TrainingTaskORM)
                .where(TrainingTaskORM.pet_id == str(pet_id))
                .order_by(_DAY_SORT_KEY, TrainingTaskORM.order, TrainingTaskORM.created_at)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def insert(self, row: TrainingTaskRow) -> TrainingTask:
        """Insert a new task."""
        async with self._session() as session:
            orm = TrainingTaskORM(
                id=str(uuid4()),
                pet_id=str(row.pet_id),
                user_id=row.user_id,
                day_of_week=row.day_of_week.value,
                title=row.title,
                category=row.category.value,
                description=row.description,
                time=row.time,
                duration_minutes=row.duration_minutes,
                completed=row.completed,
                order=row.order,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def update_fields(self, task_id: UUID, update: TrainingTaskUpdate) -> bool:
        """Write only the explicitly set fields."""
        values = {}
        for field, value in update.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            if hasattr(value, "value"):  # Enum
                value = value.value
            values[field] = value
        if not values:
            return True

        async with self._session() as session:
            result = await session.execute(
                sql_update(TrainingTaskORM)
                .where(TrainingTaskORM.id == str(task_id))
                .values(**values)
            )
            await session.commit()
            return result.rowcount > 0

    async def delete(self, task_id: UUID) -> bool:
        """Delete a task."""
        async with self._session() as session:
            result = await session.execute(
                delete(TrainingTaskORM).where(TrainingTaskORM.id == str(task_id))
            )
            await session.commit()
            return result.rowcount > 0
