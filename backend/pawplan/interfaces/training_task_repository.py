"""
Training task repository interface.

Defines the contract for training task persistence operations.
Implementations: SQLite (local), in-memory fake (tests)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from pawplan.models.training_task import TrainingTask, TrainingTaskRow, TrainingTaskUpdate


class ITrainingTaskRepository(ABC):
    """Abstract interface for training task persistence.

    Every backend failure surfaces as ``StorageError``.
    """

    @abstractmethod
    async def list_by_pet(self, pet_id: UUID) -> list[TrainingTask]:
        """
        List all tasks of a pet.

        Args:
            pet_id: Owning pet ID

        Returns:
            Tasks ordered by (day of week, order, created_at)
        """
        pass

    @abstractmethod
    async def insert(self, row: TrainingTaskRow) -> TrainingTask:
        """
        Insert a new task.

        Args:
            row: Task data without id

        Returns:
            Stored task with generated ID and creation timestamp
        """
        pass

    @abstractmethod
    async def update_fields(self, task_id: UUID, update: TrainingTaskUpdate) -> bool:
        """
        Write only the explicitly set fields of ``update``.

        Args:
            task_id: Task ID to update
            update: Partial field set

        Returns:
            True if a row was updated, False if no row matched
        """
        pass

    @abstractmethod
    async def delete(self, task_id: UUID) -> bool:
        """
        Delete a task.

        Args:
            task_id: Task ID to delete

        Returns:
            True if deleted, False if not found
        """
        pass
