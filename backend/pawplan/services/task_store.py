"""
Task store.

Holds the training tasks of the selected pet and mediates every read and
write against the training task repository. Single-record writes are
applied locally first and reverted if storage rejects them.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pawplan.core.exceptions import NotFoundError, StorageError
from pawplan.core.logger import setup_logger
from pawplan.interfaces.training_task_repository import ITrainingTaskRepository
from pawplan.models.enums import DayOfWeek
from pawplan.models.training_task import (
    TaskFormInput,
    TrainingTask,
    TrainingTaskRow,
    TrainingTaskUpdate,
)
from pawplan.services.plan_utils import next_order, partition_by_day
from pawplan.services.task_form import TaskFormController

logger = setup_logger(__name__)


class TaskStore:
    """Single source of truth for one pet's training tasks."""

    def __init__(self, repo: ITrainingTaskRepository, owner_id: str):
        """
        Args:
            repo: Persistence backend
            owner_id: Acting user, stamped on created tasks
        """
        self.repo = repo
        self.owner_id = owner_id
        self.pet_id: Optional[UUID] = None
        self._tasks: list[TrainingTask] = []

    @property
    def tasks(self) -> list[TrainingTask]:
        return list(self._tasks)

    def get(self, task_id: UUID) -> TrainingTask:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(f"Training task {task_id} not found")

    def partition(self) -> dict[DayOfWeek, list[TrainingTask]]:
        return partition_by_day(self._tasks)

    async def load(self, pet_id: UUID) -> list[TrainingTask]:
        """
        Replace the in-memory tasks with the pet's stored tasks.

        Raises:
            StorageError: Prior state is kept
        """
        try:
            tasks = await self.repo.list_by_pet(pet_id)
        except StorageError as e:
            logger.warning(f"Failed to load training tasks for pet {pet_id}: {e}")
            raise

        self.pet_id = pet_id
        self._tasks = sorted(tasks, key=lambda t: (t.day_of_week.weekday, t.order))
        return self.tasks

    async def create(
        self,
        form: TaskFormInput,
        selected_day: DayOfWeek = DayOfWeek.MONDAY,
    ) -> TrainingTask:
        """
        Validate a form and append the new task to the end of its day.

        Raises:
            ValidationError: Before any storage call
            StorageError: Nothing is added locally
        """
        pet_id = self._require_pet()
        fields = TaskFormController(selected_day).normalize(form)
        row = TrainingTaskRow(
            **fields.model_dump(),
            pet_id=pet_id,
            user_id=self.owner_id,
            completed=False,
            order=next_order(self._tasks, fields.day_of_week),
        )

        task = await self.repo.insert(row)
        self._tasks.append(task)
        logger.info(f"Created training task {task.id} on {task.day_of_week.value} (order {task.order})")
        return task

    async def update(
        self,
        task_id: UUID,
        form: TaskFormInput,
        order: Optional[int] = None,
    ) -> TrainingTask:
        """
        Apply an edit-form resubmission.

        Moving a task to another day appends it to that day (max + 1); the
        day it left is not renumbered. ``order`` is only written when given
        explicitly for a same-day edit.

        Raises:
            NotFoundError: Unknown task id
            ValidationError: Before any storage call
            StorageError: The local change is reverted
        """
        current = self.get(task_id)
        fields = TaskFormController(current.day_of_week).normalize(form)
        changes = fields.model_dump()

        if fields.day_of_week != current.day_of_week:
            changes["order"] = next_order(self._tasks, fields.day_of_week, exclude_id=task_id)
        elif order is not None:
            changes["order"] = order

        updated = current.model_copy(update=changes)
        await self._write(current, updated, TrainingTaskUpdate(**changes))
        return updated

    async def set_completed(self, task_id: UUID, completed: bool) -> TrainingTask:
        """
        Toggle completion without touching the ordinal.

        Raises:
            NotFoundError: Unknown task id
            StorageError: The local change is reverted
        """
        current = self.get(task_id)
        updated = current.model_copy(update={"completed": completed})
        await self._write(current, updated, TrainingTaskUpdate(completed=completed))
        return updated

    async def remove(self, task_id: UUID) -> None:
        """
        Delete a task. Surviving siblings keep their ordinals.

        Raises:
            NotFoundError: Unknown task id
            StorageError: Local state is unchanged
        """
        self.get(task_id)
        try:
            deleted = await self.repo.delete(task_id)
        except StorageError as e:
            logger.warning(f"Failed to delete training task {task_id}: {e}")
            raise
        if not deleted:
            raise StorageError(f"Training task {task_id} could not be deleted")

        self._tasks = [t for t in self._tasks if t.id != task_id]
        logger.info(f"Deleted training task {task_id}")

    def apply_orders(self, orders: dict[UUID, int]) -> None:
        """Set ordinals locally only; used by ReorderEngine."""
        self._tasks = [
            t.model_copy(update={"order": orders[t.id]}) if t.id in orders else t
            for t in self._tasks
        ]

    async def _write(
        self,
        current: TrainingTask,
        updated: TrainingTask,
        update: TrainingTaskUpdate,
    ) -> None:
        self._replace(updated)
        try:
            ok = await self.repo.update_fields(current.id, update)
            if not ok:
                raise StorageError(f"Training task {current.id} was rejected by storage")
        except StorageError as e:
            logger.warning(f"Reverting training task {current.id}: {e}")
            self._replace(current)
            raise

    def _replace(self, task: TrainingTask) -> None:
        self._tasks = [task if t.id == task.id else t for t in self._tasks]

    def _require_pet(self) -> UUID:
        if self.pet_id is None:
            raise NotFoundError("No pet selected; load a pet's tasks first")
        return self.pet_id
