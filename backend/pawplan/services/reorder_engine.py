"""
Reorder engine.

Translates one drag gesture inside a day into dense ordinals (1..N) and
writes exactly the ordinals that changed, in ascending position. A failed
write aborts the rest and resynchronizes from storage instead of rolling
back.
"""

from __future__ import annotations

import asyncio
import weakref
from dataclasses import dataclass, field
from typing import Optional, Sequence, TypeVar
from uuid import UUID

from pawplan.core.exceptions import StorageError
from pawplan.core.logger import setup_logger
from pawplan.models.enums import DayOfWeek
from pawplan.models.training_task import TrainingTask, TrainingTaskUpdate
from pawplan.services.plan_utils import find_duplicate_orders
from pawplan.services.task_store import TaskStore

logger = setup_logger(__name__)

T = TypeVar("T")

# Entries disappear once no holder or waiter references the lock.
_partition_locks: weakref.WeakValueDictionary[tuple[UUID, DayOfWeek], asyncio.Lock] = (
    weakref.WeakValueDictionary()
)


def partition_lock(pet_id: UUID, day: DayOfWeek) -> asyncio.Lock:
    """
    Process-wide lock for one (pet, day) partition.

    Held around every operation that assigns ordinals in the partition.
    """
    key = (pet_id, day)
    lock = _partition_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _partition_locks[key] = lock
    return lock


def move_item(items: Sequence[T], old_index: int, new_index: int) -> list[T]:
    """Return a copy with the item at ``old_index`` moved to ``new_index``."""
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return result


@dataclass
class ReorderPlan:
    """Outcome of a reorder before anything is written."""

    ordered: list[TrainingTask]
    changes: list[tuple[UUID, int]] = field(default_factory=list)


def compute_reorder(
    partition: Sequence[TrainingTask],
    source_task_id: UUID,
    target_task_id: UUID,
) -> Optional[ReorderPlan]:
    """
    Move the source task to the target's position and renumber densely.

    Args:
        partition: One day's tasks, sorted by order
        source_task_id: Dragged task
        target_task_id: Task it was dropped on

    Returns:
        The new ordering and the (task id, new order) pairs that differ from
        the current ordinals, or None when either id is not in the partition
        or both are the same task
    """
    ids = [task.id for task in partition]
    if source_task_id == target_task_id or source_task_id not in ids or target_task_id not in ids:
        return None

    moved = move_item(partition, ids.index(source_task_id), ids.index(target_task_id))
    ordered = [task.model_copy(update={"order": pos}) for pos, task in enumerate(moved, start=1)]
    changes = [
        (new.id, new.order)
        for new, old in zip(ordered, moved)
        if new.order != old.order
    ]
    return ReorderPlan(ordered=ordered, changes=changes)


class ReorderEngine:
    """Applies drag-and-drop reorders to a TaskStore."""

    def __init__(self, store: TaskStore):
        self.store = store

    async def reorder(
        self,
        day: DayOfWeek,
        source_task_id: UUID,
        target_task_id: UUID,
    ) -> list[TrainingTask]:
        """
        Reorder one day partition.

        Unknown ids, ids from another day and dropping a task on itself are
        no-ops.

        Returns:
            The day's tasks in their new order

        Raises:
            StorageError: A write failed; the store has been reloaded
        """
        partition = self.store.partition()[day]
        plan = compute_reorder(partition, source_task_id, target_task_id)
        if plan is None:
            logger.debug(f"Ignoring reorder {source_task_id} -> {target_task_id} on {day.value}")
            return partition

        self.store.apply_orders(dict(plan.changes))

        for task_id, order in plan.changes:
            try:
                ok = await self.store.repo.update_fields(task_id, TrainingTaskUpdate(order=order))
                if not ok:
                    raise StorageError(f"Order write for training task {task_id} was rejected")
            except StorageError as e:
                logger.error(f"Reorder on {day.value} failed at task {task_id}: {e}")
                resynced = await self._resync(day)
                raise StorageError(
                    f"Reordering failed: {e.message}",
                    details={"resynced": resynced},
                ) from e

        logger.info(f"Reordered {day.value}: {len(plan.changes)} ordinal(s) written")
        return self.store.partition()[day]

    async def _resync(self, day: DayOfWeek) -> bool:
        """Reload from storage and repair duplicate ordinals left in ``day``."""
        try:
            await self.store.load(self.store.pet_id)
        except StorageError as e:
            logger.error(f"Resync after failed reorder failed: {e}")
            return False

        if day in find_duplicate_orders(self.store.tasks):
            await self._repair(day)
        return True

    async def _repair(self, day: DayOfWeek) -> None:
        """Renumber ``day`` densely in its resynchronized order."""
        logger.warning(f"Repairing duplicate ordinals on {day.value}")
        for pos, task in enumerate(self.store.partition()[day], start=1):
            if task.order == pos:
                continue
            try:
                ok = await self.store.repo.update_fields(task.id, TrainingTaskUpdate(order=pos))
            except StorageError as e:
                logger.error(f"Ordinal repair on {day.value} stopped at task {task.id}: {e}")
                return
            if not ok:
                logger.error(f"Ordinal repair on {day.value} rejected for task {task.id}")
                return
            self.store.apply_orders({task.id: pos})
