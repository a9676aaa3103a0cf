"""
Training plan utility functions.

Pure helpers over a flat task list: day partitions, ordinals and
completion progress. Nothing here performs I/O or mutates its input.
"""

from collections import Counter
from typing import Iterable, Optional
from uuid import UUID

from pawplan.models.enums import DayOfWeek
from pawplan.models.plan import DayPlan, WeekPlan
from pawplan.models.training_task import TrainingTask
from pawplan.services.week_navigator import WeekNavigator


def partition_by_day(tasks: Iterable[TrainingTask]) -> dict[DayOfWeek, list[TrainingTask]]:
    """
    Split tasks into per-day lists sorted by ``order``.

    All seven days are present even when empty. Equal ordinals keep their
    input order.
    """
    partitions: dict[DayOfWeek, list[TrainingTask]] = {day: [] for day in DayOfWeek}
    for task in tasks:
        partitions[task.day_of_week].append(task)
    for day_tasks in partitions.values():
        day_tasks.sort(key=lambda t: t.order)
    return partitions


def tasks_for_day(tasks: Iterable[TrainingTask], day: DayOfWeek) -> list[TrainingTask]:
    """Ordered tasks of a single day."""
    return sorted((t for t in tasks if t.day_of_week == day), key=lambda t: t.order)


def next_order(
    tasks: Iterable[TrainingTask],
    day: DayOfWeek,
    exclude_id: Optional[UUID] = None,
) -> int:
    """Ordinal for a task appended to the end of ``day`` (max + 1)."""
    orders = [t.order for t in tasks if t.day_of_week == day and t.id != exclude_id]
    return max(orders, default=0) + 1


def completion_percent(day: DayOfWeek, tasks: Iterable[TrainingTask]) -> int:
    """
    Percentage of completed tasks on ``day``, rounded half up.

    Returns 0 for a day without tasks.
    """
    day_tasks = [t for t in tasks if t.day_of_week == day]
    total = len(day_tasks)
    if total == 0:
        return 0
    done = sum(1 for t in day_tasks if t.completed)
    return (200 * done + total) // (2 * total)


def find_duplicate_orders(tasks: Iterable[TrainingTask]) -> dict[DayOfWeek, set[int]]:
    """Ordinals used more than once within a day, keyed by day."""
    counts = Counter((t.day_of_week, t.order) for t in tasks)
    duplicates: dict[DayOfWeek, set[int]] = {}
    for (day, order), count in counts.items():
        if count > 1:
            duplicates.setdefault(day, set()).add(order)
    return duplicates


def build_week_plan(
    pet_id: UUID,
    tasks: Iterable[TrainingTask],
    navigator: WeekNavigator,
) -> WeekPlan:
    """Assemble the seven day columns shown for the navigator's week."""
    task_list = list(tasks)
    partitions = partition_by_day(task_list)
    days = [
        DayPlan(
            day=day,
            date=navigator.date_for(day),
            completion_percent=completion_percent(day, task_list),
            tasks=partitions[day],
        )
        for day in DayOfWeek
    ]
    return WeekPlan(
        pet_id=pet_id,
        week_start=navigator.week_start,
        week_end=navigator.week_end,
        offset=navigator.offset,
        days=days,
    )
