"""
Shared fixtures.

``fake_repo`` is an in-memory training task backend whose calls can be
made to fail, for exercising the store's failure paths.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import UUID, uuid4

import pytest

from pawplan.core.exceptions import StorageError
from pawplan.interfaces.training_task_repository import ITrainingTaskRepository
from pawplan.models.enums import DayOfWeek, TaskCategory
from pawplan.models.training_task import TrainingTask, TrainingTaskRow, TrainingTaskUpdate

BASE_TIME = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


class InMemoryTrainingTaskRepository(ITrainingTaskRepository):
    """Training task backend held in a dict, with scripted failures."""

    def __init__(self) -> None:
        self.rows: dict[UUID, TrainingTask] = {}
        self.calls: list[tuple[str, Optional[UUID]]] = []
        self._counts: Counter[str] = Counter()
        self._failures: dict[str, set[int]] = {}

    def seed(self, *tasks: TrainingTask) -> None:
        for task in tasks:
            self.rows[task.id] = task

    def fail(self, method: str, *call_numbers: int) -> None:
        """Make the given 1-based calls of ``method`` raise StorageError."""
        self._failures.setdefault(method, set()).update(call_numbers)

    def call_count(self, method: str) -> int:
        return self._counts[method]

    def _record(self, method: str, task_id: Optional[UUID] = None) -> None:
        self._counts[method] += 1
        self.calls.append((method, task_id))
        if self._counts[method] in self._failures.get(method, set()):
            raise StorageError(f"{method} failed (call {self._counts[method]})")

    async def list_by_pet(self, pet_id: UUID) -> list[TrainingTask]:
        self._record("list_by_pet")
        tasks = [t for t in self.rows.values() if t.pet_id == pet_id]
        return sorted(tasks, key=lambda t: (t.day_of_week.weekday, t.order, t.created_at))

    async def insert(self, row: TrainingTaskRow) -> TrainingTask:
        self._record("insert")
        task = TrainingTask(
            **row.model_dump(),
            id=uuid4(),
            created_at=BASE_TIME + timedelta(seconds=len(self.rows)),
        )
        self.rows[task.id] = task
        return task

    async def update_fields(self, task_id: UUID, update: TrainingTaskUpdate) -> bool:
        self._record("update_fields", task_id)
        if task_id not in self.rows:
            return False
        self.rows[task_id] = self.rows[task_id].model_copy(
            update=update.model_dump(exclude_unset=True)
        )
        return True

    async def delete(self, task_id: UUID) -> bool:
        self._record("delete", task_id)
        return self.rows.pop(task_id, None) is not None


@pytest.fixture
def test_user_id() -> str:
    return "test_user"


@pytest.fixture
def pet_id() -> UUID:
    return uuid4()


@pytest.fixture
def fake_repo() -> InMemoryTrainingTaskRepository:
    return InMemoryTrainingTaskRepository()


@pytest.fixture
def make_task(pet_id: UUID, test_user_id: str) -> Callable[..., TrainingTask]:
    """Factory for stored tasks; ``created_at`` increases with each call."""
    counter = iter(range(10_000))

    def _make(
        title: str = "Sit",
        day: DayOfWeek = DayOfWeek.MONDAY,
        order: int = 1,
        completed: bool = False,
        **overrides,
    ) -> TrainingTask:
        values = dict(
            id=uuid4(),
            pet_id=pet_id,
            user_id=test_user_id,
            day_of_week=day,
            title=title,
            category=TaskCategory.OBEDIENCE,
            description="",
            time="09:00",
            duration_minutes=15,
            completed=completed,
            order=order,
            created_at=BASE_TIME + timedelta(minutes=next(counter)),
        )
        values.update(overrides)
        return TrainingTask(**values)

    return _make


@pytest.fixture
async def session_factory():
    """Session factory bound to an in-memory SQLite database."""
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
    from sqlalchemy.orm import sessionmaker

    from pawplan.infrastructure.local.database import Base

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
