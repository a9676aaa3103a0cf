"""
Unit tests for drag-and-drop reordering.
"""

import asyncio
from uuid import uuid4

import pytest

from pawplan.core.exceptions import StorageError
from pawplan.models.enums import DayOfWeek
from pawplan.services.plan_utils import find_duplicate_orders
from pawplan.services.reorder_engine import (
    ReorderEngine,
    _partition_locks,
    compute_reorder,
    move_item,
    partition_lock,
)
from pawplan.services.task_store import TaskStore


async def _loaded_store(fake_repo, pet_id, user_id) -> TaskStore:
    store = TaskStore(fake_repo, owner_id=user_id)
    await store.load(pet_id)
    return store


def _orders(store: TaskStore, day: DayOfWeek = DayOfWeek.MONDAY) -> dict:
    return {t.title: t.order for t in store.partition()[day]}


def _backend_orders(fake_repo, day: DayOfWeek = DayOfWeek.MONDAY) -> dict:
    return {t.title: t.order for t in fake_repo.rows.values() if t.day_of_week == day}


class TestMoveItem:
    """Tests for move_item."""

    def test_move_forward(self):
        assert move_item(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]

    def test_move_backward(self):
        assert move_item(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]

    def test_same_index(self):
        assert move_item(["a", "b"], 1, 1) == ["a", "b"]

    def test_input_not_mutated(self):
        items = ["a", "b", "c"]
        move_item(items, 0, 2)
        assert items == ["a", "b", "c"]


class TestComputeReorder:
    """Tests for compute_reorder."""

    def test_only_changed_ordinals_are_listed(self, make_task):
        a, b, c, d = (make_task(t, order=i) for i, t in enumerate("abcd", start=1))

        plan = compute_reorder([a, b, c, d], b.id, c.id)

        assert [t.title for t in plan.ordered] == ["a", "c", "b", "d"]
        assert plan.changes == [(c.id, 2), (b.id, 3)]

    def test_sparse_ordinals_become_dense(self, make_task):
        a, b, c = make_task("a", order=2), make_task("b", order=5), make_task("c", order=9)

        plan = compute_reorder([a, b, c], c.id, a.id)

        assert [(t.title, t.order) for t in plan.ordered] == [("c", 1), ("a", 2), ("b", 3)]
        assert plan.changes == [(c.id, 1), (b.id, 3)]

    def test_same_task_is_noop(self, make_task):
        a, b = make_task("a", order=1), make_task("b", order=2)
        assert compute_reorder([a, b], a.id, a.id) is None

    def test_unknown_id_is_noop(self, make_task):
        a, b = make_task("a", order=1), make_task("b", order=2)
        assert compute_reorder([a, b], a.id, uuid4()) is None
        assert compute_reorder([a, b], uuid4(), b.id) is None


class TestReorderEngine:
    """Tests for ReorderEngine.reorder."""

    @pytest.mark.asyncio
    async def test_move_first_to_last(self, fake_repo, make_task, pet_id, test_user_id):
        a, b, c = make_task("A", order=1), make_task("B", order=2), make_task("C", order=3)
        fake_repo.seed(a, b, c)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)

        result = await ReorderEngine(store).reorder(DayOfWeek.MONDAY, a.id, c.id)

        assert [t.title for t in result] == ["B", "C", "A"]
        assert _orders(store) == {"B": 1, "C": 2, "A": 3}
        assert _backend_orders(fake_repo) == {"B": 1, "C": 2, "A": 3}

    @pytest.mark.asyncio
    async def test_writes_in_ascending_position(self, fake_repo, make_task, pet_id, test_user_id):
        a, b, c = make_task("A", order=1), make_task("B", order=2), make_task("C", order=3)
        fake_repo.seed(a, b, c)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)

        await ReorderEngine(store).reorder(DayOfWeek.MONDAY, a.id, c.id)

        writes = [task_id for method, task_id in fake_repo.calls if method == "update_fields"]
        assert writes == [b.id, c.id, a.id]

    @pytest.mark.asyncio
    async def test_unchanged_tasks_are_not_written(self, fake_repo, make_task, pet_id, test_user_id):
        tasks = [make_task(t, order=i) for i, t in enumerate("ABCDE", start=1)]
        fake_repo.seed(*tasks)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)

        await ReorderEngine(store).reorder(DayOfWeek.MONDAY, tasks[1].id, tasks[2].id)

        assert fake_repo.call_count("update_fields") == 2
        assert _orders(store) == {"A": 1, "C": 2, "B": 3, "D": 4, "E": 5}

    @pytest.mark.asyncio
    async def test_completion_and_other_days_untouched(self, fake_repo, make_task, pet_id, test_user_id):
        a = make_task("A", order=1, completed=True)
        b = make_task("B", order=2)
        tue = make_task("T", day=DayOfWeek.TUESDAY, order=1)
        fake_repo.seed(a, b, tue)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)

        await ReorderEngine(store).reorder(DayOfWeek.MONDAY, b.id, a.id)

        assert store.get(a.id).completed is True
        assert store.get(b.id).completed is False
        assert store.get(tue.id) == tue

    @pytest.mark.asyncio
    async def test_cross_day_target_is_noop(self, fake_repo, make_task, pet_id, test_user_id):
        a, b = make_task("A", order=1), make_task("B", order=2)
        tue = make_task("T", day=DayOfWeek.TUESDAY, order=1)
        fake_repo.seed(a, b, tue)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)

        result = await ReorderEngine(store).reorder(DayOfWeek.MONDAY, a.id, tue.id)

        assert [t.title for t in result] == ["A", "B"]
        assert fake_repo.call_count("update_fields") == 0

    @pytest.mark.asyncio
    async def test_drop_on_self_is_noop(self, fake_repo, make_task, pet_id, test_user_id):
        a = make_task("A", order=1)
        fake_repo.seed(a)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)

        await ReorderEngine(store).reorder(DayOfWeek.MONDAY, a.id, a.id)

        assert fake_repo.call_count("update_fields") == 0

    @pytest.mark.asyncio
    async def test_failed_write_resyncs_without_duplicates(
        self, fake_repo, make_task, pet_id, test_user_id
    ):
        a, b, c = make_task("A", order=1), make_task("B", order=2), make_task("C", order=3)
        fake_repo.seed(a, b, c)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)
        fake_repo.fail("update_fields", 2)

        with pytest.raises(StorageError) as exc_info:
            await ReorderEngine(store).reorder(DayOfWeek.MONDAY, a.id, c.id)

        assert exc_info.value.details == {"resynced": True}
        assert fake_repo.call_count("list_by_pet") == 2
        assert find_duplicate_orders(store.tasks) == {}
        assert find_duplicate_orders(list(fake_repo.rows.values())) == {}
        assert _orders(store) == _backend_orders(fake_repo)

    @pytest.mark.asyncio
    async def test_failed_first_write_leaves_storage_unchanged(
        self, fake_repo, make_task, pet_id, test_user_id
    ):
        a, b, c = make_task("A", order=1), make_task("B", order=2), make_task("C", order=3)
        fake_repo.seed(a, b, c)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)
        fake_repo.fail("update_fields", 1)

        with pytest.raises(StorageError):
            await ReorderEngine(store).reorder(DayOfWeek.MONDAY, a.id, c.id)

        assert _orders(store) == {"A": 1, "B": 2, "C": 3}
        assert _backend_orders(fake_repo) == {"A": 1, "B": 2, "C": 3}

    @pytest.mark.asyncio
    async def test_failed_resync_is_reported(self, fake_repo, make_task, pet_id, test_user_id):
        a, b = make_task("A", order=1), make_task("B", order=2)
        fake_repo.seed(a, b)
        store = await _loaded_store(fake_repo, pet_id, test_user_id)
        fake_repo.fail("update_fields", 1)
        fake_repo.fail("list_by_pet", 2)

        with pytest.raises(StorageError) as exc_info:
            await ReorderEngine(store).reorder(DayOfWeek.MONDAY, b.id, a.id)

        assert exc_info.value.details == {"resynced": False}


class TestPartitionLock:
    """Tests for partition_lock."""

    def test_same_partition_shares_lock(self, pet_id):
        assert partition_lock(pet_id, DayOfWeek.MONDAY) is partition_lock(pet_id, DayOfWeek.MONDAY)

    def test_different_partitions_do_not(self, pet_id):
        assert partition_lock(pet_id, DayOfWeek.MONDAY) is not partition_lock(pet_id, DayOfWeek.TUESDAY)

    @pytest.mark.asyncio
    async def test_lock_is_dropped_once_unused(self, pet_id):
        async with partition_lock(pet_id, DayOfWeek.MONDAY):
            assert (pet_id, DayOfWeek.MONDAY) in _partition_locks

        assert (pet_id, DayOfWeek.MONDAY) not in _partition_locks

    @pytest.mark.asyncio
    async def test_waiter_keeps_lock_alive(self, pet_id):
        order = []

        async def hold(name):
            async with partition_lock(pet_id, DayOfWeek.MONDAY):
                order.append(f"{name} in")
                await asyncio.sleep(0)
                order.append(f"{name} out")

        await asyncio.gather(hold("first"), hold("second"))

        assert order == ["first in", "first out", "second in", "second out"]
        assert (pet_id, DayOfWeek.MONDAY) not in _partition_locks
