"""
Training plan API endpoints.

Weekly training plan of a pet: task CRUD, completion toggle, drag-and-drop
reorder and the week view.
"""

from contextlib import nullcontext
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from pawplan.api.deps import CurrentUser, PetRepo, TrainingTaskRepo
from pawplan.core.exceptions import NotFoundError, PawPlanError, StorageError, ValidationError
from pawplan.models.enums import CATEGORY_LABELS, DayOfWeek
from pawplan.models.plan import CategoryOption, WeekPlan
from pawplan.models.training_task import (
    CompletionUpdate,
    ReorderRequest,
    TaskFormInput,
    TrainingTask,
)
from pawplan.services.plan_utils import build_week_plan
from pawplan.services.realtime_service import plan_events
from pawplan.services.reorder_engine import ReorderEngine, partition_lock
from pawplan.services.task_form import TaskFormController
from pawplan.services.task_store import TaskStore
from pawplan.services.week_navigator import WeekNavigator

router = APIRouter()


def _to_http_error(exc: PawPlanError) -> HTTPException:
    """Translate a domain error into an HTTP error response."""
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": exc.message, "errors": exc.field_errors},
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, StorageError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)


def _form_day(form: TaskFormInput) -> Optional[DayOfWeek]:
    """Day named by the form, or None when it is missing or not a day."""
    try:
        return DayOfWeek(form.day_of_week) if form.day_of_week else None
    except ValueError:
        return None


def _ordinal_lock(pet_id: UUID, day: Optional[DayOfWeek]):
    """Partition lock for a write that appends to ``day``; none when no day is named."""
    return partition_lock(pet_id, day) if day else nullcontext()


async def _load_store(
    user: CurrentUser,
    pet_id: UUID,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
) -> TaskStore:
    """Check pet ownership and load its tasks."""
    try:
        pet = await pet_repo.get(user.id, pet_id)
        if not pet:
            raise NotFoundError(f"Pet {pet_id} not found")
        store = TaskStore(repo, owner_id=user.id)
        await store.load(pet_id)
    except PawPlanError as e:
        raise _to_http_error(e)
    return store


@router.get("/training-categories", response_model=list[CategoryOption])
async def list_categories():
    """Category choices for the task form."""
    return [CategoryOption(id=category, name=label) for category, label in CATEGORY_LABELS.items()]


@router.get("/pets/{pet_id}/training-tasks", response_model=list[TrainingTask])
async def list_training_tasks(
    pet_id: UUID,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
):
    """All tasks of a pet, ordered by day and ordinal."""
    store = await _load_store(user, pet_id, repo, pet_repo)
    return store.tasks


@router.get("/pets/{pet_id}/training-week", response_model=WeekPlan)
async def get_training_week(
    pet_id: UUID,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
    week_start: Optional[date] = Query(None, description="Any date of the base week"),
    offset: int = Query(0, description="Whole weeks from week_start"),
):
    """Seven day columns with dates, ordered tasks and completion progress."""
    store = await _load_store(user, pet_id, repo, pet_repo)
    navigator = WeekNavigator(week_start, offset)
    return build_week_plan(pet_id, store.tasks, navigator)


@router.get("/pets/{pet_id}/training-tasks/form", response_model=TaskFormInput)
async def get_task_form(
    pet_id: UUID,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
    day: DayOfWeek = Query(DayOfWeek.MONDAY),
    task_id: Optional[UUID] = Query(None),
):
    """Initial form values for a new task on ``day`` or for editing ``task_id``."""
    controller = TaskFormController(day)
    if task_id is None:
        return controller.initial_values()

    store = await _load_store(user, pet_id, repo, pet_repo)
    try:
        return controller.initial_values(store.get(task_id))
    except NotFoundError as e:
        raise _to_http_error(e)


@router.post(
    "/pets/{pet_id}/training-tasks/reorder",
    response_model=list[TrainingTask],
)
async def reorder_training_tasks(
    pet_id: UUID,
    request: ReorderRequest,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
):
    """Apply a drag-and-drop move within one day; returns that day's tasks."""
    async with partition_lock(pet_id, request.day_of_week):
        store = await _load_store(user, pet_id, repo, pet_repo)
        engine = ReorderEngine(store)
        try:
            result = await engine.reorder(
                request.day_of_week,
                request.source_task_id,
                request.target_task_id,
            )
        except StorageError as e:
            # Partial writes may have landed; other views must reload too.
            plan_events.publish_refresh(pet_id, [request.day_of_week], user.id)
            raise _to_http_error(e)

    plan_events.publish_refresh(pet_id, [request.day_of_week], user.id)
    return result


@router.post(
    "/pets/{pet_id}/training-tasks",
    response_model=TrainingTask,
    status_code=status.HTTP_201_CREATED,
)
async def create_training_task(
    pet_id: UUID,
    form: TaskFormInput,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
    selected_day: DayOfWeek = Query(DayOfWeek.MONDAY),
):
    """Create a task at the end of its day."""
    async with partition_lock(pet_id, _form_day(form) or selected_day):
        store = await _load_store(user, pet_id, repo, pet_repo)
        try:
            task = await store.create(form, selected_day)
        except PawPlanError as e:
            raise _to_http_error(e)

    plan_events.publish_refresh(pet_id, [task.day_of_week], user.id)
    return task


@router.patch("/pets/{pet_id}/training-tasks/{task_id}", response_model=TrainingTask)
async def update_training_task(
    pet_id: UUID,
    task_id: UUID,
    form: TaskFormInput,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
):
    """Resubmit the edit form; a changed day moves the task to the end of that day."""
    async with _ordinal_lock(pet_id, _form_day(form)):
        store = await _load_store(user, pet_id, repo, pet_repo)
        try:
            previous_day = store.get(task_id).day_of_week
            task = await store.update(task_id, form)
        except PawPlanError as e:
            raise _to_http_error(e)

    plan_events.publish_refresh(pet_id, [previous_day, task.day_of_week], user.id)
    return task


@router.put("/pets/{pet_id}/training-tasks/{task_id}/completed", response_model=TrainingTask)
async def set_training_task_completed(
    pet_id: UUID,
    task_id: UUID,
    update: CompletionUpdate,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
):
    """Mark a task complete or incomplete."""
    store = await _load_store(user, pet_id, repo, pet_repo)
    try:
        task = await store.set_completed(task_id, update.completed)
    except PawPlanError as e:
        raise _to_http_error(e)

    plan_events.publish_refresh(pet_id, [task.day_of_week], user.id)
    return task


@router.delete(
    "/pets/{pet_id}/training-tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_training_task(
    pet_id: UUID,
    task_id: UUID,
    user: CurrentUser,
    repo: TrainingTaskRepo,
    pet_repo: PetRepo,
):
    """Delete a task; the remaining tasks of its day keep their ordinals."""
    store = await _load_store(user, pet_id, repo, pet_repo)
    try:
        day = store.get(task_id).day_of_week
        await store.remove(task_id)
    except PawPlanError as e:
        raise _to_http_error(e)

    plan_events.publish_refresh(pet_id, [day], user.id)
