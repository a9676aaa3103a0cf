"""
Training task model definitions.

A training task is one scheduled activity for a pet on a day of the week.
Tasks sharing (pet, day_of_week) form a partition ordered by ``order``.
"""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pawplan.models.enums import DayOfWeek, TaskCategory

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
TITLE_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000
MAX_DURATION_MINUTES = 24 * 60


class TrainingTaskFields(BaseModel):
    """Editable fields of a task, already validated and normalized."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Task title")
    category: TaskCategory = Field(TaskCategory.OBEDIENCE, description="Task category")
    description: str = Field("", max_length=DESCRIPTION_MAX_LENGTH, description="Free-text notes")
    time: str = Field(..., pattern=TIME_PATTERN, description="Time of day (HH:MM)")
    duration_minutes: int = Field(..., ge=1, le=MAX_DURATION_MINUTES, description="Duration in minutes")
    day_of_week: DayOfWeek = Field(..., description="Day partition")


class TrainingTaskRow(TrainingTaskFields):
    """Insert payload; the backend assigns id and created_at."""

    pet_id: UUID
    user_id: str
    completed: bool = False
    order: int = Field(..., ge=0)


class TrainingTaskUpdate(BaseModel):
    """Partial update; only explicitly set fields are written."""

    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    category: Optional[TaskCategory] = None
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    duration_minutes: Optional[int] = Field(None, ge=1, le=MAX_DURATION_MINUTES)
    day_of_week: Optional[DayOfWeek] = None
    completed: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0)


class TrainingTask(TrainingTaskRow):
    """Training task as stored."""

    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskFormInput(BaseModel):
    """Raw task form payload.

    Values arrive as typed by a user; nothing is rejected here so that
    TaskFormController can report errors per field.
    """

    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[Union[int, str]] = None
    day_of_week: Optional[str] = None


class CompletionUpdate(BaseModel):
    """Completion toggle payload."""

    completed: bool


class ReorderRequest(BaseModel):
    """Drag-end event within one day partition."""

    day_of_week: DayOfWeek
    source_task_id: UUID
    target_task_id: UUID
