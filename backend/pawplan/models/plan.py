"""
Weekly plan view models.
"""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from pawplan.models.enums import DayOfWeek, TaskCategory
from pawplan.models.training_task import TrainingTask


class DayPlan(BaseModel):
    """One column of the weekly plan."""

    day: DayOfWeek
    date: date
    completion_percent: int = Field(..., ge=0, le=100)
    tasks: list[TrainingTask] = Field(default_factory=list)


class WeekPlan(BaseModel):
    """Seven day columns for one pet and one calendar week."""

    pet_id: UUID
    week_start: date
    week_end: date
    offset: int = 0
    days: list[DayPlan]


class CategoryOption(BaseModel):
    """Category choice shown in the task form."""

    id: TaskCategory
    name: str


class PlanRefreshEvent(BaseModel):
    """Pushed to open views of a pet after its training tasks changed."""

    type: Literal["refresh"] = "refresh"
    pet_id: UUID
    days: list[DayOfWeek]
    changed_by: str
