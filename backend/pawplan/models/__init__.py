"""Domain models."""

from pawplan.models.enums import CATEGORY_LABELS, DayOfWeek, TaskCategory
from pawplan.models.pet import Pet, PetCreate
from pawplan.models.plan import CategoryOption, DayPlan, PlanRefreshEvent, WeekPlan
from pawplan.models.training_task import (
    CompletionUpdate,
    ReorderRequest,
    TaskFormInput,
    TrainingTask,
    TrainingTaskFields,
    TrainingTaskRow,
    TrainingTaskUpdate,
)

__all__ = [
    "CATEGORY_LABELS",
    "CategoryOption",
    "CompletionUpdate",
    "DayOfWeek",
    "DayPlan",
    "Pet",
    "PetCreate",
    "PlanRefreshEvent",
    "ReorderRequest",
    "TaskCategory",
    "TaskFormInput",
    "TrainingTask",
    "TrainingTaskFields",
    "TrainingTaskRow",
    "TrainingTaskUpdate",
    "WeekPlan",
]
