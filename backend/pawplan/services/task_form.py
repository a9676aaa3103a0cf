"""
Task form validation.

Turns raw form input into a normalized field set, or a map of per-field
error messages. No storage is touched here.
"""

import re
from typing import Optional, Union

from pawplan.core.exceptions import ValidationError
from pawplan.models.enums import DayOfWeek, TaskCategory
from pawplan.models.training_task import (
    DESCRIPTION_MAX_LENGTH,
    MAX_DURATION_MINUTES,
    TIME_PATTERN,
    TITLE_MAX_LENGTH,
    TaskFormInput,
    TrainingTask,
    TrainingTaskFields,
)

DEFAULT_TIME = "12:00"
DEFAULT_DURATION = "30"
DEFAULT_CATEGORY = list(TaskCategory)[0]

_TIME_RE = re.compile(TIME_PATTERN)
_CATEGORY_VALUES = {c.value for c in TaskCategory}
_DAY_VALUES = {d.value for d in DayOfWeek}


class TaskFormController:
    """Validates and shapes a single task's editable fields."""

    def __init__(self, selected_day: DayOfWeek = DayOfWeek.MONDAY):
        """
        Args:
            selected_day: Day the form was opened from; used when the
                form does not name a day
        """
        self.selected_day = selected_day

    def initial_values(self, task: Optional[TrainingTask] = None) -> TaskFormInput:
        """Values the form opens with: the task's own when editing, defaults otherwise."""
        if task is None:
            return TaskFormInput(
                title="",
                category=DEFAULT_CATEGORY.value,
                description="",
                time=DEFAULT_TIME,
                duration=DEFAULT_DURATION,
                day_of_week=self.selected_day.value,
            )
        return TaskFormInput(
            title=task.title,
            category=task.category.value,
            description=task.description,
            time=task.time,
            duration=str(task.duration_minutes),
            day_of_week=task.day_of_week.value,
        )

    def validate(self, form: TaskFormInput) -> dict[str, str]:
        """
        Check a form submission.

        Returns:
            Mapping of field name to message; empty when the form is valid
        """
        errors: dict[str, str] = {}

        title = (form.title or "").strip()
        if not title:
            errors["title"] = "Title is required"
        elif len(title) > TITLE_MAX_LENGTH:
            errors["title"] = f"Title must be at most {TITLE_MAX_LENGTH} characters"

        if len(form.description or "") > DESCRIPTION_MAX_LENGTH:
            errors["description"] = f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"

        time_value = (form.time or "").strip()
        if not time_value:
            errors["time"] = "Time is required"
        elif not _TIME_RE.match(time_value):
            errors["time"] = "Time must be given as HH:MM"

        duration = _parse_duration(form.duration)
        if duration is None:
            errors["duration"] = "A valid duration is required"
        elif duration > MAX_DURATION_MINUTES:
            errors["duration"] = f"Duration must be at most {MAX_DURATION_MINUTES} minutes"

        if form.category and form.category not in _CATEGORY_VALUES:
            errors["category"] = f"Unknown category: {form.category}"

        if form.day_of_week and form.day_of_week not in _DAY_VALUES:
            errors["day_of_week"] = f"Unknown day: {form.day_of_week}"

        return errors

    def normalize(self, form: TaskFormInput) -> TrainingTaskFields:
        """
        Validate and convert a submission.

        Raises:
            ValidationError: With the per-field messages from ``validate``
        """
        errors = self.validate(form)
        if errors:
            raise ValidationError("Task form is invalid", errors)

        return TrainingTaskFields(
            title=form.title.strip(),
            category=TaskCategory(form.category) if form.category else DEFAULT_CATEGORY,
            description=form.description or "",
            time=form.time.strip(),
            duration_minutes=_parse_duration(form.duration),
            day_of_week=DayOfWeek(form.day_of_week) if form.day_of_week else self.selected_day,
        )


def _parse_duration(value: Union[int, str, None]) -> Optional[int]:
    """Positive whole minutes, or None when the value is unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = int(value)
        except ValueError:
            return None
    if not isinstance(value, int) or value <= 0:
        return None
    return value
