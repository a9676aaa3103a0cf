"""
Enum definitions for the application.

These enums are used across models and provide type-safe day/category values.
"""

from enum import Enum


class DayOfWeek(str, Enum):
    """Day partition of a weekly training plan (Monday first)."""

    MONDAY = "Mo"
    TUESDAY = "Tu"
    WEDNESDAY = "We"
    THURSDAY = "Th"
    FRIDAY = "Fr"
    SATURDAY = "Sa"
    SUNDAY = "Su"

    @property
    def weekday(self) -> int:
        """0 for Monday through 6 for Sunday, like ``date.weekday()``."""
        return _WEEKDAYS.index(self)

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        return _WEEKDAYS[weekday % 7]


_WEEKDAYS = list(DayOfWeek)


class TaskCategory(str, Enum):
    """Training task category."""

    OBEDIENCE = "obedience"
    SOCIALIZATION = "socialization"
    TRICKS = "tricks"
    AGILITY = "agility"
    RECALL = "recall"
    OTHER = "other"


CATEGORY_LABELS: dict[TaskCategory, str] = {
    TaskCategory.OBEDIENCE: "Basic obedience",
    TaskCategory.SOCIALIZATION: "Socialization",
    TaskCategory.TRICKS: "Tricks",
    TaskCategory.AGILITY: "Agility",
    TaskCategory.RECALL: "Recall",
    TaskCategory.OTHER: "Other",
}
