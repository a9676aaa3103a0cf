"""
Week navigation for the training plan.

Maps a Monday and a whole-week offset to the seven displayed dates.
"""

from datetime import date, timedelta
from typing import Optional

from pawplan.models.enums import DayOfWeek
from pawplan.utils.datetime_utils import start_of_week


class WeekNavigator:
    """Displayed week of the training plan."""

    def __init__(self, week_start: Optional[date] = None, offset: int = 0):
        """
        Args:
            week_start: Any date; snapped back to its Monday. Defaults to today.
            offset: Whole weeks added to ``week_start``
        """
        self._base = start_of_week(week_start or date.today())
        self.offset = offset

    @property
    def week_start(self) -> date:
        return self._base + timedelta(weeks=self.offset)

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)

    def dates(self) -> list[date]:
        """The seven dates of the displayed week, Monday first."""
        start = self.week_start
        return [start + timedelta(days=i) for i in range(7)]

    def date_for(self, day: DayOfWeek) -> date:
        return self.week_start + timedelta(days=day.weekday)

    def next(self) -> "WeekNavigator":
        self._base += timedelta(days=7)
        return self

    def previous(self) -> "WeekNavigator":
        self._base -= timedelta(days=7)
        return self
