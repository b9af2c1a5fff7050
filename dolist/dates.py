# dolist/dates.py

import datetime
from enum import Enum
from typing import Iterable, List, Optional

from .data_model import Task, today as local_today


class Timeframe(Enum):
    """Which slice of the task list to show."""
    TODAY = "today"        # due today or overdue
    TOMORROW = "tomorrow"
    WEEK = "week"          # due within the next seven days, overdue included
    ALL = "all"

    def includes(self, task: Task, today: Optional[datetime.date] = None) -> bool:
        if today is None:
            today = local_today()
        if self is Timeframe.TODAY:
            return task.date <= today
        if self is Timeframe.TOMORROW:
            return task.date == today + datetime.timedelta(days=1)
        if self is Timeframe.WEEK:
            return task.date <= today + datetime.timedelta(days=7)
        return True


def filter_tasks(
    tasks: Iterable[Task],
    timeframe: Timeframe,
    today: Optional[datetime.date] = None,
) -> List[Task]:
    """Keep the tasks in ``timeframe``, preserving their order."""
    if today is None:
        today = local_today()
    return [task for task in tasks if timeframe.includes(task, today)]
