# tests/test_dates.py

import datetime

import pytest

from dolist.data_model import Task
from dolist.dates import Timeframe, filter_tasks

TODAY = datetime.date(2024, 3, 15)


def _task(task_id: int, offset: int, complete: bool = False) -> Task:
    return Task(
        id=task_id,
        name=f"task {task_id}",
        date=TODAY + datetime.timedelta(days=offset),
        complete=complete,
    )


TASKS = [_task(1, -2), _task(2, 0), _task(3, 1), _task(4, 7), _task(5, 8), _task(6, 0, True)]


@pytest.mark.parametrize(
    "timeframe, expected",
    [
        (Timeframe.TODAY, [1, 2, 6]),
        (Timeframe.TOMORROW, [3]),
        (Timeframe.WEEK, [1, 2, 3, 4, 6]),
        (Timeframe.ALL, [1, 2, 3, 4, 5, 6]),
    ],
)
def test_filter_tasks(timeframe: Timeframe, expected: list) -> None:
    assert [t.id for t in filter_tasks(TASKS, timeframe, TODAY)] == expected


def test_timeframe_values_match_cli_choices() -> None:
    assert [t.value for t in Timeframe] == ["today", "tomorrow", "week", "all"]


def test_includes_defaults_to_local_today() -> None:
    task = Task(id=1, name="now")
    assert Timeframe.TODAY.includes(task)
    assert not Timeframe.TOMORROW.includes(task)
